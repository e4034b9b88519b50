def test_reference_list_crud(api_client):
    assert api_client.get("/api/lists/shapes").json() == {"listName": "shapes", "items": []}

    api_client.post("/api/lists/shapes", json={"name": "Round"})
    api_client.post("/api/lists/shapes", json={"name": "Oval"})
    res = api_client.post("/api/lists/shapes", json={"name": " Round "})

    assert res.status_code == 201
    assert res.json()["items"] == ["Oval", "Round"]

    res = api_client.delete("/api/lists/shapes/Oval")
    assert res.status_code == 200
    assert res.json()["items"] == ["Round"]

    all_lists = api_client.get("/api/lists").json()
    assert set(all_lists) == {"lot_names", "shapes", "sizes", "descriptions", "grades"}
    assert all_lists["shapes"] == ["Round"]
    assert all_lists["grades"] == []


def test_reference_list_errors(api_client):
    assert api_client.get("/api/lists/colours").status_code == 404
    assert api_client.post("/api/lists/grades", json={"name": "   "}).status_code == 400
    assert api_client.delete("/api/lists/grades/missing").json()["items"] == []
