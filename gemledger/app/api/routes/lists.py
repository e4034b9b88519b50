from __future__ import annotations

from typing import Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gemledger.app.db import get_db
from gemledger.app.domain.contracts import WireModel
from gemledger.app.services import reference_service

router = APIRouter(prefix="/api/lists", tags=["lists"])


class ListItemIn(WireModel):
    name: str


class ListOut(WireModel):
    list_name: str
    items: List[str]


@router.get("", response_model=Dict[str, List[str]])
def all_lists(db: Session = Depends(get_db)):
    return reference_service.all_lists(db)


@router.get("/{list_name}", response_model=ListOut)
def get_list(list_name: str, db: Session = Depends(get_db)):
    items = reference_service.list_names(db, list_name)
    return ListOut(list_name=list_name.lower(), items=items)


@router.post("/{list_name}", response_model=ListOut, status_code=201)
def add_to_list(list_name: str, req: ListItemIn, db: Session = Depends(get_db)):
    items = reference_service.add_name(db, list_name, req.name)
    return ListOut(list_name=list_name.lower(), items=items)


@router.delete("/{list_name}/{name}", response_model=ListOut)
def remove_from_list(list_name: str, name: str, db: Session = Depends(get_db)):
    items = reference_service.remove_name(db, list_name, name)
    return ListOut(list_name=list_name.lower(), items=items)
