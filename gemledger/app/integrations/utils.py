from __future__ import annotations

from typing import Any, Optional

import httpx

from gemledger.app.api import config


def build_httpx_client(base_url: str, headers: Optional[dict[str, str]] = None) -> httpx.Client:
    return httpx.Client(base_url=base_url, timeout=config.http_timeout(), headers=headers or {})


def get_json(client: httpx.Client, path: str, params: Optional[dict[str, Any]] = None) -> Any:
    """
    GET and decode. Non-2xx responses raise httpx.HTTPStatusError, bodies that
    are not JSON raise ValueError.
    """
    response = client.get(path, params=params)
    response.raise_for_status()
    return response.json()
