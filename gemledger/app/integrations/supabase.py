from __future__ import annotations

from typing import Any, List, Optional

import httpx

from gemledger.app.api import config
from gemledger.app.books.normalize import unwrap_invoice_records
from gemledger.app.integrations.base import SourceError
from gemledger.app.integrations.utils import build_httpx_client, get_json


def supabase_is_configured() -> bool:
    return bool(config.supabase_url() and config.supabase_key())


class SupabaseSource:
    """
    Backing-store query over Supabase's PostgREST endpoint.

    Returns raw table rows; they go through the same normalizer as API data.
    """

    name = "supabase"

    def __init__(
        self,
        *,
        url: Optional[str] = None,
        key: Optional[str] = None,
        table: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.url = url or config.supabase_url()
        self.key = key or config.supabase_key()
        self.table = table or config.supabase_invoice_table()
        self._client = client

    def _headers(self) -> dict[str, str]:
        if not self.key:
            raise SourceError("SUPABASE_ANON_KEY is not configured.")
        return {"apikey": self.key, "Authorization": f"Bearer {self.key}"}

    def fetch(self) -> List[Any]:
        if self._client is not None:
            return self._fetch(self._client)
        if not self.url:
            raise SourceError("SUPABASE_URL is not configured.")
        with build_httpx_client(self.url.rstrip("/"), headers=self._headers()) as client:
            return self._fetch(client)

    def _fetch(self, client: httpx.Client) -> List[Any]:
        payload = get_json(
            client,
            f"/rest/v1/{self.table}",
            params={"select": "*", "order": "date.asc"},
        )
        return unwrap_invoice_records(payload)
