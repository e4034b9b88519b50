from __future__ import annotations

from typing import Any, List, Optional

import httpx

from gemledger.app.api import config
from gemledger.app.books.normalize import unwrap_invoice_records
from gemledger.app.integrations.base import SourceError
from gemledger.app.integrations.utils import build_httpx_client, get_json


class RestApiSource:
    """
    Our own invoice API: GET {base_url}/api/invoices -> {"invoices": [...]}.
    """

    name = "rest_api"

    def __init__(self, *, base_url: Optional[str] = None, client: Optional[httpx.Client] = None):
        self.base_url = base_url or config.api_base_url()
        self._client = client

    def fetch(self) -> List[Any]:
        if self._client is not None:
            return self._fetch(self._client)
        if not self.base_url:
            raise SourceError("GEMLEDGER_API_URL is not configured.")
        with build_httpx_client(self.base_url) as client:
            return self._fetch(client)

    def _fetch(self, client: httpx.Client) -> List[Any]:
        return unwrap_invoice_records(get_json(client, "/api/invoices"))
