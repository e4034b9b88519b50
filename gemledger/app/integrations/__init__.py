from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from gemledger.app.api import config
from gemledger.app.integrations.base import InvoiceSource, SourceError, SourceName
from gemledger.app.integrations.local_cache import LocalCacheSource
from gemledger.app.integrations.rest_api import RestApiSource
from gemledger.app.integrations.supabase import SupabaseSource, supabase_is_configured


def default_sources(
    *,
    api_url: Optional[str] = None,
    supabase_url: Optional[str] = None,
    supabase_key: Optional[str] = None,
    cache: Optional[LocalCacheSource] = None,
) -> List[InvoiceSource]:
    """
    Primary REST API, then Supabase, then the local cache. Remote sources
    that are not configured are left out of the chain.
    """
    sources: List[InvoiceSource] = []
    if api_url or config.api_base_url():
        sources.append(RestApiSource(base_url=api_url))
    if (supabase_url and supabase_key) or supabase_is_configured():
        sources.append(SupabaseSource(url=supabase_url, key=supabase_key))
    if cache is not None:
        sources.append(cache)
    return sources


def cache_from_file(path: Optional[Path]) -> LocalCacheSource:
    if path is None or not path.exists():
        return LocalCacheSource()
    return LocalCacheSource.from_file(path)


__all__ = [
    "InvoiceSource",
    "LocalCacheSource",
    "RestApiSource",
    "SourceError",
    "SourceName",
    "SupabaseSource",
    "cache_from_file",
    "default_sources",
]
