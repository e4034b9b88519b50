from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional, Sequence

from gemledger.app.books.normalize import Invoice, normalize_invoices
from gemledger.app.integrations.base import InvoiceSource, SourceName
from gemledger.app.integrations.local_cache import LocalCacheSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchResult:
    source: Optional[SourceName]
    invoices: List[Invoice] = field(default_factory=list)
    failed_sources: List[SourceName] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.invoices


def load_invoices(
    sources: Sequence[InvoiceSource],
    *,
    cache: Optional[LocalCacheSource] = None,
    today: Optional[date] = None,
) -> FetchResult:
    """
    Try each source once, in order, and return the first one that answers.

    A failing source (network error, non-2xx, undecodable body) is logged and
    skipped. When every source fails the result is empty rather than an
    exception, so report views degrade to "no data".
    """
    failed: List[SourceName] = []

    for source in sources:
        try:
            records = source.fetch()
            invoices = normalize_invoices(records, today=today)
        except Exception as exc:
            logger.warning("Invoice source %s failed: %s", source.name, exc)
            failed.append(source.name)
            continue

        if cache is not None and source is not cache:
            cache.store(invoices)

        logger.info("Loaded %d invoices from %s", len(invoices), source.name)
        return FetchResult(source=source.name, invoices=invoices, failed_sources=failed)

    if sources:
        logger.warning("All invoice sources failed: %s", ", ".join(failed))
    return FetchResult(source=None, invoices=[], failed_sources=failed)


class RequestSequencer:
    """
    Monotonically increasing request tickets.

    A response is only applied if its ticket is newer than the last applied
    one, so a slow earlier fetch can't overwrite a faster later one.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest_issued = 0
        self._latest_applied = 0

    def issue(self) -> int:
        ticket = next(self._counter)
        self._latest_issued = ticket
        return ticket

    def is_stale(self, ticket: int) -> bool:
        return ticket <= self._latest_applied

    def apply(self, ticket: int) -> bool:
        if self.is_stale(ticket):
            return False
        self._latest_applied = ticket
        return True

    @property
    def latest_issued(self) -> int:
        return self._latest_issued


class ReportSession:
    """
    Holds the invoices behind one report view.

    State is explicit (one session per view) instead of a module-level store.
    """

    def __init__(
        self,
        sources: Sequence[InvoiceSource],
        *,
        cache: Optional[LocalCacheSource] = None,
        loader: Callable[..., FetchResult] = load_invoices,
    ) -> None:
        self.sources = list(sources)
        self.cache = cache
        self._loader = loader
        self._sequencer = RequestSequencer()
        self.current: FetchResult = FetchResult(source=None)

    def begin(self) -> int:
        return self._sequencer.issue()

    def accept(self, ticket: int, result: FetchResult) -> bool:
        if not self._sequencer.apply(ticket):
            logger.info("Discarding stale invoice response (ticket %d)", ticket)
            return False
        self.current = result
        return True

    def refresh(self, *, today: Optional[date] = None) -> FetchResult:
        ticket = self.begin()
        result = self._loader(self.sources, cache=self.cache, today=today)
        self.accept(ticket, result)
        return self.current

    @property
    def invoices(self) -> List[Invoice]:
        return list(self.current.invoices)
