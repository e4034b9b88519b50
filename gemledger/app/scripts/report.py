from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from gemledger.app.books.filters import ReportCriteria
from gemledger.app.integrations import cache_from_file, default_sources
from gemledger.app.services.fetch_orchestrator import ReportSession
from gemledger.app.services.report_service import REPORT_KINDS, build_report


def _write_cache(path: Optional[Path], session: ReportSession) -> None:
    if path is None or session.cache is None or session.current.source in (None, session.cache.name):
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump({"invoices": session.cache.fetch()}, f, indent=2)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Print an invoice report as JSON.")
    parser.add_argument("kind", choices=REPORT_KINDS, help="Report to build")
    parser.add_argument("--api-url", help="Primary source: invoice API base URL")
    parser.add_argument("--supabase-url", help="Secondary source: Supabase project URL")
    parser.add_argument("--supabase-key", help="Supabase anon key")
    parser.add_argument("--cache-file", type=Path, help="Tertiary source: JSON snapshot (refreshed on success)")
    parser.add_argument("--from", dest="date_from", help="Inclusive start date")
    parser.add_argument("--to", dest="date_to", help="Inclusive end date")
    parser.add_argument("--party", help="Party name (substring, case-insensitive; exact for partywise-statement)")
    parser.add_argument("--type", dest="transaction_type", help="Transaction type (exact)")
    parser.add_argument("--source", help="Source tag (exact)")
    parser.add_argument("--sell-id", help="Sell id (exact)")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cache = cache_from_file(args.cache_file)
    sources = default_sources(
        api_url=args.api_url,
        supabase_url=args.supabase_url,
        supabase_key=args.supabase_key,
        cache=cache,
    )
    session = ReportSession(sources, cache=cache)
    result = session.refresh()
    _write_cache(args.cache_file, session)

    criteria = ReportCriteria(
        date_from=args.date_from,
        date_to=args.date_to,
        party=args.party,
        transaction_type=args.transaction_type,
        source=args.source,
        sell_id=args.sell_id,
    )
    try:
        report = build_report(args.kind, result.invoices, criteria)
    except ValueError as exc:
        parser.error(str(exc))

    print(json.dumps(report.model_dump(mode="json", by_alias=True), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
