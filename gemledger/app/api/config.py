from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def api_base_url() -> str | None:
    return (os.getenv("GEMLEDGER_API_URL") or "").strip() or None


def supabase_url() -> str | None:
    return (os.getenv("SUPABASE_URL") or "").strip() or None


def supabase_key() -> str | None:
    return (os.getenv("SUPABASE_ANON_KEY") or "").strip() or None


def supabase_invoice_table() -> str:
    return (os.getenv("SUPABASE_INVOICE_TABLE") or "invoices").strip()


def http_timeout() -> float:
    raw = os.getenv("GEMLEDGER_HTTP_TIMEOUT")
    try:
        return float(raw) if raw else 10.0
    except ValueError:
        return 10.0
