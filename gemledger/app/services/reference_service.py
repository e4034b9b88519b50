from __future__ import annotations

import logging
from typing import List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from gemledger.app.models import REFERENCE_LISTS, ReferenceItem

logger = logging.getLogger(__name__)


def require_list(list_name: str) -> str:
    key = (list_name or "").strip().lower()
    if key not in REFERENCE_LISTS:
        raise HTTPException(status_code=404, detail=f"unknown list: {list_name}")
    return key


def list_names(db: Session, list_name: str) -> List[str]:
    key = require_list(list_name)
    stmt = (
        select(ReferenceItem.name)
        .where(ReferenceItem.list_name == key)
        .order_by(ReferenceItem.name)
    )
    return list(db.execute(stmt).scalars().all())


def add_name(db: Session, list_name: str, name: str) -> List[str]:
    """Add a value; adding one that already exists is a no-op."""
    key = require_list(list_name)
    value = (name or "").strip()
    if not value:
        raise HTTPException(status_code=400, detail="name is required")

    exists = db.execute(
        select(ReferenceItem.id).where(ReferenceItem.list_name == key, ReferenceItem.name == value)
    ).scalar_one_or_none()
    if exists is None:
        db.add(ReferenceItem(list_name=key, name=value))
        db.commit()
        logger.info("Added %r to %s", value, key)
    return list_names(db, key)


def remove_name(db: Session, list_name: str, name: str) -> List[str]:
    key = require_list(list_name)
    value = (name or "").strip()
    item = db.execute(
        select(ReferenceItem).where(ReferenceItem.list_name == key, ReferenceItem.name == value)
    ).scalar_one_or_none()
    if item is not None:
        db.delete(item)
        db.commit()
        logger.info("Removed %r from %s", value, key)
    return list_names(db, key)


def all_lists(db: Session) -> dict[str, List[str]]:
    return {key: list_names(db, key) for key in REFERENCE_LISTS}
