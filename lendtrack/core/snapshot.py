#!/usr/bin/env python

"""
    Snapshot reader for LendTrack: every item type, category and item
    (with its type, categories and current loan) in one read-model.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

from sqlalchemy import select
from sqlalchemy.orm import selectinload
from lendtrack.core.db import session as db
from lendtrack.core.models import ItemType, Category, Item
from lendtrack.schemas import snapshot as schemas


def get_snapshot(db_session=None) -> schemas.Snapshot:
    db_session = db_session or db
    item_types = db_session.scalars(select(ItemType).order_by(ItemType.id)).all()
    categories = db_session.scalars(select(Category).order_by(Category.id)).all()
    items = db_session.scalars(
        select(Item)
        .options(
            selectinload(Item.item_type),
            selectinload(Item.categories),
            selectinload(Item.current_loan),
        )
        .order_by(Item.id)
    ).all()
    return schemas.Snapshot(
        item_types=[schemas.ItemType.model_validate(t) for t in item_types],
        categories=[schemas.Category.model_validate(c) for c in categories],
        items=[schemas.Item.model_validate(i) for i in items],
    )
