#!/usr/bin/env python

"""
    Demo data set for LendTrack.

    Records carry their own reference ids; `load` maps them onto the ids
    the database assigns, creating items first and pointing them at their
    open loans once those exist.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import datetime
import logging
from sqlalchemy import delete, update
from lendtrack.core.db import session as db
from lendtrack.core.models import ItemType, Category, Item, Loan

logger = logging.getLogger(__name__)

UTC = datetime.timezone.utc

ITEM_TYPES = [
    {"id": 1, "code": "BOOK", "name": "Book"},
    {"id": 2, "code": "ELEC", "name": "Electronics"},
]

CATEGORIES = [
    {"id": 101, "code": "FICT", "name": "Fiction", "parent_id": None},
    {"id": 102, "code": "SCIFI", "name": "Science Fiction", "parent_id": 101},
]

ITEMS = [
    {
        "id": 1,
        "title": "The Hitchhiker's Guide to the Galaxy",
        "item_type_id": 1,
        "requested_by": None,
        "current_loan_id": 1001,
        "categories": [101, 102],
        "created_at": datetime.datetime(2025, 7, 30, 10, 0, tzinfo=UTC),
    },
    {
        "id": 2,
        "title": "Laptop Pro X",
        "item_type_id": 2,
        "requested_by": "Ford Prefect",
        "current_loan_id": None,
        "categories": [],
        "created_at": datetime.datetime(2025, 7, 30, 11, 0, tzinfo=UTC),
    },
    {
        "id": 3,
        "title": "Learning SQLAlchemy",
        "item_type_id": 1,
        "requested_by": None,
        "current_loan_id": None,
        "categories": [101],
        "created_at": datetime.datetime(2025, 7, 30, 12, 0, tzinfo=UTC),
    },
]

LOANS = [
    {
        "id": 1001,
        "item_id": 1,
        "patron_name": "Arthur Dent",
        "checkout_date": datetime.date(2025, 8, 1),
        "returned_at": None,
        "created_at": datetime.datetime(2025, 8, 1, 9, 0, tzinfo=UTC),
    },
]


def clear(db_session=None):
    db_session = db_session or db
    statements = [
        update(Item).values(current_loan_id=None),
        delete(Loan),
        delete(Item),
        # Detach the tree so RESTRICT on parent_id can't block the delete
        update(Category).values(parent_id=None),
        delete(Category),
        delete(ItemType),
    ]
    for statement in statements:
        db_session.execute(statement.execution_options(synchronize_session=False))
    # Rows are gone and ids may be handed out again
    db_session.expunge_all()


def load(db_session=None, reset=True) -> dict:
    """Seeds the demo records and returns how many of each were created."""
    db_session = db_session or db
    try:
        if reset:
            logger.info("Clearing existing data...")
            clear(db_session)

        type_ids, category_ids, item_ids, loan_ids = {}, {}, {}, {}

        for record in ITEM_TYPES:
            item_type = ItemType(code=record["code"], name=record["name"])
            db_session.add(item_type)
            db_session.flush()
            type_ids[record["id"]] = item_type.id

        for record in CATEGORIES:
            category = Category(
                code=record["code"],
                name=record["name"],
                parent_id=category_ids.get(record["parent_id"]),
            )
            db_session.add(category)
            db_session.flush()
            category_ids[record["id"]] = category.id

        for record in ITEMS:
            item = Item(
                title=record["title"],
                item_type_id=type_ids[record["item_type_id"]],
                requested_by=record["requested_by"],
                created_at=record["created_at"],
                updated_at=record["created_at"],
            )
            item.categories = [db_session.get(Category, category_ids[c]) for c in record["categories"]]
            db_session.add(item)
            db_session.flush()
            item_ids[record["id"]] = item.id

        for record in LOANS:
            loan = Loan(
                item_id=item_ids[record["item_id"]],
                patron_name=record["patron_name"],
                checkout_date=record["checkout_date"],
                returned_at=record["returned_at"],
                created_at=record["created_at"],
                updated_at=record["created_at"],
            )
            db_session.add(loan)
            db_session.flush()
            loan_ids[record["id"]] = loan.id

        for record in ITEMS:
            if record["current_loan_id"]:
                db_session.execute(
                    update(Item)
                    .where(Item.id == item_ids[record["id"]])
                    .values(current_loan_id=loan_ids[record["current_loan_id"]])
                    .execution_options(synchronize_session=False)
                )

        db_session.commit()
    except Exception:
        db_session.rollback()
        raise

    counts = {
        "item_types": len(type_ids),
        "categories": len(category_ids),
        "items": len(item_ids),
        "loans": len(loan_ids),
    }
    logger.info(f"Seeded {counts}")
    return counts
