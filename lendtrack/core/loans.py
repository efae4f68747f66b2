#!/usr/bin/env python

"""
    Loan state machine for LendTrack.

    An item is AVAILABLE while `items.current_loan_id` is NULL and ON_LOAN
    while it points at an open loan. Both transitions finish with a
    conditional UPDATE whose affected-row count decides whether the
    transition happened; zero rows means another request got there first,
    and the whole transaction is rolled back.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import datetime
import enum
import logging
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from lendtrack.core.db import session as db
from lendtrack.core.models import Item, Loan
from lendtrack.core.exceptions import (
    InvalidPayloadError,
    ItemNotFoundError,
    ItemAlreadyLoanedError,
    NoActiveLoanError,
    ConcurrentModificationError,
)

logger = logging.getLogger(__name__)


class LoanState(enum.Enum):
    AVAILABLE = "available"
    ON_LOAN = "on_loan"


def loan_state(item: Item) -> LoanState:
    return LoanState.ON_LOAN if item.current_loan_id is not None else LoanState.AVAILABLE


def checkout(item_id: int, patron_name: str, db_session=None) -> Loan:
    """
    Lend an available item to a patron.

    Args:
        item_id: Id of the item to lend.
        patron_name: Who is borrowing it; must not be blank.

    Returns:
        The new open Loan.

    Raises:
        InvalidPayloadError: If patron_name is blank.
        ItemNotFoundError: If the item does not exist or is deleted
            before the loan is written.
        ItemAlreadyLoanedError: If the item is on loan, including when a
            concurrent checkout committed first.
    """
    db_session = db_session or db
    if not patron_name or not patron_name.strip():
        raise InvalidPayloadError("Patron name is required.")

    exists = db_session.scalar(select(Item.id).where(Item.id == item_id))
    if exists is None:
        raise ItemNotFoundError()

    try:
        loan = Loan(item_id=item_id, patron_name=patron_name)
        db_session.add(loan)
        db_session.flush()

        result = db_session.execute(
            update(Item)
            .where(Item.id == item_id, Item.current_loan_id.is_(None))
            .values(current_loan_id=loan.id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise ItemAlreadyLoanedError()

        db_session.commit()
    except ItemAlreadyLoanedError:
        db_session.rollback()
        logger.warning(f"Checkout of item {item_id} for {patron_name!r} rejected: already on loan")
        raise
    except IntegrityError:
        # The item was deleted after the existence check
        db_session.rollback()
        logger.warning(f"Checkout of item {item_id} rejected: item removed concurrently")
        raise ItemNotFoundError()
    except Exception:
        db_session.rollback()
        raise

    logger.info(f"Item {item_id} checked out to {patron_name!r} (loan {loan.id})")
    return loan


def return_item(item_id: int, db_session=None, now=None) -> Loan:
    """
    Close the open loan of an item and make it available again.

    The loan id is read before the write phase so that a request with
    nothing to return fails fast; both writes are then gated on that id
    still being current.

    Raises:
        ItemNotFoundError: If the item does not exist.
        NoActiveLoanError: If the item is not on loan.
        ConcurrentModificationError: If the loan association changed
            between the read and the conditional writes.
    """
    db_session = db_session or db
    row = db_session.execute(
        select(Item.current_loan_id).where(Item.id == item_id)
    ).first()
    if row is None:
        raise ItemNotFoundError()
    loan_id = row.current_loan_id
    if loan_id is None:
        raise NoActiveLoanError()

    returned_at = now or datetime.datetime.now(datetime.timezone.utc)
    try:
        closed = db_session.execute(
            update(Loan)
            .where(Loan.id == loan_id, Loan.returned_at.is_(None))
            .values(returned_at=returned_at)
            .execution_options(synchronize_session=False)
        )
        if closed.rowcount == 0:
            raise ConcurrentModificationError()

        cleared = db_session.execute(
            update(Item)
            .where(Item.id == item_id, Item.current_loan_id == loan_id)
            .values(current_loan_id=None)
            .execution_options(synchronize_session=False)
        )
        if cleared.rowcount == 0:
            raise ConcurrentModificationError()

        db_session.commit()
    except ConcurrentModificationError:
        db_session.rollback()
        logger.warning(f"Return of item {item_id} (loan {loan_id}) rejected: concurrently modified")
        raise
    except Exception:
        db_session.rollback()
        raise

    logger.info(f"Item {item_id} returned (loan {loan_id})")
    return db_session.get(Loan, loan_id)


def loan_history(item_id: int, db_session=None) -> list:
    """All loans of an item, oldest first."""
    db_session = db_session or db
    if db_session.get(Item, item_id) is None:
        raise ItemNotFoundError()
    return list(db_session.scalars(
        select(Loan).where(Loan.item_id == item_id).order_by(Loan.id)
    ))
