#!/usr/bin/env python

"""
    Action dispatcher for LendTrack: a single entry point taking a named
    action and its payload, validating it and running the mutation.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import logging
from pydantic import ValidationError
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from lendtrack.core import loans
from lendtrack.core.db import session as db
from lendtrack.core.models import ItemType, Category, Item
from lendtrack.core.snapshot import get_snapshot
from lendtrack.core.exceptions import (
    InvalidPayloadError,
    UnknownActionError,
    ItemNotFoundError,
    ItemTypeNotFoundError,
    CategoryNotFoundError,
    RecordNotFoundError,
    DuplicateRecordError,
)
from lendtrack.schemas import actions as schemas
from lendtrack.schemas.snapshot import Snapshot

logger = logging.getLogger(__name__)

FOREIGN_KEY_VIOLATION = "23503"


def is_foreign_key_violation(error: IntegrityError) -> bool:
    if getattr(error.orig, "pgcode", None) == FOREIGN_KEY_VIOLATION:
        return True
    return "FOREIGN KEY" in str(error.orig).upper()


class ActionDispatcher:

    ACTIONS = {
        'createItemType': (schemas.CreateItemType, 'create_item_type'),
        'createCategory': (schemas.CreateCategory, 'create_category'),
        'createItem': (schemas.CreateItem, 'create_item'),
        'linkCategory': (schemas.CategoryLink, 'link_category'),
        'unlinkCategory': (schemas.CategoryLink, 'unlink_category'),
        'checkout': (schemas.Checkout, 'checkout'),
        'return': (schemas.Return, 'return_item'),
        'deleteItem': (schemas.DeleteItem, 'delete_item'),
    }
    ALIASES = {
        'create-item-type': 'createItemType',
        'create-category': 'createCategory',
        'create-item': 'createItem',
        'link-category': 'linkCategory',
        'unlink-category': 'unlinkCategory',
        'delete-item': 'deleteItem',
    }

    @classmethod
    def resolve(cls, action):
        name = cls.ALIASES.get(action, action)
        if name not in cls.ACTIONS:
            raise UnknownActionError()
        return cls.ACTIONS[name]

    @classmethod
    def validate(cls, schema, payload):
        if not isinstance(payload, dict):
            raise InvalidPayloadError("Payload must be an object.")
        try:
            return schema.model_validate(payload)
        except ValidationError as e:
            raise InvalidPayloadError(schemas.first_error_message(e))

    @classmethod
    def execute(cls, action: str, payload: dict, db_session=None) -> Snapshot:
        """Runs `action` with `payload` and returns a fresh snapshot.

        Nothing is written when validation fails; mutations that fail
        part-way are rolled back before the error propagates.
        """
        db_session = db_session or db
        schema, handler = cls.resolve(action)
        data = cls.validate(schema, payload)
        getattr(cls, handler)(data, db_session)
        logger.debug(f"Action {action!r} applied")
        return get_snapshot(db_session)

    @classmethod
    def _commit(cls, db_session, duplicate_message=None, not_found=None):
        """Commits, turning constraint violations into domain errors.

        A foreign key violation means a referenced row vanished after it
        was looked up; it is reported with `not_found`.
        """
        try:
            db_session.commit()
        except IntegrityError as e:
            db_session.rollback()
            logger.info(f"Integrity error: {e.orig or e}")
            if is_foreign_key_violation(e):
                raise not_found or RecordNotFoundError()
            raise DuplicateRecordError(duplicate_message or "Record violates a uniqueness constraint.")
        except Exception:
            db_session.rollback()
            raise

    @classmethod
    def create_item_type(cls, data, db_session):
        db_session.add(ItemType(code=data.code, name=data.name))
        cls._commit(db_session, f"Item type code '{data.code}' already exists.")

    @classmethod
    def create_category(cls, data, db_session):
        # Categories can't be re-parented, so pointing at an existing
        # parent is enough to keep the tree acyclic
        if data.parent_id is not None and db_session.get(Category, data.parent_id) is None:
            raise CategoryNotFoundError("Parent category not found")
        db_session.add(Category(code=data.code, name=data.name, parent_id=data.parent_id))
        cls._commit(
            db_session, f"Category code '{data.code}' already exists.",
            not_found=CategoryNotFoundError("Parent category not found"))

    @classmethod
    def create_item(cls, data, db_session):
        if db_session.get(ItemType, data.item_type_id) is None:
            raise ItemTypeNotFoundError("Item type not found")
        db_session.add(Item(
            title=data.title,
            item_type_id=data.item_type_id,
            requested_by=data.requested_by,
            item_metadata=data.metadata,
        ))
        cls._commit(db_session, not_found=ItemTypeNotFoundError("Item type not found"))

    @classmethod
    def _item_and_category(cls, data, db_session):
        item = db_session.get(Item, data.item_id)
        if item is None:
            raise ItemNotFoundError()
        category = db_session.get(Category, data.category_id)
        if category is None:
            raise CategoryNotFoundError()
        return item, category

    @classmethod
    def link_category(cls, data, db_session):
        item, category = cls._item_and_category(data, db_session)
        if category not in item.categories:
            item.categories.append(category)
        cls._commit(db_session)

    @classmethod
    def unlink_category(cls, data, db_session):
        item, category = cls._item_and_category(data, db_session)
        if category in item.categories:
            item.categories.remove(category)
        cls._commit(db_session)

    @classmethod
    def checkout(cls, data, db_session):
        loans.checkout(data.item_id, data.patron_name, db_session=db_session)

    @classmethod
    def return_item(cls, data, db_session):
        loans.return_item(data.item_id, db_session=db_session)

    @classmethod
    def delete_item(cls, data, db_session):
        # Loans and category links go with the item (ON DELETE CASCADE)
        result = db_session.execute(
            delete(Item).where(Item.id == data.id).execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            db_session.rollback()
            raise ItemNotFoundError()
        cls._commit(db_session)
        logger.info(f"Item {data.id} deleted")
