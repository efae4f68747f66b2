#!/usr/bin/env python
"""
    Snapshot Schemas for LendTrack,
    the read-model returned after every action and on demand.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import datetime
from typing import List, Optional, Union
from pydantic import AliasGenerator, BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel


def format_timestamp(value: Union[datetime.date, datetime.datetime, None]) -> Optional[str]:
    """Renders dates and datetimes as `YYYY-MM-DDTHH:MM:SS.mmmZ` in UTC.
    A plain date is taken as midnight UTC.
    """
    if value is None:
        return None
    if not isinstance(value, datetime.datetime):
        value = datetime.datetime(value.year, value.month, value.day)
    if value.tzinfo is not None:
        value = value.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class SnapshotModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )


class ItemType(SnapshotModel):
    id: int
    code: str
    name: str


class Category(SnapshotModel):
    id: int
    code: str
    name: str
    parent_id: Optional[int] = None


class ItemTypeRef(SnapshotModel):
    id: int
    name: str


class CategoryRef(SnapshotModel):
    id: int
    name: str


class LoanSummary(SnapshotModel):
    id: int
    patron_name: str
    checkout_date: datetime.date

    @field_serializer("checkout_date")
    def serialize_checkout_date(self, value):
        return format_timestamp(value)


class Loan(LoanSummary):
    item_id: int
    returned_at: Optional[datetime.datetime] = None

    @field_serializer("returned_at")
    def serialize_returned_at(self, value):
        return format_timestamp(value)


class Item(SnapshotModel):
    id: int
    title: str
    requested_by: Optional[str] = None
    item_type: ItemTypeRef
    categories: List[CategoryRef] = []
    current_loan: Optional[LoanSummary] = None


class Snapshot(SnapshotModel):
    item_types: List[ItemType] = []
    categories: List[Category] = []
    items: List[Item] = []

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
