#!/usr/bin/env python
"""
    Action payload schemas for LendTrack,
    one model per action accepted by the dispatcher.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

from typing import Annotated, Any, Optional
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator


def required_text(message: str):
    def check(value):
        if not isinstance(value, str) or not value.strip():
            raise ValueError(message)
        return value
    return BeforeValidator(check)

def as_id(value, message):
    # bool is an int subclass; JSON true/false are not ids
    if isinstance(value, bool):
        raise ValueError(message)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if not isinstance(value, int):
        raise ValueError(message)
    return value

def required_id(message: str):
    return BeforeValidator(lambda value: as_id(value, message))

def optional_id(message: str):
    return BeforeValidator(lambda value: None if value is None else as_id(value, message))


ItemId = Annotated[int, required_id("Item ID is required and must be a number.")]
CategoryId = Annotated[int, required_id("Category ID is required and must be a number.")]


class ActionPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')


class CreateItemType(ActionPayload):
    code: Annotated[str, required_text("Item type code is required.")] = Field(None, validate_default=True)
    name: Annotated[str, required_text("Item type name is required.")] = Field(None, validate_default=True)


class CreateCategory(ActionPayload):
    code: Annotated[str, required_text("Category code is required.")] = Field(None, validate_default=True)
    name: Annotated[str, required_text("Category name is required.")] = Field(None, validate_default=True)
    parent_id: Annotated[Optional[int], optional_id("Parent category ID must be a number.")] = Field(
        None, alias="parentId")


class CreateItem(ActionPayload):
    title: Annotated[str, required_text("Item title is required.")] = Field(None, validate_default=True)
    item_type_id: Annotated[int, required_id("Item type ID is required and must be a number.")] = Field(
        None, alias="itemTypeId", validate_default=True)
    requested_by: Optional[str] = Field(None, alias="requestedBy")
    metadata: Optional[Any] = None

    @field_validator("requested_by")
    @classmethod
    def blank_requester_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class CategoryLink(ActionPayload):
    item_id: ItemId = Field(None, alias="itemId", validate_default=True)
    category_id: CategoryId = Field(None, alias="categoryId", validate_default=True)


class Checkout(ActionPayload):
    item_id: ItemId = Field(None, alias="itemId", validate_default=True)
    patron_name: Annotated[str, required_text("Patron name is required.")] = Field(
        None, alias="patronName", validate_default=True)


class Return(ActionPayload):
    item_id: ItemId = Field(None, alias="itemId", validate_default=True)


class DeleteItem(ActionPayload):
    id: ItemId = Field(None, validate_default=True)


def first_error_message(exc) -> str:
    """Human readable message of the first pydantic error."""
    errors = exc.errors()
    if not errors:
        return "Invalid payload."
    error = errors[0]
    cause = (error.get("ctx") or {}).get("error")
    if cause is not None:
        return str(cause)
    return error.get("msg", "Invalid payload.")
