#!/usr/bin/env python

"""
    Models for LendTrack,
    item types, hierarchical categories, items and their loans.

    :copyright: (c) 2025 by AUTHORS
    :license: see LICENSE for more details
"""

import datetime
from sqlalchemy import (
    Column, String, Integer, Date, DateTime, ForeignKey, Table, JSON
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from lendtrack.core.db import Base


def utc_today():
    return datetime.datetime.now(datetime.timezone.utc).date()


item_categories = Table(
    'item_categories',
    Base.metadata,
    Column('item_id', Integer, ForeignKey('items.id', ondelete='CASCADE'), primary_key=True),
    Column('category_id', Integer, ForeignKey('categories.id', ondelete='CASCADE'), primary_key=True),
)


class ItemType(Base):
    __tablename__ = 'item_types'

    id = Column(Integer, primary_key=True)
    code = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)

    items = relationship('Item', back_populates='item_type')


class Category(Base):
    __tablename__ = 'categories'

    id = Column(Integer, primary_key=True)
    parent_id = Column(Integer, ForeignKey('categories.id', ondelete='RESTRICT'), nullable=True)
    code = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)

    parent = relationship('Category', remote_side=[id], back_populates='children')
    children = relationship('Category', back_populates='parent', order_by='Category.id')
    items = relationship('Item', secondary=item_categories, back_populates='categories')


class Item(Base):
    __tablename__ = 'items'

    id = Column(Integer, primary_key=True)
    item_type_id = Column(Integer, ForeignKey('item_types.id', ondelete='RESTRICT'), nullable=False)
    title = Column(String, nullable=False)
    requested_by = Column(String, nullable=True)
    # Points at the single open loan; NULL means the item is available
    current_loan_id = Column(
        Integer,
        ForeignKey('loans.id', ondelete='SET NULL', use_alter=True, name='items_current_loan_id_fkey'),
        unique=True,
        nullable=True,
    )
    item_metadata = Column('metadata', JSON().with_variant(JSONB(), 'postgresql'), nullable=True)
    created_at = Column(DateTime(timezone=True), default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now(), nullable=False)

    item_type = relationship('ItemType', back_populates='items')
    categories = relationship(
        'Category', secondary=item_categories, back_populates='items', order_by='Category.id')
    loans = relationship(
        'Loan', back_populates='item', foreign_keys='Loan.item_id', order_by='Loan.id',
        cascade='all, delete-orphan', passive_deletes=True)
    # Written only through conditional UPDATEs in lendtrack.core.loans
    current_loan = relationship('Loan', foreign_keys=[current_loan_id], viewonly=True)

    @hybrid_property
    def is_on_loan(self):
        """True while `current_loan_id` points at an open loan."""
        return self.current_loan_id is not None

    @is_on_loan.expression
    def is_on_loan(cls):
        return cls.current_loan_id.isnot(None)


class Loan(Base):
    __tablename__ = 'loans'

    id = Column(Integer, primary_key=True)
    item_id = Column(Integer, ForeignKey('items.id', ondelete='CASCADE'), nullable=False)
    patron_name = Column(String, nullable=False)
    checkout_date = Column(Date, default=utc_today, nullable=False)
    returned_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now(), nullable=False)

    item = relationship('Item', back_populates='loans', foreign_keys=[item_id])

    @hybrid_property
    def is_open(self):
        return self.returned_at is None

    @is_open.expression
    def is_open(cls):
        return cls.returned_at.is_(None)
