import pytest
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from lendtrack.core.models import ItemType, Category, Item, Loan, utc_today

def test_category_tree(db_session, catalog):
    fiction = db_session.get(Category, catalog["fiction_id"])
    scifi = db_session.get(Category, catalog["scifi_id"])
    assert scifi.parent is fiction
    assert fiction.children == [scifi]

def test_item_type_code_is_unique(db_session, catalog):
    db_session.add(ItemType(code="BOOK", name="Paperback"))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()

def test_item_requires_existing_type(db_session):
    db_session.add(Item(title="Orphan", item_type_id=77))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()

def test_current_loan_pointer_is_unique(db_session, catalog):
    other = Item(title="Hyperion", item_type_id=catalog["item_type_id"])
    loan = Loan(item_id=catalog["item_id"], patron_name="Bob")
    db_session.add_all([other, loan])
    db_session.flush()
    db_session.execute(update(Item).where(Item.id == catalog["item_id"]).values(current_loan_id=loan.id))

    with pytest.raises(IntegrityError):
        db_session.execute(update(Item).where(Item.id == other.id).values(current_loan_id=loan.id))
    db_session.rollback()

def test_loan_defaults(db_session, catalog):
    loan = Loan(item_id=catalog["item_id"], patron_name="Bob")
    db_session.add(loan)
    db_session.commit()
    assert loan.checkout_date == utc_today()
    assert loan.is_open
    assert loan.created_at is not None

def test_deleting_item_deletes_its_loans(db_session, catalog):
    item = db_session.get(Item, catalog["item_id"])
    item.loans.append(Loan(patron_name="Bob"))
    item.categories.append(db_session.get(Category, catalog["fiction_id"]))
    db_session.commit()

    db_session.delete(item)
    db_session.commit()

    assert db_session.scalars(select(Loan)).all() == []
    assert db_session.get(Category, catalog["fiction_id"]) is not None
