from sqlalchemy import select, func
from lendtrack.core import seed
from lendtrack.core.models import ItemType, Category, Item, Loan

def count(db_session, model):
    return db_session.scalar(select(func.count()).select_from(model))

def test_load_counts(db_session):
    assert seed.load(db_session) == {"item_types": 2, "categories": 2, "items": 3, "loans": 1}

def test_load_resets_existing_data(db_session, catalog):
    seed.load(db_session)
    seed.load(db_session)

    assert count(db_session, ItemType) == 2
    assert count(db_session, Category) == 2
    assert count(db_session, Item) == 3
    assert count(db_session, Loan) == 1
    assert db_session.scalar(select(Item).where(Item.title == "Dune")) is None

def test_seeded_loan_is_current(db_session):
    seed.load(db_session)
    item = db_session.scalar(select(Item).where(Item.is_on_loan))
    assert item.title == "The Hitchhiker's Guide to the Galaxy"
    assert item.current_loan.patron_name == "Arthur Dent"
    assert item.current_loan.is_open
