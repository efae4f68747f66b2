import datetime

from lendtrack.core import seed
from lendtrack.core.loans import checkout, return_item
from lendtrack.core.models import Item
from lendtrack.core.snapshot import get_snapshot
from lendtrack.schemas.snapshot import format_timestamp


def test_empty_snapshot(db_session):
    assert get_snapshot(db_session).to_json() == {"itemTypes": [], "categories": [], "items": []}

def test_snapshot_shape(db_session, catalog):
    item = db_session.get(Item, catalog["item_id"])
    item.requested_by = "Paul"
    db_session.commit()
    checkout(catalog["item_id"], "Bob", db_session=db_session)

    data = get_snapshot(db_session).to_json()

    assert data["itemTypes"] == [{"id": catalog["item_type_id"], "code": "BOOK", "name": "Book"}]
    assert data["categories"] == [
        {"id": catalog["fiction_id"], "code": "FICT", "name": "Fiction", "parentId": None},
        {"id": catalog["scifi_id"], "code": "SCIFI", "name": "Science Fiction",
         "parentId": catalog["fiction_id"]},
    ]
    [entry] = data["items"]
    assert entry["id"] == catalog["item_id"]
    assert entry["title"] == "Dune"
    assert entry["requestedBy"] == "Paul"
    assert entry["itemType"] == {"id": catalog["item_type_id"], "name": "Book"}
    assert entry["categories"] == []
    assert entry["currentLoan"]["patronName"] == "Bob"
    today = datetime.datetime.now(datetime.timezone.utc).date()
    assert entry["currentLoan"]["checkoutDate"] == f"{today.isoformat()}T00:00:00.000Z"

def test_snapshot_follows_loan_state(db_session, catalog):
    item_id = catalog["item_id"]
    checkout(item_id, "Bob", db_session=db_session)
    assert get_snapshot(db_session).items[0].current_loan.patron_name == "Bob"

    return_item(item_id, db_session=db_session)
    assert get_snapshot(db_session).items[0].current_loan is None

def test_items_are_ordered_by_id(db_session, catalog):
    for title in ("Neuromancer", "Hyperion"):
        db_session.add(Item(title=title, item_type_id=catalog["item_type_id"]))
    db_session.commit()

    ids = [item.id for item in get_snapshot(db_session).items]
    assert ids == sorted(ids)
    assert len(ids) == 3

def test_seeded_snapshot(db_session):
    seed.load(db_session)
    data = get_snapshot(db_session).to_json()

    assert [t["code"] for t in data["itemTypes"]] == ["BOOK", "ELEC"]
    fiction, scifi = data["categories"]
    assert scifi["parentId"] == fiction["id"]
    hitchhiker, laptop, learning = data["items"]
    assert hitchhiker["currentLoan"]["patronName"] == "Arthur Dent"
    assert hitchhiker["currentLoan"]["checkoutDate"] == "2025-08-01T00:00:00.000Z"
    assert [c["name"] for c in hitchhiker["categories"]] == ["Fiction", "Science Fiction"]
    assert laptop["requestedBy"] == "Ford Prefect"
    assert laptop["currentLoan"] is None
    assert learning["itemType"]["name"] == "Book"

def test_format_timestamp():
    assert format_timestamp(None) is None
    assert format_timestamp(datetime.date(2025, 8, 1)) == "2025-08-01T00:00:00.000Z"
    assert format_timestamp(datetime.datetime(2025, 8, 1, 10, 0, 5, 123456)) == "2025-08-01T10:00:05.123Z"
    cest = datetime.timezone(datetime.timedelta(hours=2))
    assert format_timestamp(datetime.datetime(2025, 8, 1, 12, 0, tzinfo=cest)) == "2025-08-01T10:00:00.000Z"
