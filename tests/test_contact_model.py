import pytest

from contacts_db import DBHandler, models
from contacts_db.core import exceptions

from .create_units import create_contact


def test_create_contact(db: DBHandler):
    contact = models.Contact(name="Jim", telephone="0912345678", email="jim@email.com")
    assert contact.id is None

    contact = db.contacts.create(name="Jim", telephone="0912345678", email="jim@email.com")
    assert contact.id is not None
    assert contact.name == "Jim"
    assert contact.telephone == "0912345678"
    assert contact.email == "jim@email.com"

    assert db.contacts.count() == 1


def test_create_strips_fields(db: DBHandler):
    contact = db.contacts.create(name="  Jim ", telephone=" ", email=" jim@email.com ")
    assert contact.name == "Jim"
    assert contact.telephone is None
    assert contact.email == "jim@email.com"


def test_create_requires_name(db: DBHandler):
    with pytest.raises(exceptions.InvalidValue):
        db.contacts.create(name="   ")
    assert db.contacts.count() == 0
    assert db._session is None


def test_get_with_name(db: DBHandler):
    contact = create_contact(db, name="Taweerat")
    q_contact = db.contacts.get_with_name("Taweerat")

    assert q_contact is not None
    assert q_contact.id == contact.id
    assert q_contact.name == contact.name
    assert q_contact.telephone == contact.telephone
    assert q_contact.email == contact.email

    assert db.contacts.get_with_name("Taweer") is None
    assert db.contacts.get_with_name("taweerat") is None


def test_get_with_name_returns_first(db: DBHandler):
    first = create_contact(db, name="Jim")
    create_contact(db, name="Jim")

    assert db.contacts.count() == 2
    assert db.contacts.get_with_name("Jim").id == first.id


def test_get_contact(db: DBHandler):
    contact = create_contact(db)
    assert db.contacts.get(contact.id).name == contact.name
    assert db.contacts[contact.id].email == contact.email

    assert db.contacts.get(-1) is None
    with pytest.raises(exceptions.ElementDoesNotExist):
        db.contacts[-1]


def test_ids_are_unique(db: DBHandler):
    ids = [create_contact(db).id for _ in range(5)]
    assert len(set(ids)) == 5
    assert db.contacts.count() == 5


def test_iterate(db: DBHandler):
    names = [f"contact_{i}" for i in range(7)]
    for name in names:
        create_contact(db, name=name)

    it = db.contacts.iterate(batch_size=3)
    assert [contact.name for contact in it] == names
    # single pass
    assert list(it) == []
    assert db._session is None

    assert [contact.name for contact in db.contacts.iterate()] == names


def test_iterate_empty(db: DBHandler):
    assert list(db.contacts.iterate()) == []


def test_to_line(db: DBHandler):
    contact = db.contacts.create(name="Bob", telephone="222", email="b@x.com")
    assert contact.to_line() == "Bob Tele: 222 Email: <b@x.com>"

    contact = db.contacts.create(name="OnlyName")
    assert contact.to_line() == "OnlyName Tele:  Email: <>"
