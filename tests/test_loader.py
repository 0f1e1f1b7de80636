import pytest

from contacts_db import DBHandler
from contacts_db.core import exceptions
from contacts_db.loader import load_contacts, parse_line


def test_parse_line():
    assert parse_line("Alice,111,a@x.com") == ("Alice", "111", "a@x.com")
    assert parse_line("  Alice ,  111,a@x.com  ") == ("Alice", "111", "a@x.com")
    assert parse_line("Bob,,") == ("Bob", "", "")
    assert parse_line("OnlyName") is None
    assert parse_line("a,b,c,d") is None
    assert parse_line(",111,a@x.com") is None


def test_load_contacts(db: DBHandler, csv_file):
    path = csv_file(
        "# name, telephone, email",
        "Alice,111,a@x.com",
        "",
        "Bob , 222 , b@x.com",
        "Alicia,333,c@x.com",
    )
    report = load_contacts(db, path)

    assert report.inserted == 3
    assert report.duplicates == 0
    assert report.malformed == 0
    assert db.contacts.count() == 3

    bob = db.contacts.get_with_name("Bob")
    assert bob is not None
    assert bob.telephone == "222"
    assert bob.email == "b@x.com"

    assert [c.name for c in db.contacts.find_by_prefix("Ali")] == ["Alice", "Alicia"]


def test_load_twice_is_idempotent(db: DBHandler, csv_file):
    path = csv_file("Alice,111,a@x.com", "Bob,222,b@x.com", "Alicia,333,c@x.com")

    load_contacts(db, path)
    count = db.contacts.count()

    report = load_contacts(db, path)
    assert report.inserted == 0
    assert report.duplicates == 3
    assert db.contacts.count() == count == 3


def test_load_skips_duplicates_within_file(db: DBHandler, csv_file):
    path = csv_file("Alice,111,a@x.com", "Alice,999,other@x.com")

    report = load_contacts(db, path)
    assert report.inserted == 1
    assert report.duplicates == 1
    assert db.contacts.get_with_name("Alice").telephone == "111"


def test_load_skips_existing_contacts(db: DBHandler, csv_file):
    db.contacts.create(name="Alice", telephone="000")
    path = csv_file("Alice,111,a@x.com", "Bob,222,b@x.com")

    report = load_contacts(db, path)
    assert report.inserted == 1
    assert report.duplicates == 1
    assert db.contacts.count() == 2


def test_load_malformed_lines(db: DBHandler, csv_file):
    path = csv_file(
        "Alice,111,a@x.com",
        "OnlyName",
        "Too,many,fields,here",
        "Bob,,",
    )
    report = load_contacts(db, path)

    assert report.inserted == 2
    assert report.malformed == 2
    assert db.contacts.count() == 2

    bob = db.contacts.get_with_name("Bob")
    assert bob.telephone is None
    assert bob.email is None


def test_load_missing_file(db: DBHandler, tmp_path):
    with pytest.raises(exceptions.DataFileNotFound):
        load_contacts(db, str(tmp_path / "missing.csv"))
    assert db.contacts.count() == 0


def test_load_storage_error_rolls_back(db: DBHandler, csv_file):
    path = csv_file("Alice,111,a@x.com", "Bob,222,b@x.com")
    db.contacts.create(name="Zed")

    with db.connection.begin():
        db.connection.exec_driver_sql("CREATE TRIGGER no_bobs BEFORE INSERT ON contacts WHEN NEW.name LIKE 'B%' BEGIN SELECT RAISE(ABORT, 'no bobs'); END")

    with pytest.raises(exceptions.StorageError):
        load_contacts(db, path)

    assert db._session is None
    assert [c.name for c in db.contacts.find()] == ["Zed"]


def test_load_skips_undecodable_lines(db: DBHandler, tmp_path):
    path = tmp_path / "contacts.csv"
    path.write_bytes(b"Alice,111,a@x.com\nB\xffob,222,b@x.com\nCarol,333,c@x.com\n")

    report = load_contacts(db, str(path))
    assert report.inserted == 2
    assert report.malformed == 1
    assert [c.name for c in db.contacts.find()] == ["Alice", "Carol"]
