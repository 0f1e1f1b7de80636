import pytest

from contacts_db import DBHandler, logger


@pytest.fixture(scope="function")  # type: ignore
def db(tmp_path) -> DBHandler:
    _db = DBHandler(logger=logger)
    _db.connect(f"sqlite:///{tmp_path / 'contacts.db'}")
    _db.create_tables()
    yield _db
    _db.close_connection()


@pytest.fixture(scope="function")  # type: ignore
def csv_file(tmp_path):
    def write(*lines: str) -> str:
        path = tmp_path / "contacts.csv"
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)
    return write
