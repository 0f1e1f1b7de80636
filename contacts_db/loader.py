import os
import re
from dataclasses import dataclass

from loguru import logger

from .core.DBHandler import DBHandler
from .core.DBSession import DBSession
from .core import exceptions

FIELD_SEPARATOR = re.compile(r"\s*,\s*")
NUM_FIELDS = 3


@dataclass
class LoadReport:
    inserted: int = 0
    duplicates: int = 0
    malformed: int = 0


def parse_line(line: str) -> tuple[str, str, str] | None:
    """ Returns (name, telephone, email), or None if the line is not a contact record. """
    fields = FIELD_SEPARATOR.split(line.strip())
    if len(fields) != NUM_FIELDS or not fields[0]:
        return None
    name, telephone, email = fields
    return name, telephone, email


def load_contacts(db: DBHandler, path: str) -> LoadReport:
    """
    Inserts every contact from `path` whose name is not in the database yet.

    Blank lines and lines starting with '#' are ignored. Lines that do not hold
    exactly three comma separated fields are skipped with a warning.

    Raises:
        DataFileNotFound: if `path` does not exist, nothing is inserted.
        StorageError: if the database fails, the whole load is rolled back.
    """
    if not os.path.isfile(path):
        logger.error(f"Data file '{path}' not found.")
        raise exceptions.DataFileNotFound(f"Data file '{path}' not found.")

    report = LoadReport()

    with open(path, "rb") as f, DBSession(db, commit=True):
        for line_no, raw in enumerate(f, start=1):
            try:
                line = raw.decode("utf-8").strip()
            except UnicodeDecodeError as e:
                logger.warning(f"{path}:{line_no}: not valid UTF-8 ({e.reason}), skipping")
                report.malformed += 1
                continue

            if not line or line.startswith("#"):
                continue

            if (record := parse_line(line)) is None:
                logger.warning(f"{path}:{line_no}: expected 'name,telephone,email', skipping '{line}'")
                report.malformed += 1
                continue

            name, telephone, email = record
            if db.contacts.get_with_name(name) is not None:
                logger.debug(f"{path}:{line_no}: contact '{name}' already exists, skipping")
                report.duplicates += 1
                continue

            db.contacts.create(name=name, telephone=telephone, email=email)
            report.inserted += 1

    logger.info(
        f"Loaded '{path}': {report.inserted} inserted, "
        f"{report.duplicates} duplicates, {report.malformed} malformed lines skipped."
    )
    return report
