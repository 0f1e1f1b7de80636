"""
Settings for the contacts application.

Values come from a properties file of ``key=value`` lines (``contacts.config`` by
default) and can be overridden through environment variables:

    db.url         CONTACTS_DB_URL         SQLAlchemy database URL
    createtables   CONTACTS_CREATE_TABLES  create the contacts table at startup
    data.file      CONTACTS_DATA_FILE      CSV file to bulk-load at startup
"""
import os
from dataclasses import dataclass
from typing import Optional, Mapping

from dotenv import dotenv_values
from loguru import logger

DEFAULT_CONFIG_FILE = "contacts.config"

_TRUE_VALUES = {"true", "yes", "1", "on"}


def parse_bool(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class Settings:
    db_url: str = ""
    create_tables: bool = False
    data_file: Optional[str] = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Optional[str]]) -> "Settings":
        data_file = (values.get("data.file") or "").strip()
        return cls(
            db_url=(values.get("db.url") or "").strip(),
            create_tables=parse_bool(values.get("createtables")),
            data_file=data_file if data_file else None,
        )


def load_settings(path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> Settings:
    if environ is None:
        environ = os.environ

    if path is None:
        path = environ.get("CONTACTS_CONFIG", DEFAULT_CONFIG_FILE)

    if os.path.isfile(path):
        logger.debug(f"Loading settings from {path}")
        values = dict(dotenv_values(path))
    else:
        logger.warning(f"Config file '{path}' not found, using defaults.")
        values = {}

    if (db_url := environ.get("CONTACTS_DB_URL")) is not None:
        values["db.url"] = db_url

    if (create_tables := environ.get("CONTACTS_CREATE_TABLES")) is not None:
        values["createtables"] = create_tables

    if (data_file := environ.get("CONTACTS_DATA_FILE")) is not None:
        values["data.file"] = data_file

    return Settings.from_mapping(values)
