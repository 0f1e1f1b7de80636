import argparse
import os
import sys
from typing import Optional, Sequence

from . import logger, setup_file_logging
from .config import load_settings
from .core.DBHandler import DBHandler
from .core import exceptions
from .loader import load_contacts
from .console import QueryLoop, print_all_contacts


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contacts-db",
        description="Store contacts in a database and query them by name."
    )
    parser.add_argument("--config", type=str, default=None, help="properties file (default: contacts.config)")
    parser.add_argument("--url", type=str, default=None, help="database URL, overrides 'db.url'")
    parser.add_argument("--create-tables", action="store_true", help="create the contacts table if missing")
    parser.add_argument("--load", type=str, default=None, help="CSV file with name,telephone,email lines")
    parser.add_argument("--list", action="store_true", help="print all contacts")
    parser.add_argument("--export", type=str, default=None, help="write all contacts to a CSV file")
    parser.add_argument("--no-query", action="store_true", help="skip the interactive query loop")
    parser.add_argument("--log-dir", type=str, default=None, help="also write logs to this directory")
    return parser


def cli(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.log_dir is not None:
        os.makedirs(args.log_dir, exist_ok=True)
        setup_file_logging(args.log_dir)

    settings = load_settings(args.config)
    if args.url is not None:
        settings.db_url = args.url
    if args.create_tables:
        settings.create_tables = True
    if args.load is not None:
        settings.data_file = args.load

    db = DBHandler(logger=logger)
    try:
        db.connect(settings.db_url)
    except (exceptions.ConfigError, exceptions.ConnectionFailed) as e:
        logger.error(e.message)
        return 1

    try:
        if settings.create_tables:
            db.ensure_schema()

        if settings.data_file is not None:
            load_contacts(db, settings.data_file)

        if args.list:
            print_all_contacts(db)

        if args.export is not None:
            n = db.pd.export_csv(args.export)
            logger.info(f"Exported {n} contacts to '{args.export}'")

        if not args.no_query:
            QueryLoop(db).run()
    except exceptions.ContactsDBException as e:
        logger.error(e.message)
        return 1
    finally:
        db.close_connection()

    return 0


def main() -> None:
    sys.exit(cli())


if __name__ == "__main__":
    main()
