from typing import Optional

import loguru

import sqlalchemy as sa
from sqlalchemy import orm, exc
from sqlalchemy_utils import database_exists, create_database

from ..models.Base import Base
from .. import models
from . import exceptions


class DBHandler():
    def __init__(
        self, logger: Optional["loguru.Logger"] = None,
        expire_on_commit: bool = False, auto_open: bool = True,
    ):
        self._logger = logger
        self._url: sa.URL | None = None
        self._engine: sa.Engine | None = None
        self._session: orm.Session | None = None
        self._connection: sa.Connection | None = None
        self.session_factory: orm.sessionmaker | None = None
        self.expire_on_commit = expire_on_commit
        self.__needs_commit = False
        self.auto_open = auto_open

        from .blueprints.ContactBP import ContactBP
        from .blueprints.PandasBP import PandasBP

        self.contacts = ContactBP("contacts", self)
        self.pd = PandasBP("pd", self)

    def connect(self, url: str) -> None:
        if not url or not url.strip():
            raise exceptions.ConfigError("No database URL configured, set 'db.url'.")

        try:
            self._url = sa.make_url(url.strip())
        except exc.ArgumentError as e:
            raise exceptions.ConfigError(f"Malformed database URL '{url}': {e}") from e

        self.public_url = self._url.render_as_string(hide_password=True)

        try:
            self._engine = sa.create_engine(self._url)
        except (exc.ArgumentError, ImportError) as e:
            raise exceptions.ConfigError(f"Unsupported database URL '{self.public_url}': {e}") from e

        try:
            self._connection = self._engine.connect()
        except exc.SQLAlchemyError as e:
            self._engine.dispose()
            self._engine = None
            raise exceptions.ConnectionFailed(f"Could not connect to DB '{self.public_url}':\n{e}") from e

        self.info(f"Connected to DB '{self.public_url}'")
        self.session_factory = orm.sessionmaker(bind=self._connection, expire_on_commit=self.expire_on_commit)

    def info(self, *values: object) -> None:
        message = " ".join([str(value) for value in values])
        if self._logger is not None:
            self._logger.opt(depth=1).info(message)
        else:
            print(f"LOG: {message}")

    def error(self, *values: object) -> None:
        message = " ".join([str(value) for value in values])
        if self._logger is not None:
            self._logger.opt(depth=1).error(message)
        else:
            print(f"ERROR: {message}")

    def warn(self, *values: object) -> None:
        message = " ".join([str(value) for value in values])
        if self._logger is not None:
            self._logger.opt(depth=1).warning(message)
        else:
            print(f"WARNING: {message}")

    def debug(self, *values: object) -> None:
        message = " ".join([str(value) for value in values])
        if self._logger is not None:
            self._logger.opt(depth=1).debug(message)
        else:
            print(f"DEBUG: {message}")

    @property
    def session(self) -> orm.Session:
        if self._session is None:
            raise exceptions.StorageError("Session is not open.")
        return self._session

    @property
    def connection(self) -> sa.Connection:
        if self._connection is None:
            raise exceptions.ConnectionFailed("Connection is not open.")
        return self._connection

    @property
    def engine(self) -> sa.Engine:
        if self._engine is None:
            raise exceptions.ConnectionFailed("Not connected, call connect() first.")
        return self._engine

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    def commit(self) -> None:
        if self._session is not None:
            self._session.commit()
            self.__needs_commit = False
        else:
            raise exceptions.StorageError("Session is not open, cannot commit changes.")

    def flush(self) -> None:
        if self._session is not None:
            self.__needs_commit = True
            self._session.flush()
        else:
            raise exceptions.StorageError("Session is not open, cannot flush changes.")

    def refresh(self, obj: object) -> None:
        if self._session is not None:
            self._session.refresh(obj)
        else:
            raise exceptions.StorageError("Session is not open, cannot refresh session state.")

    def create_tables(self) -> None:
        """Create the database and the contacts table if they do not exist yet."""
        try:
            if not database_exists(self.engine.url):
                create_database(self.engine.url)
                self.info(f"Created database '{self.public_url}'")

            with self.connection.begin():
                if sa.inspect(self.connection).has_table(models.Contact.__tablename__):
                    self.warn("Tables already exist, skipping creation...")
                    return
                Base.metadata.create_all(self.connection)
            self.info("Successfully created all tables")
        except exc.SQLAlchemyError as e:
            self.error(f"Failed to create tables: {str(e)}")
            raise exceptions.SchemaError(f"Database initialization failed: {e}") from e

    ensure_schema = create_tables

    def open_session(self, autoflush: bool = False) -> None:
        if self._session is not None:
            self.warn("Session is already open")
            return
        if self.session_factory is None:
            raise exceptions.ConnectionFailed("Not connected, call connect() first.")
        self._session = self.session_factory(autoflush=autoflush)

    def close_session(self, commit: bool = True, rollback: bool = False) -> bool:
        """ returns True if db was modified """
        modified = False
        if self._session is None:
            self.warn("Session is already closed or was never opened.")
            return False

        if commit and not rollback:
            if self.needs_commit:
                try:
                    self._session.commit()
                except Exception:
                    self.error("Commit failed: - rolling back transaction.")
                    self._session.rollback()
                    raise
                modified = True
        elif rollback:
            self.debug("Rolling back transaction...")
            self._session.rollback()
        elif self.needs_commit:
            self.warn("Session was not committed, but changes were made. This may lead to data loss.")

        self.__needs_commit = False
        self._session.close()
        self._session = None
        return modified

    def rollback(self) -> None:
        if self._session is None:
            self.error("Session is not open, cannot rollback.")
            raise exceptions.StorageError("Session is not open, cannot rollback.")
        self.debug("Rolling back transaction...")
        self._session.rollback()
        self.__needs_commit = False

    def close_connection(self) -> None:
        if self._session is not None:
            self.close_session()

        if self._connection is not None:
            self._connection.close()
            self._connection = None
            self.info("Connection closed.")

        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    @property
    def needs_commit(self) -> bool:
        if self._session is None:
            return False
        return self.__needs_commit or bool(self._session.dirty) or bool(self._session.new) or bool(self._session.deleted)
