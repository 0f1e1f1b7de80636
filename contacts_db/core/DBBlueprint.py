from typing import Callable, TypeVar, Any, TYPE_CHECKING
from functools import wraps

from sqlalchemy import exc

from . import exceptions

F = TypeVar('F', bound=Callable[..., Any])

if TYPE_CHECKING:
    from .DBHandler import DBHandler


class DBBlueprint:
    def __init__(self, name: str, db: "DBHandler") -> None:
        self.name = name
        self.db = db
        self._register_transactions()

    def _register_transactions(self) -> None:
        """Automatically wraps all methods marked with @transaction."""
        for name, method in self.__class__.__dict__.items():
            if callable(method) and hasattr(method, "_is_transaction"):
                wrapped = self._create_wrapped_transaction(method)
                setattr(self, name, wrapped)

    def _create_wrapped_transaction(self, func: F) -> F:
        """Creates a wrapped transaction method with session management and rollback on failure."""
        @wraps(func)
        def wrapped(*args: Any, **kwargs: Any) -> Any:
            auto_opened = self.db.auto_open and self.db._session is None
            if auto_opened:
                self.db.open_session()

            try:
                result = func(self, *args, **kwargs)
                if auto_opened:
                    self.db.close_session()
            except exc.SQLAlchemyError as e:
                self.db.error(f"{self.name}.{func.__name__} failed: {e}")
                if self.db._session is not None:
                    if auto_opened:
                        self.db.close_session(commit=False, rollback=True)
                    else:
                        self.db.rollback()
                raise exceptions.StorageError(f"{e.__class__.__name__}: {getattr(e, 'orig', None) or e}") from e
            except Exception:
                if auto_opened and self.db._session is not None:
                    self.db.close_session(commit=False, rollback=True)
                raise
            return result
        return wrapped  # type: ignore[return-value]

    @classmethod
    def transaction(cls, func: F) -> F:
        """Decorator to mark methods as transactions."""
        func._is_transaction = True  # type: ignore
        return func
