from .DBHandler import DBHandler  # noqa: F401
from .DBSession import DBSession  # noqa: F401
from . import exceptions  # noqa: F401
