import os
import sys

from loguru import logger

logger.remove()

fmt = """{level} @ {time:YYYY-MM-DD HH:mm:ss} ({file}:{line} in {function}):
>   {message}"""

if os.getenv("CONTACTS_DEBUG") == "1":
    logger.add(
        sys.stderr, colorize=True,
        format=fmt, level="DEBUG"
    )
else:
    logger.add(
        sys.stderr, colorize=True,
        format=fmt, level="INFO"
    )


def setup_file_logging(log_dir: str) -> None:
    date = "{time:YYYY-MM-DD}"
    logger.add(
        os.path.join(log_dir, f"contacts_{date}.log"), format=fmt, level="INFO",
        colorize=False, rotation="1 day"
    )
    logger.add(
        os.path.join(log_dir, f"contacts_{date}.err"), format=fmt, level="ERROR",
        colorize=False, rotation="1 day"
    )


from . import models  # noqa: E402
from .config import Settings, load_settings  # noqa: E402
from .core.DBHandler import DBHandler  # noqa: E402
from .core.DBSession import DBSession  # noqa: E402
from .core import exceptions  # noqa: E402
from .core.filters import ContactFilter, ContactField, FilterOperator  # noqa: E402
from .core.results import Success, Failure, Result  # noqa: E402
