from .Base import Base  # noqa: F401
from .Contact import Contact  # noqa: F401
