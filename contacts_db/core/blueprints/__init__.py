from .ContactBP import ContactBP  # noqa: F401
from .PandasBP import PandasBP  # noqa: F401
