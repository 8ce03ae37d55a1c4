from oneormany.collection import OneOrMany, Slot, many, merge, one
from oneormany.exception import EmptyListError
from oneormany.logconfig import configure_root_logger

configure_root_logger()

__all__ = ["EmptyListError", "OneOrMany", "Slot", "many", "merge", "one"]
