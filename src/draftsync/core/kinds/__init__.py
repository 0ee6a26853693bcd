"""Per-kind action computers."""

from draftsync.core.kinds.categories import CategoryActionComputer
from draftsync.core.kinds.fields import FieldActionComputer
from draftsync.core.kinds.product_types import ProductTypeActionComputer
from draftsync.core.kinds.registry import available_kinds, create_action_computer, register

__all__ = [
    "CategoryActionComputer",
    "FieldActionComputer",
    "ProductTypeActionComputer",
    "available_kinds",
    "create_action_computer",
    "register",
]
