"""Category hierarchy."""

from __future__ import annotations

from draftsync.core.kinds.fields import FieldActionComputer


class CategoryActionComputer(FieldActionComputer):
    """``parent`` is a same-kind reference, so a child may precede its parent in the input."""

    kind = "categories"
    fields = ("name", "slug", "description", "parent", "orderHint", "externalId")
