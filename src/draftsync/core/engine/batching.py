"""Order-preserving batch division."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

T = TypeVar("T")


def divide(drafts: Sequence[T], batch_size: int) -> list[list[T]]:
    """Split *drafts* into consecutive chunks of *batch_size*; the last one may be shorter.

    Later batches may reference resources created by earlier ones, so order is kept
    both across and within batches.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")
    return [list(drafts[start : start + batch_size]) for start in range(0, len(drafts), batch_size)]
