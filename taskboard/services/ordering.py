"""Display ordering for the tasks of one column.

Favorites come first; inside each partition tasks are sorted by name,
case-insensitively, with the stored ``sort_order`` and then the id as
tie-breaks so the result is reproducible for identical names.
"""
from typing import Iterable, List, Tuple, TypeVar

T = TypeVar("T")


def display_sort_key(task) -> Tuple[int, str, int, int]:
    return (
        0 if task.is_favorite else 1,
        (task.name or "").casefold(),
        task.sort_order,
        task.id if task.id is not None else 0,
    )


def display_order(tasks: Iterable[T]) -> List[T]:
    """Return *tasks* in on-screen order without touching the input."""
    return sorted(tasks, key=display_sort_key)
