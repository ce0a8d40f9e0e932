"""Order reconciliation for drag-reorder of the todo list."""

from typing import Hashable, Sequence, TypeVar

IdType = TypeVar("IdType", bound=Hashable)


def reconcile(
    current_order: Sequence[IdType], moved_id: IdType, target_index: int
) -> tuple[list[IdType], list[tuple[IdType, int]]]:
    """
    Move ``moved_id`` to ``target_index`` (clamped into range).

    Returns the new id sequence and the ``(id, index)`` writes for every
    position in it. A move onto the element's own slot returns no writes.
    """
    ids = list(current_order)
    try:
        original_index = ids.index(moved_id)
    except ValueError:
        raise ValueError(f"{moved_id!r} is not in the current order") from None

    target = max(0, min(target_index, len(ids) - 1))
    if target == original_index:
        return ids, []

    ids.pop(original_index)
    ids.insert(target, moved_id)
    return ids, [(item, index) for index, item in enumerate(ids)]
