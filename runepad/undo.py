from typing import Optional

from .constants import EditorConstants


class UndoHistory:
    """Bounded stack of full-content snapshots.

    Restoring a snapshot never touches cursors; callers re-clamp them.
    """

    def __init__(self, max_entries: int = EditorConstants.UNDO_STACK_LIMIT):
        self._undo_stack: list[str] = []
        self._max_entries = max_entries

    def __len__(self) -> int:
        return len(self._undo_stack)

    @property
    def capacity(self) -> int:
        return self._max_entries

    def clear(self):
        self._undo_stack.clear()

    def push(self, state: str):
        if self._max_entries <= 0:
            return
        # Evict the oldest state when full
        if len(self._undo_stack) >= self._max_entries:
            self._undo_stack.pop(0)
        self._undo_stack.append(state)

    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    def pop(self) -> Optional[str]:
        if not self._undo_stack:
            return None
        return self._undo_stack.pop()
