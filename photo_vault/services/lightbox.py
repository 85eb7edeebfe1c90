"""Single-item viewer navigation."""

from typing import Optional, Sequence

from ..models.common import FileRecord

KEY_ACTIONS = {
    "Escape": "close",
    "ArrowRight": "next",
    "ArrowLeft": "prev",
}


class Lightbox:
    """Index into a sequence captured at open time.

    While open, 0 <= index < len(sequence). Navigation clamps at both ends.
    Closing drops the sequence; reopening captures whatever is displayed then.
    """

    def __init__(self):
        self._sequence: tuple[FileRecord, ...] = ()
        self._index: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self._index is not None

    @property
    def index(self) -> Optional[int]:
        return self._index

    @property
    def sequence(self) -> tuple[FileRecord, ...]:
        return self._sequence

    @property
    def current(self) -> Optional[FileRecord]:
        if self._index is None:
            return None
        return self._sequence[self._index]

    @property
    def has_next(self) -> bool:
        return self._index is not None and self._index < len(self._sequence) - 1

    @property
    def has_prev(self) -> bool:
        return self._index is not None and self._index > 0

    @property
    def position(self) -> str:
        if self._index is None:
            return ""
        return f"{self._index + 1} / {len(self._sequence)}"

    def open(self, sequence: Sequence[FileRecord], index: int = 0) -> bool:
        """Open at `index` clamped into range. An empty sequence stays closed."""
        if not sequence:
            self.close()
            return False
        self._sequence = tuple(sequence)
        self._index = min(max(index, 0), len(self._sequence) - 1)
        return True

    def next(self) -> Optional[int]:
        if self._index is not None:
            self._index = min(self._index + 1, len(self._sequence) - 1)
        return self._index

    def prev(self) -> Optional[int]:
        if self._index is not None:
            self._index = max(self._index - 1, 0)
        return self._index

    def close(self) -> None:
        self._sequence = ()
        self._index = None

    def handle_key(self, key: str) -> bool:
        """Apply a keyboard event. Returns False when nothing happened."""
        action = KEY_ACTIONS.get(key)
        if action is None or not self.is_open:
            return False
        getattr(self, action)()
        return True
