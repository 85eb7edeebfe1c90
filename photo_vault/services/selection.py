"""Multi-select state machine.

Two states: idle (nothing selected) and selecting (a non-empty id set). The
state object derives `active` from the set, so "active with nothing
selected" and "inactive with a selection" cannot be built.
"""

import logging
from typing import Iterable

from ..models.gallery import SelectionState

logger = logging.getLogger(__name__)

IDLE = SelectionState()


class SelectionMachine:
    def __init__(self):
        self._state = IDLE

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def active(self) -> bool:
        return self._state.active

    @property
    def selected_ids(self) -> frozenset[str]:
        return self._state.selected_ids

    def is_selected(self, file_id: str) -> bool:
        return file_id in self._state.selected_ids

    def long_press(self, file_id: str) -> SelectionState:
        """Enter selection mode with just `file_id` selected."""
        return self._set(frozenset({file_id}))

    def toggle(self, file_id: str) -> SelectionState:
        """Flip membership of `file_id` while selecting.

        Idle taps belong to the lightbox, so toggling while idle changes
        nothing. Removing the last id drops back to idle.
        """
        if not self._state.active:
            logger.debug(f"Ignoring toggle of {file_id} while idle")
            return self._state
        ids = self._state.selected_ids
        if file_id in ids:
            return self._set(ids - {file_id})
        return self._set(ids | {file_id})

    def select_all(self, file_ids: Iterable[str]) -> SelectionState:
        """Replace the selection; an empty collection means idle."""
        return self._set(frozenset(file_ids))

    def clear(self) -> SelectionState:
        return self._set(frozenset())

    def _set(self, ids: frozenset[str]) -> SelectionState:
        self._state = SelectionState(selected_ids=ids) if ids else IDLE
        return self._state
