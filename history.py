# Linear undo/redo over document snapshots.

from __future__ import annotations

from typing import Callable, Generic, List, TypeVar, Union

T = TypeVar("T")


class History(Generic[T]):
    """Snapshots plus a cursor.

    A plain commit drops everything after the cursor and appends, so a
    fresh edit discards the redo branch. An overwrite commit replaces the
    snapshot under the cursor and never grows the history; drags use it
    so each mouse move does not become an undo step.
    """

    def __init__(self, initial: T) -> None:
        self._snapshots: List[T] = [initial]
        self._cursor = 0

    def __len__(self) -> int:
        return len(self._snapshots)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    def current(self) -> T:
        return self._snapshots[self._cursor]

    def commit(self, state: Union[T, Callable[[T], T]], overwrite: bool = False) -> T:
        """Description: Record a new state, or a function of the current one
        Inputs: state: Union[T, Callable[[T], T]], overwrite: bool
        """
        new_state = state(self.current()) if callable(state) else state
        if overwrite:
            self._snapshots[self._cursor] = new_state
        else:
            del self._snapshots[self._cursor + 1:]
            self._snapshots.append(new_state)
            self._cursor += 1
        return new_state

    def undo(self) -> bool:
        if not self.can_undo:
            return False
        self._cursor -= 1
        return True

    def redo(self) -> bool:
        if not self.can_redo:
            return False
        self._cursor += 1
        return True
