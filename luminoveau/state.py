"""Application states and the manager that switches between them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class BaseState(ABC):
    """A screen or mode of the application; subclass to define one."""

    @abstractmethod
    def load(self) -> None:
        """Prepare the state when it becomes current."""

    @abstractmethod
    def unload(self) -> None:
        """Release the state when another one takes over."""

    @abstractmethod
    def draw(self) -> None:
        """Draw one frame of the state."""


class StateManager:
    """Keeps named states and the one that is current."""

    def __init__(self) -> None:
        self._states: dict[str, BaseState] = {}
        self._current_name = ""
        self._current: Optional[BaseState] = None

    @property
    def current_name(self) -> str:
        return self._current_name

    @property
    def current(self) -> Optional[BaseState]:
        return self._current

    @property
    def state_names(self) -> list[str]:
        return sorted(self._states)

    def init(self, state_name: str) -> None:
        """Switch to *state_name* if any state has been added."""
        if self._states:
            self.set_state(state_name)

    def add_state(self, state_name: str, state: BaseState) -> None:
        """Add *state* under *state_name*; a name may be added only once."""
        if state_name in self._states:
            raise ValueError(f"{state_name} has been added already.")
        self._states[state_name] = state

    def set_state(self, new_state: str) -> None:
        """Unload the current state and load *new_state*.

        Setting the state that is already current does nothing.
        """
        if new_state == self._current_name:
            return
        target = self._states.get(new_state)
        if target is None:
            raise KeyError(f"{new_state} is not in the map.")
        if self._current is not None:
            self._current.unload()
        self._current_name = new_state
        self._current = target
        target.load()

    def _require_current(self) -> BaseState:
        if self._current is None:
            raise RuntimeError("no state is current")
        return self._current

    def draw(self) -> None:
        self._require_current().draw()

    def load(self) -> None:
        self._require_current().load()

    def unload(self) -> None:
        self._require_current().unload()