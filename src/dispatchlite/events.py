"""Event payloads passed by reference to every listener of a dispatch."""

from __future__ import annotations

from typing import Any
from typing import Iterator
from typing import Mapping

from typing_extensions import Self


class Event:
    """
    Base payload for all dispatched events.

    An event is created by the caller right before `dispatch` and handed to each listener in
    turn. Listeners communicate by mutating it. Any listener may call `stop_propagation()` to
    prevent listeners ordered after it from running.

    Subclasses add their own fields; `@dataclass` subclasses need not call `super().__init__()`.
    """

    _propagation_stopped: bool = False

    def __init__(self) -> None:
        self._propagation_stopped = False

    @property
    def propagation_stopped(self) -> bool:
        """Whether a listener has stopped further propagation of this event."""
        return self._propagation_stopped

    def stop_propagation(self) -> None:
        """Prevent any further listener from being invoked for the current dispatch."""
        self._propagation_stopped = True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(propagation_stopped={self._propagation_stopped})"


class GenericEvent(Event):
    """
    Event carrying an optional subject and a dict of named arguments.

    Useful when a dedicated `Event` subclass would be overkill. Arguments can be accessed
    like a mapping:

    Examples:
        >>> event = GenericEvent("user", {"name": "ada"})
        >>> event["name"]
        'ada'
        >>> event["role"] = "admin"
        >>> sorted(event)
        ['name', 'role']
    """

    def __init__(self, subject: Any = None, arguments: Mapping[str, Any] | None = None) -> None:
        super().__init__()
        self.subject = subject
        self._arguments: dict[str, Any] = dict(arguments or {})

    @property
    def arguments(self) -> dict[str, Any]:
        """The live argument dict; changes made to it are visible to later listeners."""
        return self._arguments

    def set_arguments(self, arguments: Mapping[str, Any]) -> Self:
        """Replace all arguments."""
        self._arguments = dict(arguments)
        return self

    def get_argument(self, key: str) -> Any:
        """
        Get an argument by key.

        Raises:
            KeyError: If the argument is not set.
        """
        if key not in self._arguments:
            raise KeyError(f"Argument '{key}' not found in {type(self).__name__}.")
        return self._arguments[key]

    def set_argument(self, key: str, value: Any) -> Self:
        self._arguments[key] = value
        return self

    def has_argument(self, key: str) -> bool:
        return key in self._arguments

    def __getitem__(self, key: str) -> Any:
        return self.get_argument(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self._arguments[key] = value

    def __delitem__(self, key: str) -> None:
        self._arguments.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._arguments

    def __len__(self) -> int:
        return len(self._arguments)

    def __iter__(self) -> Iterator[str]:
        return iter(self._arguments)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(subject={self.subject!r}, arguments={self._arguments!r}, "
            f"propagation_stopped={self.propagation_stopped})"
        )
