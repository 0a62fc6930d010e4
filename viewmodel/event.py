"""One-shot wrapper for status messages sent from the view-model to presentation."""
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Event(Generic[T]):
    """Holds a value that is handed out at most once.

    get_content_if_not_handled() returns the content the first time and None
    afterwards; peek_content() always returns it without consuming.
    """

    def __init__(self, content: T):
        self._content = content
        self._handled = False

    @property
    def has_been_handled(self) -> bool:
        return self._handled

    def get_content_if_not_handled(self) -> Optional[T]:
        if self._handled:
            return None
        self._handled = True
        return self._content

    def peek_content(self) -> T:
        return self._content

    def __repr__(self) -> str:
        return f"Event({self._content!r}, handled={self._handled})"
