"""Optional property-change registration for data-binding frameworks."""
from typing import Callable, Protocol

PropertyChangedCallback = Callable[[object, str], None]


class Observable(Protocol):
    def add_on_property_changed_callback(self, callback: PropertyChangedCallback) -> None: ...

    def remove_on_property_changed_callback(self, callback: PropertyChangedCallback) -> None: ...


class PropertyObservable:
    """No-op Observable implementation.

    State is published through LiveData, so property-change callbacks are
    accepted and ignored.
    """

    def add_on_property_changed_callback(self, callback: PropertyChangedCallback) -> None:
        pass

    def remove_on_property_changed_callback(self, callback: PropertyChangedCallback) -> None:
        pass
