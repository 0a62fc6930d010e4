"""Observable value holders shared by storage, view-model and presentation.

LiveData is the read-only view; MutableLiveData adds the setter. Observers
are called synchronously, in registration order, every time the value is set.
"""
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")

Observer = Callable[[T], None]

_UNSET = object()


class LiveData(Generic[T]):
    def __init__(self, value=_UNSET):
        self._value = value
        self._observers: list[Observer] = []

    @property
    def value(self) -> Optional[T]:
        """Current value, or None if nothing has been set yet."""
        return None if self._value is _UNSET else self._value

    def is_set(self) -> bool:
        return self._value is not _UNSET

    def observe(self, observer: Observer) -> Callable[[], None]:
        """Register observer and return a callable that unregisters it.

        If a value is already set the observer receives it immediately.
        """
        self._observers.append(observer)
        if self._value is not _UNSET:
            observer(self._value)
        return lambda: self.remove_observer(observer)

    def remove_observer(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def has_observers(self) -> bool:
        return bool(self._observers)

    def _set(self, value: T) -> None:
        self._value = value
        for observer in list(self._observers):
            observer(value)


class MutableLiveData(LiveData[T]):
    @LiveData.value.setter
    def value(self, value: T) -> None:
        self._set(value)
