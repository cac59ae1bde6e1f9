from __future__ import annotations

from typing import Generic, TypeVar

from popview.core.errors import (
    ApplicationAlreadyInitializedError,
    ApplicationNotInitializedError,
)

T = TypeVar("T")

_UNSET = object()


class ApplicationModule(Generic[T]):
    """Holds the application instance: written once at startup, read after.

    Not guarded against two threads racing on ``init``; it is meant to be
    called once before anything reads it.
    """

    __slots__ = ("_instance",)

    def __init__(self) -> None:
        self._instance: object = _UNSET

    @property
    def is_initialized(self) -> bool:
        return self._instance is not _UNSET

    def init(self, instance: T) -> None:
        if self.is_initialized:
            raise ApplicationAlreadyInitializedError()
        self._instance = instance

    def get(self) -> T:
        if not self.is_initialized:
            raise ApplicationNotInitializedError()
        return self._instance  # type: ignore[return-value]

    @property
    def application(self) -> T:
        return self.get()

    @application.setter
    def application(self, value: T) -> None:
        self.init(value)
