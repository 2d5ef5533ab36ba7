"""Transaction boundary contract shared by the credential store adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Self

from sessiongate.repositories import UserRepository


class UnitOfWork(ABC):
    """
    Scope one store operation in a transaction.

    Leaving the block normally commits; leaving it with an exception rolls
    back and lets the exception propagate. Subclasses decide what commit and
    rollback mean for their backend.
    """

    users: UserRepository

    def __enter__(self) -> Self:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
