# schooladmin/core/results.py
"""Result variants returned by the service layer.

Validation-level conditions (missing entity, duplicate key, bad credential,
empty bulk scope) are reported through ``ServiceResult`` instead of being
raised. Storage errors are not wrapped here; they propagate as exceptions.
"""
import enum
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar('T')


class Outcome(str, enum.Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID_CREDENTIAL = "invalid_credential"
    EMPTY = "empty"
    INVALID = "invalid"


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    outcome: Outcome
    value: Optional[T] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    @classmethod
    def success(cls, value: T) -> "ServiceResult[T]":
        return cls(Outcome.OK, value)

    @classmethod
    def not_found(cls, message: str) -> "ServiceResult[T]":
        return cls(Outcome.NOT_FOUND, message=message)

    @classmethod
    def conflict(cls, message: str) -> "ServiceResult[T]":
        return cls(Outcome.CONFLICT, message=message)

    @classmethod
    def invalid_credential(cls, message: str = "Invalid password") -> "ServiceResult[T]":
        return cls(Outcome.INVALID_CREDENTIAL, message=message)

    @classmethod
    def empty(cls, message: str) -> "ServiceResult[T]":
        return cls(Outcome.EMPTY, message=message)

    @classmethod
    def invalid(cls, message: str) -> "ServiceResult[T]":
        return cls(Outcome.INVALID, message=message)
