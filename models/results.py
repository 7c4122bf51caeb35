"""Result and error types returned by the record service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class NotFound:
    """The referenced id is not present in the record map."""

    msg: str


@dataclass(frozen=True, slots=True)
class InvalidInput:
    """A payload failed one of the validator checks."""

    msg: str


ServiceError = Union[NotFound, InvalidInput]


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E


Result = Union[Ok[T], Err[E]]


class StorageError(RuntimeError):
    """The durable substrate could not be read or written.

    This is an environment failure rather than a domain outcome and is
    never converted into an ``Err``.
    """


class CodecError(StorageError):
    """Stored bytes could not be decoded into a record."""
