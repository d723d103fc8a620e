"""Outcome types shared by every object store operation.

Operations never raise for store-side failures; they return a
``ClientResult`` whose ``errors`` describe what went wrong.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Iterable, Union


@dataclass(frozen=True, slots=True)
class ClientError:
    """A single normalized failure reported by the object store layer."""

    code: str
    description: str


ErrorsArg = Union[ClientError, Iterable[ClientError], None]


@dataclass(frozen=True, slots=True)
class ClientResult:
    """Result of an object store operation.

    Use ``ClientResult.SUCCESS`` for successful calls and
    ``ClientResult.failed(...)`` to build failures.
    """

    succeeded: bool
    errors: tuple[ClientError, ...] = field(default=())

    SUCCESS: ClassVar["ClientResult"]

    def __post_init__(self) -> None:
        if self.succeeded and self.errors:
            raise ValueError("a succeeded result cannot carry errors")

    @classmethod
    def failed(cls, *errors: ErrorsArg) -> "ClientResult":
        """Create a failed result from errors and/or iterables of errors.

        Calling it with no errors still yields a failed result.
        """
        collected: list[ClientError] = []
        for item in errors:
            if item is None:
                continue
            if isinstance(item, ClientError):
                collected.append(item)
            else:
                collected.extend(item)
        return cls(succeeded=False, errors=tuple(collected))

    def __bool__(self) -> bool:
        return self.succeeded

    def __str__(self) -> str:
        if self.succeeded:
            return "Succeeded"
        return "Failed : " + ",".join(error.code for error in self.errors)


ClientResult.SUCCESS = ClientResult(succeeded=True)
