"""
Result type for functional error handling.

File reading, configuration loading and report writing return a Result
instead of raising, so the pipeline can stop at the first failed stage and
the CLI can report it with a single message.

Usage:
    >>> result = read_fasta("genome.fa")
    >>> if result.is_ok():
    ...     records = result.unwrap()
    >>> else:
    ...     print(result.unwrap_err())

    >>> match load_config("scan.yaml"):
    ...     case Ok(data):
    ...         print(data["primer_length"])
    ...     case Err(error):
    ...         print(error)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TypeVar, Generic, Callable, Union, Any

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Transformed type


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """
    Successful stage outcome.

    Holds the stage output: parsed FASTA records, a ScanConfig, the path of
    a written report or the run statistics of a scan.
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_err(self) -> Any:
        raise ValueError("Called unwrap_err on Ok value")

    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        """Transforms the value, e.g. a written path into a stats dict."""
        return Ok(fn(self.value))

    def and_then(self, fn: Callable[[T], Result[U, Any]]) -> Result[U, Any]:
        """Feeds the value into the next stage, e.g. load_config then ScanConfig.from_dict."""
        return fn(self.value)

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """
    Failed stage outcome.

    The error is a message meant for the user, e.g.
    "FASTA file not found: genome.fa". Callers prefix it with the stage that
    failed and the CLI prints it before exiting with status 1.
    """

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Any:
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        return self.error

    def map(self, fn: Callable[[Any], Any]) -> Err[E]:
        return self

    def and_then(self, fn: Callable[[Any], Any]) -> Err[E]:
        """Short-circuits: the next stage is never run."""
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]
