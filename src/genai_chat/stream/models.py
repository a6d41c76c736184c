"""Value types flowing through the stream normalization pipeline."""

from dataclasses import dataclass
from typing import Literal, Union


@dataclass(frozen=True, slots=True)
class DataFrame:
    """One event line carrying a raw JSON payload."""

    payload: str


@dataclass(frozen=True, slots=True)
class DoneFrame:
    """The terminal sentinel. Nothing after it is processed."""


Frame = Union[DataFrame, DoneFrame]


@dataclass(frozen=True, slots=True)
class Delta:
    """A fragment of assistant text to append to the reply under construction.

    ``shape`` names the payload layout the text was found in. It is carried
    for diagnostics only.
    """

    text: str
    shape: Literal["choices_delta", "message", "response"] | None = None


@dataclass(frozen=True, slots=True)
class Skip:
    """A frame that contributed no content (metadata, role-only, malformed)."""

    reason: str
    payload: str | None = None


@dataclass(frozen=True, slots=True)
class FatalError:
    """The upstream stream failed and no more content will follow."""

    reason: str
    error: BaseException | None = None


StepResult = Union[Delta, Skip]
StreamItem = Union[Delta, FatalError]
