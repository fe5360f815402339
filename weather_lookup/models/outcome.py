"""Outcome and error taxonomy shared by the service clients and the coordinator."""

from enum import Enum
from typing import Any, Generic, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Closed set of failures a weather or city lookup can end in."""

    CITY_NOT_FOUND = "city_not_found"
    NETWORK = "network"
    INVALID_CREDENTIALS = "invalid_credentials"
    TIMEOUT = "timeout"
    SERVER_ERROR = "server_error"
    UNKNOWN = "unknown"


class Loading(BaseModel):
    """Request started, no payload yet."""

    model_config = ConfigDict(frozen=True)

    status: Literal["loading"] = "loading"


class Success(BaseModel, Generic[T]):
    """Request completed with a value."""

    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    value: T


class Error(BaseModel):
    """Request failed with a classified error.

    ``status_code`` is only set for ``ErrorKind.SERVER_ERROR`` (and for the
    HTTP-derived kinds when the response carried one).
    """

    model_config = ConfigDict(frozen=True)

    status: Literal["error"] = "error"
    kind: ErrorKind
    message: str = ""
    status_code: Optional[int] = Field(None, description="HTTP status code, if any")


Outcome = Union[Loading, Success, Error]


def is_success(outcome: Any) -> bool:
    return isinstance(outcome, Success)


def is_error(outcome: Any) -> bool:
    return isinstance(outcome, Error)


def is_loading(outcome: Any) -> bool:
    return isinstance(outcome, Loading)


def get_or_none(outcome: Any) -> Any:
    """Return the success value, or None for any other variant."""
    if isinstance(outcome, Success):
        return outcome.value
    return None


def get_error_or_none(outcome: Any) -> Optional[Error]:
    """Return the Error variant itself, or None for any other variant."""
    if isinstance(outcome, Error):
        return outcome
    return None
