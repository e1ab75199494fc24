"""
Exception hierarchy for scenario.

Absence and failure are data in this package, not exceptions. Exceptions only
appear on paths the caller explicitly opts into: ``unwrap()``/``expect()`` and
the signal handlers given to ``value_or_signal_error()``/``or_signal_error()``.
This module defines the exceptions those paths raise, plus ``raise_error()``,
a factory for ready-made signal handlers.

Manifesto:
    - **Errors are opt-in:** Combinators never raise on variant mismatch
    - **Single base class:** Everything raised here extends ScenarioError
    - **Rich context:** Errors carry a category and free-form metadata
    - **Chaining:** A failure payload that is itself an exception becomes
      the ``__cause__``

Architecture:
    ::

        ScenarioError
        ├── AbsentValueError            (ABSENCE)   Option.unwrap / expect
        ├── FailureValueError           (FAILURE)   Result.unwrap / expect
        └── SignalHandlerReturnedError  (CONTRACT)  handler returned normally

Examples:
    >>> from scenario import Option
    >>> from scenario.core.errors import raise_error
    >>> Option.none().value_or_signal_error(raise_error(KeyError("user")))
    Traceback (most recent call last):
    ...
    KeyError: 'user'

Tags:
    exception, error-hierarchy, signal-handler, scenario-core
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, NoReturn

from scenario.core.absence import clone
from scenario.core.logging import get_logger
from scenario.core.settings import get_settings

logger = get_logger(__name__)


class ErrorCategory(str, Enum):
    """Classification of scenario errors, used for routing and logging."""

    ABSENCE = "ABSENCE"
    FAILURE = "FAILURE"
    CONTRACT = "CONTRACT"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


class ScenarioError(Exception):
    """
    Base exception for all scenario errors.

    Every ScenarioError carries a message, an ErrorCategory, a metadata dict
    and an optional cause. Subclasses set ``default_category``.

    Examples:
        >>> error = ScenarioError("boom")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.with_context(stage="parse").metadata
        {'stage': 'parse'}
        >>> error.to_dict()["category"]
        'INTERNAL'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        metadata: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.metadata = dict(metadata or {})
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ScenarioError:
        """
        Add metadata to this error (fluent API).

        Usage:
            raise AbsentValueError("no user").with_context(user_id=42)
        """
        self.metadata.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.metadata:
            result["metadata"] = dict(self.metadata)
        if self.cause is not None:
            result["cause"] = repr(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


class AbsentValueError(ScenarioError):
    """Raised by ``Option.unwrap()``/``expect()`` on an Absent option."""

    default_category = ErrorCategory.ABSENCE


class FailureValueError(ScenarioError):
    """
    Raised by ``Result.unwrap()``/``expect()`` on a Failure.

    The failure payload is kept on ``failure_value``. If the payload is an
    exception it is also chained as the cause.
    """

    default_category = ErrorCategory.FAILURE

    def __init__(self, message: str, failure_value: Any = None, **kwargs: Any):
        if isinstance(failure_value, BaseException):
            kwargs.setdefault("cause", failure_value)
        super().__init__(message, **kwargs)
        self.failure_value = failure_value

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["failure_value"] = repr(self.failure_value)
        return result


class SignalHandlerReturnedError(ScenarioError):
    """A signal handler returned normally instead of diverting control flow."""

    default_category = ErrorCategory.CONTRACT

    def __init__(self, handler: Callable[..., Any], returned: Any):
        name = getattr(handler, "__qualname__", None) or repr(handler)
        super().__init__(
            f"Signal handler {name} returned {returned!r}; it must raise instead",
            metadata={"handler": name},
        )
        self.handler = handler
        self.returned = returned


def raise_error(
    error: BaseException | Callable[[Any], BaseException],
) -> Callable[[Any], NoReturn]:
    """
    Build a signal handler that always raises.

    Args:
        error: Exception instance to raise, or a callable receiving the
            (copied) Absent/Failure receiver and returning the exception.

    Returns:
        Handler suitable for ``value_or_signal_error``/``or_signal_error``.

    Examples:
        >>> from scenario import Result
        >>> handler = raise_error(lambda r: ValueError(f"bad: {r.value()}"))
        >>> Result.failure("E42").or_signal_error(handler)
        Traceback (most recent call last):
        ...
        ValueError: bad: E42
    """

    def handler(receiver: Any) -> NoReturn:
        if isinstance(error, BaseException):
            raise error
        raise error(receiver)

    return handler


def invoke_signal_handler(handler: Callable[[Any], Any], receiver: Any) -> None:
    """
    Call ``handler`` with a copy of ``receiver`` and enforce that it diverts.

    A handler that returns normally breaks its contract. With settings
    ``strict_signal_handlers`` on (the default) that raises
    SignalHandlerReturnedError; otherwise a warning is logged and the caller
    falls through.
    """
    returned = handler(clone(receiver))
    if get_settings().strict_signal_handlers:
        raise SignalHandlerReturnedError(handler, returned)
    logger.warning(
        "signal_handler_returned",
        handler=getattr(handler, "__qualname__", repr(handler)),
        returned=repr(returned),
        receiver=repr(receiver),
    )


__all__ = [
    "ErrorCategory",
    "ScenarioError",
    "AbsentValueError",
    "FailureValueError",
    "SignalHandlerReturnedError",
    "raise_error",
    "invoke_signal_handler",
]
