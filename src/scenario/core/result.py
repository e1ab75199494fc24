"""
Success/failure outcomes as values.

Provides a typed Result[S, F] with two variants: Success[S] carrying the
payload of an operation that worked, and Failure[F] carrying the payload of
one that did not. Unlike exception-based error handling, both outcomes are
ordinary values that can be transformed, recovered and inspected without
try/except blocks.

Manifesto:
    - **Explicit over implicit:** A function returning Result tells you it
      can fail, in its signature
    - **Two independent channels:** ``map`` only touches the success payload,
      ``map_failure`` only the failure payload
    - **Unopinionated payloads:** ``Success(None)`` is a valid success; use
      ``from_nullish`` when None should mean failure
    - **Immutable:** Variant membership never changes; ``recover`` and
      ``validate`` build new instances
    - **Defensive copies:** Payloads are deep-copied when a variant is
      built, and payloads handed to callers are deep copies too

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                      Result[S, F]                            │
        │                  (abstract base class)                       │
        ├──────────────────────────────┬──────────────────────────────┤
        │        Success[S]            │         Failure[F]           │
        ├──────────────────────────────┼──────────────────────────────┤
        │ map         → Success(f(s))  │ map         → self           │
        │ map_failure → self           │ map_failure → Failure(f(e))  │
        │ recover     → self           │ recover     → Success(f(e))  │
        │ validate    → self | Failure │ validate    → self           │
        │ value_or    → copy of s      │ value_or    → fallback       │
        └──────────────────────────────┴──────────────────────────────┘

        Factories: success() · failure() · from_nullish()
                   from_validator() · from_fallible()
        Collectors: collect_results() · partition_results()

        State transitions:
            Success ──validate──> Failure
            Failure ──recover───> Success
            (nothing else crosses over)

Examples:
    Basic usage with pattern matching:

    >>> from scenario.core.result import Result, Success, Failure
    >>> def divide(a: int, b: int) -> Result[float, str]:
    ...     if b == 0:
    ...         return Result.failure("DIVISION_BY_ZERO")
    ...     return Result.success(a / b)
    >>> match divide(10, 2):
    ...     case Success(value):
    ...         print(f"Result: {value}")
    ...     case Failure(code):
    ...         print(f"Error: {code}")
    Result: 5.0

    A validation pipeline:

    >>> (
    ...     Result.from_validator(lambda x: x >= 0, -5, "INVALID")
    ...     .map_failure(lambda code: f"ERR_{code}")
    ...     .recover(lambda code: 0)
    ...     .value_or(-1)
    ... )
    0

Guardrails:
    ❌ DON'T: Use value() as the primary accessor
    ✅ DO: Use value_or(), pattern matching or is_success() narrowing

    ❌ DON'T: Raise inside map() to signal failure
    ✅ DO: Use validate() or build a Failure explicitly

Tags:
    result-pattern, error-handling, functional-programming, immutable,
    scenario-core
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Literal, NoReturn, TypeVar

from scenario.core.absence import clone, is_absent
from scenario.core.errors import FailureValueError, invoke_signal_handler
from scenario.core.logging import get_logger
from scenario.core.settings import get_settings, should_run

logger = get_logger(__name__)

S = TypeVar("S")
F = TypeVar("F")
NewS = TypeVar("NewS")
NewF = TypeVar("NewF")
C = TypeVar("C")
R = TypeVar("R")

Condition = bool | Callable[[], bool] | None


class Result(ABC, Generic[S, F]):
    """
    Base class of the Success/Failure pair.

    Result is never instantiated directly. Use the static factories, or
    the module-level ``success``/``failure`` shortcuts.
    """

    __slots__ = ()

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @staticmethod
    def success(value: S) -> Success[S]:
        """Success wrapping ``value``; any value, None included."""
        return Success(value)

    @staticmethod
    def failure(value: F) -> Failure[F]:
        """Failure wrapping ``value``; any value, None included."""
        return Failure(value)

    @staticmethod
    def from_nullish(value: S | None, failure_value: F) -> Result[S, F]:
        """
        Success(value), or Failure(failure_value) if value is None/UNSET.

        Examples:
            >>> users = {"ada": 36}
            >>> Result.from_nullish(users.get("bob"), "NOT_FOUND")
            Failure('NOT_FOUND')
        """
        if is_absent(value):
            return Failure(failure_value)
        return Success(value)

    @staticmethod
    def from_validator(
        predicate: Callable[[S], bool],
        candidate: S,
        failure_value: F,
    ) -> Result[S, F]:
        """Success(candidate) if ``predicate(candidate)``, else Failure(failure_value)."""
        if predicate(candidate):
            return Success(candidate)
        return Failure(failure_value)

    @staticmethod
    def from_fallible(thunk: Callable[[], S], failure_value: F) -> Result[S, F]:
        """
        Success(thunk()), or Failure(failure_value) if the thunk raises.

        The raised exception is discarded; only ``failure_value`` survives.
        Non-``Exception`` signals such as KeyboardInterrupt propagate.

        Examples:
            >>> import json
            >>> Result.from_fallible(lambda: json.loads('{"a": 1}'), "BAD_JSON")
            Success({'a': 1})
            >>> Result.from_fallible(lambda: json.loads("{"), "BAD_JSON")
            Failure('BAD_JSON')
        """
        try:
            value = thunk()
        except Exception as e:
            if get_settings().debug:
                logger.debug(
                    "fallible_thunk_raised",
                    factory="Result.from_fallible",
                    error_type=type(e).__name__,
                    error=str(e),
                )
            return Failure(failure_value)
        return Success(value)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @abstractmethod
    def is_success(self) -> bool:
        """True iff this is Success."""

    @abstractmethod
    def is_failure(self) -> bool:
        """True iff this is Failure."""

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    @abstractmethod
    def map(self, fn: Callable[[S], NewS]) -> Result[NewS, F]:
        """Transform the success payload; Failure passes through."""

    @abstractmethod
    async def map_async(
        self, fn: Callable[[S], Awaitable[Result[NewS, F]]]
    ) -> Result[NewS, F]:
        """
        Await ``fn(copy_of_payload)`` if Success and return the Result it resolves to.

        The transformer produces the wrapper itself, so it can succeed or fail
        and nothing is wrapped a second time. Failure passes through without
        calling ``fn``.
        """

    @abstractmethod
    def map_failure(self, fn: Callable[[F], NewF]) -> Result[S, NewF]:
        """Transform the failure payload; Success passes through."""

    @abstractmethod
    def recover(self, fn: Callable[[F], S]) -> Success[S]:
        """Turn a Failure into Success(fn(payload)); Success is returned as is."""

    @abstractmethod
    def validate(self, predicate: Callable[[S], bool], failure_value: F) -> Result[S, F]:
        """Turn a Success whose payload fails ``predicate`` into Failure(failure_value)."""

    def reduce(self, reducer: Callable[[C, Result[S, F]], R], context: C) -> R:
        """
        Compute a plain value from the whole Result.

        Calls ``reducer(context, copy_of_self)``. Unlike Option.reduce(), the
        reducer receives the wrapper, since either channel may hold a payload.

        Examples:
            >>> counts = {"ok": 0, "failed": 0}
            >>> def tally(acc, result):
            ...     key = "ok" if result.is_success() else "failed"
            ...     return {**acc, key: acc[key] + 1}
            >>> Result.failure("E1").reduce(tally, counts)
            {'ok': 0, 'failed': 1}
        """
        return reducer(context, clone(self))

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    @abstractmethod
    def value(self) -> S | F:
        """
        Copy of whichever payload is held.

        Escape hatch only: the return type is a union of both channels.
        """

    @abstractmethod
    def value_or(self, fallback: S) -> S:
        """Copy of the success payload, else ``fallback`` verbatim."""

    @abstractmethod
    def value_or_compute(self, thunk: Callable[[], S]) -> S:
        """Copy of the success payload, else ``thunk()``."""

    @abstractmethod
    def success_or_none(self) -> S | None:
        """Copy of the success payload, else None."""

    @abstractmethod
    def failure_or_none(self) -> F | None:
        """Copy of the failure payload, else None."""

    @abstractmethod
    def value_or_signal_error(self, handler: Callable[[Result[S, F]], NoReturn]) -> S:
        """
        Copy of the success payload, else hand a copy of self to ``handler``.

        ``handler`` must raise. If it returns, SignalHandlerReturnedError is
        raised instead; with ``SCENARIO_STRICT_SIGNAL_HANDLERS=false`` a
        ``signal_handler_returned`` warning is logged and None is returned.
        """

    @abstractmethod
    def or_signal_error(self, handler: Callable[[Result[S, F]], NoReturn]) -> Result[S, F]:
        """
        Self if Success, else hand a copy of self to ``handler``.

        ``handler`` must raise. If it returns, SignalHandlerReturnedError is
        raised instead; with ``SCENARIO_STRICT_SIGNAL_HANDLERS=false`` a
        ``signal_handler_returned`` warning is logged and the receiver is
        returned.
        """

    @abstractmethod
    def unwrap(self) -> S:
        """Copy of the success payload; raises FailureValueError on Failure."""

    @abstractmethod
    def expect(self, message: str) -> S:
        """Copy of the success payload; raises FailureValueError(message) on Failure."""

    # ------------------------------------------------------------------
    # Side effects (always return self)
    # ------------------------------------------------------------------

    def run_effect(self, fn: Callable[[Result[S, F]], Any]) -> Result[S, F]:
        """Call ``fn`` with a copy of self, return self."""
        fn(clone(self))
        return self

    @abstractmethod
    def run_effect_when_success(self, fn: Callable[[S], Any]) -> Result[S, F]:
        """Call ``fn`` with a copy of the success payload if Success, return self."""

    @abstractmethod
    def run_effect_when_failure(self, fn: Callable[[F], Any]) -> Result[S, F]:
        """Call ``fn`` with a copy of the failure payload if Failure, return self."""

    def inspect(self, condition: Condition, fn: Callable[[Result[S, F]], Any]) -> Result[S, F]:
        """
        Call ``fn`` with a copy of self when ``condition`` holds, return self.

        ``condition`` is a bool, a zero-argument callable, or None to follow
        the ``debug`` setting.
        """
        if should_run(condition):
            fn(clone(self))
        return self


@dataclass(frozen=True, slots=True)
class Success(Result[S, Any]):
    """
    Successful outcome carrying a payload.

    Examples:
        >>> Success(10).map(lambda x: x * 2)
        Success(20)
        >>> Success(10).map_failure(str.upper)
        Success(10)
        >>> Success(-4).validate(lambda v: v > 0, "NEG")
        Failure('NEG')
    """

    _value: S

    def __post_init__(self) -> None:
        object.__setattr__(self, "_value", clone(self._value))

    def is_success(self) -> Literal[True]:
        return True

    def is_failure(self) -> Literal[False]:
        return False

    def map(self, fn: Callable[[S], NewS]) -> Success[NewS]:
        return Success(fn(clone(self._value)))

    async def map_async(
        self, fn: Callable[[S], Awaitable[Result[NewS, F]]]
    ) -> Result[NewS, F]:
        return await fn(clone(self._value))

    def map_failure(self, fn: Callable[[Any], NewF]) -> Success[S]:
        return self

    def recover(self, fn: Callable[[Any], S]) -> Success[S]:
        return self

    def validate(self, predicate: Callable[[S], bool], failure_value: F) -> Result[S, F]:
        if predicate(clone(self._value)):
            return self
        return Failure(failure_value)

    def value(self) -> S:
        return clone(self._value)

    def value_or(self, fallback: S) -> S:
        return clone(self._value)

    def value_or_compute(self, thunk: Callable[[], S]) -> S:
        return clone(self._value)

    def success_or_none(self) -> S:
        return clone(self._value)

    def failure_or_none(self) -> None:
        return None

    def value_or_signal_error(self, handler: Callable[[Result[S, Any]], NoReturn]) -> S:
        return clone(self._value)

    def or_signal_error(self, handler: Callable[[Result[S, Any]], NoReturn]) -> Success[S]:
        return self

    def unwrap(self) -> S:
        return clone(self._value)

    def expect(self, message: str) -> S:
        return clone(self._value)

    def run_effect_when_success(self, fn: Callable[[S], Any]) -> Success[S]:
        fn(clone(self._value))
        return self

    def run_effect_when_failure(self, fn: Callable[[Any], Any]) -> Success[S]:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Success[S]:
        return Success(self._value)

    def __repr__(self) -> str:
        return f"Success({self._value!r})"


@dataclass(frozen=True, slots=True)
class Failure(Result[Any, F]):
    """
    Failed outcome carrying a failure payload.

    The payload can be anything: an error code, a message, an exception, a
    structured record. Success-channel operations short-circuit.

    Examples:
        >>> Failure("E1").map(lambda x: x * 2)
        Failure('E1')
        >>> Failure("E1").map_failure(lambda code: f"ERR_{code}")
        Failure('ERR_E1')
        >>> Failure("E1").recover(len)
        Success(2)
    """

    _value: F

    def __post_init__(self) -> None:
        object.__setattr__(self, "_value", clone(self._value))

    def is_success(self) -> Literal[False]:
        return False

    def is_failure(self) -> Literal[True]:
        return True

    def map(self, fn: Callable[[Any], NewS]) -> Failure[F]:
        return self

    async def map_async(
        self, fn: Callable[[Any], Awaitable[Result[NewS, F]]]
    ) -> Failure[F]:
        return self

    def map_failure(self, fn: Callable[[F], NewF]) -> Failure[NewF]:
        return Failure(fn(clone(self._value)))

    def recover(self, fn: Callable[[F], S]) -> Success[S]:
        return Success(fn(clone(self._value)))

    def validate(self, predicate: Callable[[Any], bool], failure_value: Any) -> Failure[F]:
        return self

    def value(self) -> F:
        return clone(self._value)

    def value_or(self, fallback: S) -> S:
        return fallback

    def value_or_compute(self, thunk: Callable[[], S]) -> S:
        return thunk()

    def success_or_none(self) -> None:
        return None

    def failure_or_none(self) -> F:
        return clone(self._value)

    def value_or_signal_error(self, handler: Callable[[Result[Any, F]], NoReturn]) -> Any:
        invoke_signal_handler(handler, self)
        return None

    def or_signal_error(self, handler: Callable[[Result[Any, F]], NoReturn]) -> Failure[F]:
        invoke_signal_handler(handler, self)
        return self

    def unwrap(self) -> NoReturn:
        raise FailureValueError(
            f"Called unwrap() on a Failure: {self._value!r}",
            failure_value=clone(self._value),
        )

    def expect(self, message: str) -> NoReturn:
        raise FailureValueError(message, failure_value=clone(self._value))

    def run_effect_when_success(self, fn: Callable[[Any], Any]) -> Failure[F]:
        return self

    def run_effect_when_failure(self, fn: Callable[[F], Any]) -> Failure[F]:
        fn(clone(self._value))
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Failure[F]:
        return Failure(self._value)

    def __repr__(self) -> str:
        return f"Failure({self._value!r})"


# Module-level shortcuts
success = Result.success
failure = Result.failure


# =============================================================================
# COLLECTORS
# =============================================================================


def collect_results(results: Iterable[Result[S, F]]) -> Result[list[S], F]:
    """
    Collect Results into a Result of list (fail-fast).

    Returns Success with every success payload, in order, if all succeeded.
    Otherwise returns the first Failure; iteration stops there.

    Examples:
        >>> collect_results([Success(1), Success(2)])
        Success([1, 2])
        >>> collect_results([Success(1), Failure("a"), Failure("b")])
        Failure('a')
        >>> collect_results([])
        Success([])
    """
    values = []
    for result in results:
        match result:
            case Success(value):
                values.append(clone(value))
            case Failure():
                return result
    return Success(values)


def partition_results(results: Iterable[Result[S, F]]) -> tuple[list[S], list[F]]:
    """
    Split Results into (success payloads, failure payloads).

    A plain split in input order. Failure payloads are copied out one per
    Failure, never merged or combined into a single error; a Result still
    carries exactly one failure payload.

    Examples:
        >>> partition_results([Success(1), Failure("x"), Success(3)])
        ([1, 3], ['x'])
    """
    values: list[S] = []
    failures: list[F] = []
    for result in results:
        match result:
            case Success(value):
                values.append(clone(value))
            case Failure(error):
                failures.append(clone(error))
    return values, failures


__all__ = [
    # Types
    "Result",
    "Success",
    "Failure",
    # Constructors
    "success",
    "failure",
    # Collectors
    "collect_results",
    "partition_results",
]
