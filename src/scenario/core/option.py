"""
Optional values without ``None`` checks.

Provides a typed Option[V] with two variants: Present[V] wrapping exactly one
value and Absent[V] wrapping nothing. Call sites build an Option once, chain
combinators, and extract a plain value at the end, instead of sprinkling
``if value is None`` through the code.

Manifesto:
    - **Absence is data:** Absent is a value that flows through chains,
      never an exception
    - **Falsy is present:** ``0``, ``""``, ``False`` and empty containers are
      Present; only ``None`` and ``UNSET`` are absent
    - **Immutable:** Every combinator returns a new Option (or the receiver)
    - **Defensive copies:** A Present deep-copies its value when built, and
      callers only ever see deep copies of it; mutating either the input or
      what they get back cannot corrupt the Option

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                        Option[V]                             │
        │                   (abstract base class)                      │
        ├──────────────────────────────┬──────────────────────────────┤
        │         Present[V]           │          Absent[V]           │
        ├──────────────────────────────┼──────────────────────────────┤
        │ map        → from_value(f(v))│ map        → Absent          │
        │ recover    → self            │ recover    → from_value(f()) │
        │ validate   → self | Absent   │ validate   → self            │
        │ value_or   → copy of v       │ value_or   → fallback        │
        └──────────────────────────────┴──────────────────────────────┘

        Factories: some() · none() · from_value() · from_fallible()

Examples:
    Building and extracting:

    >>> from scenario.core.option import Option
    >>> Option.from_value(0).is_present()
    True
    >>> Option.from_value(None).value_or("fallback")
    'fallback'

    Chaining:

    >>> settings = {"retries": "3"}
    >>> (
    ...     Option.from_value(settings.get("retries"))
    ...     .map(int)
    ...     .validate(lambda n: n > 0)
    ...     .value_or(1)
    ... )
    3

    Pattern matching:

    >>> match Option.some(42):
    ...     case Present(value):
    ...         print(f"Got {value}")
    ...     case Absent():
    ...         print("Nothing")
    Got 42

Guardrails:
    ❌ DON'T: Use ``Option.some(x)`` when x may be None
    ✅ DO: Use ``Option.from_value(x)``; ``some`` wraps None verbatim

    ❌ DON'T: Rely on mutating a value obtained from ``value_or``
    ✅ DO: ``map`` to a new Option; the wrapped value is never shared

Tags:
    option, maybe, optional-value, functional-programming, immutable,
    scenario-core
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Literal, NoReturn, TypeVar

from scenario.core.absence import clone, is_absent
from scenario.core.errors import AbsentValueError, invoke_signal_handler
from scenario.core.logging import get_logger
from scenario.core.settings import get_settings, should_run

logger = get_logger(__name__)

V = TypeVar("V")
U = TypeVar("U")
C = TypeVar("C")
R = TypeVar("R")

Condition = bool | Callable[[], bool] | None


class Option(ABC, Generic[V]):
    """
    Base class of the Present/Absent pair.

    Option is never instantiated directly. Use the static factories, or
    the module-level ``some``/``none``/``from_value`` shortcuts.
    """

    __slots__ = ()

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @staticmethod
    def some(value: V) -> Present[V]:
        """Wrap ``value`` unconditionally, even if it is None or UNSET."""
        return Present(value)

    @staticmethod
    def none() -> Absent[Any]:
        """Create an Absent option."""
        return Absent()

    @staticmethod
    def from_value(value: V | None) -> Option[V]:
        """Absent for None/UNSET, Present for everything else."""
        if is_absent(value):
            return Absent()
        return Present(value)

    @staticmethod
    def from_fallible(thunk: Callable[[], V | None]) -> Option[V]:
        """
        Evaluate ``thunk`` and capture its outcome as an Option.

        Any ``Exception`` raised by the thunk is swallowed and yields Absent,
        as does a None/UNSET return value. ``KeyboardInterrupt`` and other
        non-``Exception`` signals propagate.

        Examples:
            >>> Option.from_fallible(lambda: int("42")).value_or(0)
            42
            >>> Option.from_fallible(lambda: int("forty-two")).is_absent()
            True
        """
        try:
            value = thunk()
        except Exception as e:
            if get_settings().debug:
                logger.debug(
                    "fallible_thunk_raised",
                    factory="Option.from_fallible",
                    error_type=type(e).__name__,
                    error=str(e),
                )
            return Absent()
        return Option.from_value(value)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @abstractmethod
    def is_present(self) -> bool:
        """True iff this is Present."""

    @abstractmethod
    def is_absent(self) -> bool:
        """True iff this is Absent."""

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    @abstractmethod
    def map(self, fn: Callable[[V], U | None]) -> Option[U]:
        """Transform the value if Present; Absent passes through."""

    @abstractmethod
    async def map_async(self, fn: Callable[[V], Awaitable[Option[U]]]) -> Option[U]:
        """
        Await ``fn(copy_of_value)`` if Present and return the Option it resolves to.

        The transformer produces the wrapper itself, so nothing is wrapped a
        second time. Absent passes through without calling ``fn``.
        """

    @abstractmethod
    def recover(self, fn: Callable[[], V | None]) -> Option[V]:
        """Switch an Absent to ``from_value(fn())``; Present is returned as is."""

    @abstractmethod
    def validate(self, predicate: Callable[[V], bool]) -> Option[V]:
        """Turn a Present whose value fails ``predicate`` into Absent."""

    def reduce(self, reducer: Callable[[C, V | None], R], context: C) -> R:
        """
        Compute a plain value regardless of variant.

        Calls ``reducer(context, value_or_none())`` and returns its result.

        Examples:
            >>> Option.some(3).reduce(lambda total, v: total + (v or 0), 10)
            13
            >>> Option.none().reduce(lambda total, v: total + (v or 0), 10)
            10
        """
        return reducer(context, self.value_or_none())

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    @abstractmethod
    def value_or(self, fallback: V) -> V:
        """Copy of the value if Present, else ``fallback`` verbatim."""

    @abstractmethod
    def value_or_compute(self, thunk: Callable[[], V]) -> V:
        """Copy of the value if Present, else ``thunk()``."""

    @abstractmethod
    def value_or_none(self) -> V | None:
        """Copy of the value if Present, else None."""

    @abstractmethod
    def value_or_signal_error(self, handler: Callable[[Option[V]], NoReturn]) -> V:
        """
        Copy of the value if Present, else hand a copy of self to ``handler``.

        ``handler`` must raise. If it returns, SignalHandlerReturnedError is
        raised instead; with ``SCENARIO_STRICT_SIGNAL_HANDLERS=false`` a
        ``signal_handler_returned`` warning is logged and None is returned.
        """

    @abstractmethod
    def or_signal_error(self, handler: Callable[[Option[V]], NoReturn]) -> Option[V]:
        """
        Self if Present, else hand a copy of self to ``handler``.

        ``handler`` must raise. If it returns, SignalHandlerReturnedError is
        raised instead; with ``SCENARIO_STRICT_SIGNAL_HANDLERS=false`` a
        ``signal_handler_returned`` warning is logged and the receiver is
        returned.
        """

    @abstractmethod
    def unwrap(self) -> V:
        """Copy of the value; raises AbsentValueError if Absent."""

    @abstractmethod
    def expect(self, message: str) -> V:
        """Copy of the value; raises AbsentValueError(message) if Absent."""

    # ------------------------------------------------------------------
    # Side effects (always return self)
    # ------------------------------------------------------------------

    def run_effect(self, fn: Callable[[Option[V]], Any]) -> Option[V]:
        """Call ``fn`` with a copy of self, return self."""
        fn(clone(self))
        return self

    @abstractmethod
    def run_effect_when_present(self, fn: Callable[[V], Any]) -> Option[V]:
        """Call ``fn`` with a copy of the value if Present, return self."""

    @abstractmethod
    def run_effect_when_absent(self, fn: Callable[[], Any]) -> Option[V]:
        """Call ``fn()`` if Absent, return self."""

    def inspect(self, condition: Condition, fn: Callable[[Option[V]], Any]) -> Option[V]:
        """
        Call ``fn`` with a copy of self when ``condition`` holds, return self.

        ``condition`` is a bool, a zero-argument callable, or None to follow
        the ``debug`` setting. Meant for diagnostics that should only run in
        some environments.

        Examples:
            >>> seen = []
            >>> Option.some(1).inspect(False, seen.append).inspect(True, seen.append)
            Present(1)
            >>> seen
            [Present(1)]
        """
        if should_run(condition):
            fn(clone(self))
        return self


@dataclass(frozen=True, slots=True)
class Present(Option[V]):
    """
    Option holding exactly one value.

    The value may be anything, falsy primitives included. Equality and
    hashing follow the wrapped value.

    Examples:
        >>> Present([1, 2]).map(len)
        Present(2)
        >>> Present(5).validate(lambda v: v > 10)
        Absent()
    """

    _value: V

    def __post_init__(self) -> None:
        object.__setattr__(self, "_value", clone(self._value))

    def is_present(self) -> Literal[True]:
        return True

    def is_absent(self) -> Literal[False]:
        return False

    def map(self, fn: Callable[[V], U | None]) -> Option[U]:
        return Option.from_value(fn(clone(self._value)))

    async def map_async(self, fn: Callable[[V], Awaitable[Option[U]]]) -> Option[U]:
        return await fn(clone(self._value))

    def recover(self, fn: Callable[[], V | None]) -> Present[V]:
        return self

    def validate(self, predicate: Callable[[V], bool]) -> Option[V]:
        if predicate(clone(self._value)):
            return self
        return Absent()

    def value_or(self, fallback: V) -> V:
        return clone(self._value)

    def value_or_compute(self, thunk: Callable[[], V]) -> V:
        return clone(self._value)

    def value_or_none(self) -> V:
        return clone(self._value)

    def value_or_signal_error(self, handler: Callable[[Option[V]], NoReturn]) -> V:
        return clone(self._value)

    def or_signal_error(self, handler: Callable[[Option[V]], NoReturn]) -> Present[V]:
        return self

    def unwrap(self) -> V:
        return clone(self._value)

    def expect(self, message: str) -> V:
        return clone(self._value)

    def run_effect_when_present(self, fn: Callable[[V], Any]) -> Present[V]:
        fn(clone(self._value))
        return self

    def run_effect_when_absent(self, fn: Callable[[], Any]) -> Present[V]:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Present[V]:
        return Present(self._value)

    def __repr__(self) -> str:
        return f"Present({self._value!r})"


@dataclass(frozen=True, slots=True)
class Absent(Option[V]):
    """
    Option holding no value.

    The type parameter only exists for static typing; all Absent instances
    compare equal.

    Examples:
        >>> Absent().map(lambda v: v + 1)
        Absent()
        >>> Absent().recover(lambda: 10).recover(lambda: 20)
        Present(10)
    """

    def is_present(self) -> Literal[False]:
        return False

    def is_absent(self) -> Literal[True]:
        return True

    def map(self, fn: Callable[[V], U | None]) -> Absent[U]:
        return Absent()

    async def map_async(self, fn: Callable[[V], Awaitable[Option[U]]]) -> Absent[U]:
        return Absent()

    def recover(self, fn: Callable[[], V | None]) -> Option[V]:
        return Option.from_value(fn())

    def validate(self, predicate: Callable[[V], bool]) -> Absent[V]:
        return self

    def value_or(self, fallback: V) -> V:
        return fallback

    def value_or_compute(self, thunk: Callable[[], V]) -> V:
        return thunk()

    def value_or_none(self) -> None:
        return None

    def value_or_signal_error(self, handler: Callable[[Option[V]], NoReturn]) -> V:
        invoke_signal_handler(handler, self)
        return None  # type: ignore[return-value]

    def or_signal_error(self, handler: Callable[[Option[V]], NoReturn]) -> Absent[V]:
        invoke_signal_handler(handler, self)
        return self

    def unwrap(self) -> NoReturn:
        raise AbsentValueError("Called unwrap() on an Absent option")

    def expect(self, message: str) -> NoReturn:
        raise AbsentValueError(message)

    def run_effect_when_present(self, fn: Callable[[V], Any]) -> Absent[V]:
        return self

    def run_effect_when_absent(self, fn: Callable[[], Any]) -> Absent[V]:
        fn()
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Absent[V]:
        return Absent()

    def __repr__(self) -> str:
        return "Absent()"


# Module-level shortcuts
some = Option.some
none = Option.none
from_value = Option.from_value
from_fallible = Option.from_fallible


__all__ = [
    "Option",
    "Present",
    "Absent",
    "some",
    "none",
    "from_value",
    "from_fallible",
]
