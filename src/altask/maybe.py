"""
Maybe monad — an optional value without None checks.

A Maybe[T] is either Just(value: T) or Nothing(). Transformations run only
on Just and pass Nothing through untouched, so a lookup chain is written
for the present case and absence propagates by itself:

    Maybe.from_optional(users.get(user_id))
        .map(lambda user: user.address)
        .chain(lambda address: Maybe.from_optional(address.city))
        .get_or_else("unknown")

Design choices:
  - Just/Nothing are frozen dataclasses under an abstract base, dispatched
    with match/case
  - Nothing() is a singleton; every call returns the same instance
  - Just never holds None, so map() turning a value into None yields Nothing
  - Equality is structural and delegated to the contained value's __eq__
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class Maybe(Generic[T]):
    """
    Optional value with two possible states:
      - Just(value: T) — a value is present
      - Nothing()      — no value

    Usage:
        >>> Maybe.just(5).map(lambda x: x + 1)
        Just(6)

        >>> Maybe.nothing().map(lambda x: x + 1).get_or_else(0)
        0
    """

    __slots__ = ()

    # ──────────────────────── Introspection ────────────────────────

    def is_just(self) -> bool:
        """Check if a value is present."""
        return isinstance(self, Just)

    def is_nothing(self) -> bool:
        """Check if the value is absent."""
        return isinstance(self, Nothing)

    # ──────────────────────── Core Transformations ────────────────────────

    def fold(self, on_nothing: Callable[[], R], on_just: Callable[[T], R]) -> R:
        """
        Apply one of two functions depending on the state.

            maybe.fold(lambda: "anonymous", lambda user: user.name)
        """
        match self:
            case Just(v):
                return on_just(v)
            case Nothing():
                return on_nothing()
        raise TypeError("unreachable")  # pragma: no cover

    def map(self, mapper: Callable[[T], U]) -> Maybe[U]:
        """
        Transform the contained value. Nothing passes through, mapper is not called.

            Just(5).map(lambda x: x * 2)   # → Just(10)
            Nothing().map(lambda x: x * 2) # → Nothing
        """
        match self:
            case Just(v):
                return Maybe.from_optional(mapper(v))
            case Nothing():
                return self
        raise TypeError("unreachable")  # pragma: no cover

    def chain(self, mapper: Callable[[T], Maybe[U]]) -> Maybe[U]:
        """
        Chain a Maybe-returning function, flattening one level.

            def lookup(key: str) -> Maybe[int]: ...

            Just("a").chain(lookup)   # → lookup("a")
            Nothing().chain(lookup)   # → Nothing, lookup never called
        """
        match self:
            case Just(v):
                return mapper(v)
            case Nothing():
                return self
        raise TypeError("unreachable")  # pragma: no cover

    def filter(self, predicate: Callable[[T], bool]) -> Maybe[T]:
        """Keep the value only if it satisfies the predicate."""
        return self.chain(lambda v: self if predicate(v) else NOTHING)

    def peek(self, action: Callable[[T], Any]) -> Maybe[T]:
        """Run a side effect on the contained value, returning self unchanged."""
        match self:
            case Just(v):
                action(v)
        return self

    # ──────────────────────── Fallback ────────────────────────

    def alt(self, other: Maybe[T]) -> Maybe[T]:
        """
        Prefer this value, fall back to ``other`` when this is Nothing.

            Just(1).alt(Just(2))     # → Just(1)
            Nothing().alt(Just(2))   # → Just(2)
        """
        match self:
            case Just(_):
                return self
            case Nothing():
                return other
        raise TypeError("unreachable")  # pragma: no cover

    def or_else(self, supplier: Callable[[], Maybe[T]]) -> Maybe[T]:
        """Lazy alt(): ``supplier`` is only called when this is Nothing."""
        match self:
            case Just(_):
                return self
            case Nothing():
                return supplier()
        raise TypeError("unreachable")  # pragma: no cover

    def get_or_else(self, fallback: T) -> T:
        """Unwrap the value, or return ``fallback`` for Nothing. Ends composition."""
        match self:
            case Just(v):
                return v
            case _:
                return fallback

    def get_or_else_get(self, supplier: Callable[[], T]) -> T:
        """Unwrap the value, or compute a fallback lazily."""
        return self.fold(supplier, lambda v: v)

    def equals(self, other: Maybe[T]) -> bool:
        """Structural equality: both Nothing, or both Just with equal values."""
        match (self, other):
            case (Just(a), Just(b)):
                return bool(a == b)
            case (Nothing(), Nothing()):
                return True
            case _:
                return False

    # ──────────────────────── Static Factories ────────────────────────

    @staticmethod
    def just(value: T) -> Maybe[T]:
        """Wrap a present value."""
        return Just(value)

    @staticmethod
    def nothing() -> Maybe[T]:
        """The absent value."""
        return NOTHING

    @staticmethod
    def from_optional(value: Optional[T]) -> Maybe[T]:
        """
        None becomes Nothing, anything else Just.

            Maybe.from_optional(cache.get(key))
        """
        if value is None:
            return NOTHING
        return Just(value)

    @staticmethod
    def from_computation(
        computation: Callable[[], Optional[T]],
        *absent_on: type[BaseException],
    ) -> Maybe[T]:
        """
        Run a computation, treating the listed exceptions as absence.

        Exceptions not listed propagate.

            Maybe.from_computation(lambda: settings["theme"], KeyError)
        """
        try:
            return Maybe.from_optional(computation())
        except absent_on:
            return NOTHING

    # ──────────────────────── Dunder methods ────────────────────────

    def __bool__(self) -> bool:
        """Truthy only for Just, whatever the contained value."""
        return self.is_just()


@dataclass(frozen=True, slots=True, eq=False)
class Just(Maybe[T]):
    """A present value. Never None."""

    value: T

    def __post_init__(self) -> None:
        if self.value is None:
            raise TypeError("Just value must not be None")

    def __repr__(self) -> str:
        return f"Just({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Maybe):
            return self.equals(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("Just", self.value))


@dataclass(frozen=True, slots=True, eq=False)
class Nothing(Maybe[Any]):
    """The absent value. Nothing() always returns the same instance."""

    _instance = None

    def __new__(cls) -> Nothing:
        if cls._instance is None:
            cls._instance = object.__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Nothing"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Maybe):
            return self.equals(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash("Nothing")


NOTHING: Maybe[Any] = Nothing()
