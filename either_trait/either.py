"""
Two-variant sum type targeted by the generated implementations.

An Either holds exactly one Left or Right variant. Generated classes
subclass Either and reach the held value through `borrow`, `borrow_mut`
or `take`:

    either = ExampleEither.left(A())
    either.foo(2)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

L = TypeVar("L")
R = TypeVar("R")


class MovedValueError(RuntimeError):
    """The held value was moved out by a by-value method"""


@dataclass(frozen=True, slots=True)
class Left(Generic[L]):
    value: L


@dataclass(frozen=True, slots=True)
class Right(Generic[R]):
    value: R


class Either(Generic[L, R]):
    """Holds one of two alternatives, decided at construction time"""

    def __init__(self, variant: Union[Left[L], Right[R]]):
        if not isinstance(variant, (Left, Right)):
            raise TypeError(f"Either holds a Left or a Right, not {type(variant).__name__}")
        self._variant = variant

    @classmethod
    def left(cls, value: L) -> "Either[L, R]":
        return cls(Left(value))

    @classmethod
    def right(cls, value: R) -> "Either[L, R]":
        return cls(Right(value))

    @property
    def moved(self) -> bool:
        return self._variant is None

    def is_left(self) -> bool:
        return isinstance(Either.borrow(self), Left)

    def is_right(self) -> bool:
        return isinstance(Either.borrow(self), Right)

    def borrow(self) -> Union[Left[L], Right[R]]:
        """The held variant, left in place"""
        if self._variant is None:
            raise MovedValueError(f"{type(self).__name__} value was moved out")
        return self._variant

    def borrow_mut(self) -> Union[Left[L], Right[R]]:
        """The held variant, for methods that mutate the held value in place"""
        return Either.borrow(self)

    def take(self) -> Union[Left[L], Right[R]]:
        """Move the held variant out; the Either is unusable afterwards"""
        variant = Either.borrow(self)
        self._variant = None
        return variant

    def __eq__(self, other) -> bool:
        if not isinstance(other, Either):
            return NotImplemented
        return self._variant == other._variant

    __hash__ = None

    def __repr__(self) -> str:
        if self._variant is None:
            return f"{type(self).__name__}(<moved>)"
        return f"{type(self).__name__}({self._variant!r})"
