"""
Markers for interfaces that get an Either implementation.

Usage:
    @either_trait
    class Example(Protocol):
        def foo(self, x: int) -> int: ...

        @mutates
        def bump(self, by: int) -> None: ...

        @consumes
        def into_total(self) -> int: ...

The markers only tag the objects; the implementation is written by the
generator (`either-trait example.py`, or `expand_module`).
"""

from typing import Callable, TypeVar

from .core.config import RECEIVER_MARKERS

T = TypeVar("T")


def either_trait(cls: type) -> type:
    """
    Mark a class as an interface to generate an Either implementation for.

    Every method must take `self` first; the class may not be generic or
    declare class-level attributes.
    """
    cls.__either_trait__ = True
    return cls


def consumes(func: Callable[..., T]) -> Callable[..., T]:
    """
    Declare that the method takes its receiver by value.

    The generated implementation moves the held value out of the Either
    before calling it.
    """
    func.__receiver__ = RECEIVER_MARKERS["consumes"]
    return func


def mutates(func: Callable[..., T]) -> Callable[..., T]:
    """Declare that the method mutates its receiver in place"""
    func.__receiver__ = RECEIVER_MARKERS["mutates"]
    return func
