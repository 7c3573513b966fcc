"""
Example interface with two implementors.

Run `either-trait examples/example_trait.py` to write
./either_out/example_trait_either.py, which adds ExampleEither:

    either = ExampleEither.left(A())
    either.foo(2)            # 2
    either = ExampleEither.right(B(2))
    either.foo(2)            # 4
"""

from typing import Callable, Protocol

from either_trait import consumes, either_trait, mutates


@either_trait
class Example(Protocol):
    """An example trait."""

    def foo(self, x: int) -> int:
        """Foo."""
        ...

    @mutates
    def bar(self, z: tuple[int, int]) -> None:
        """Bar."""
        ...

    def baz[T](self, t: T, f: Callable[[T], T]) -> T:
        """Generic baz."""
        ...

    @consumes
    def into_total(self) -> int:
        """Give up the value, returning what it held."""
        ...


class A:
    def foo(self, x: int) -> int:
        return x

    def bar(self, z: tuple[int, int]) -> None:
        x, y = z
        print(f"{x}, {y}")

    def baz[T](self, t: T, f: Callable[[T], T]) -> T:
        return f(t)

    def into_total(self) -> int:
        return 0


class B:
    def __init__(self, value: int):
        self.value = value

    def foo(self, x: int) -> int:
        return self.value + x

    def bar(self, z: tuple[int, int]) -> None:
        x, y = z
        self.value += x + y
        print(f"{x}, {y}")

    def baz[T](self, t: T, f: Callable[[T], T]) -> T:
        for _ in range(self.value):
            t = f(t)
        return t

    def into_total(self) -> int:
        return self.value
