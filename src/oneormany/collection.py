import itertools
from collections.abc import Iterable, Iterator, Sequence
from typing import Any, Callable, Optional, TypeVar

import attr
from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema
from pyrsistent import PVector, pvector
from returns.pipeline import is_successful
from returns.result import Result, Success
from typing_extensions import Self

from oneormany import codec
from oneormany.exception import EmptyListError

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@attr.define(eq=False)
class Slot:
    """Mutable reference to one position of a OneOrMany, produced by
    :py:meth:`OneOrMany.iter_mut`.

    A slot is only valid while the iteration which produced it is running."""

    _owner: "OneOrMany"
    _index: int
    _token: object = attr.field(repr=False)

    @property
    def index(self) -> int:
        return self._index

    @property
    def value(self) -> Any:
        self._check_borrowed()
        return self._owner[self._index]

    @value.setter
    def value(self, value: Any) -> None:
        self._check_borrowed()
        self._owner._set(self._index, value)

    def _check_borrowed(self) -> None:
        if self._owner._mut_borrow is not self._token:
            raise RuntimeError("Slot used outside of the iter_mut() that produced it")


class OneOrMany(Sequence[T]):
    """Non-empty ordered collection made of a mandatory head element and a
    (possibly empty) tail.

    The tail is held in a pyrsistent.PVector which is replaced on every mutation,
    so views handed out by :py:attr:`rest` are snapshots. Prefer the one(), many()
    and merge() factory functions below over instantiating directly."""

    __slots__ = ("_first", "_rest", "_mut_borrow", "_consumed")

    def __init__(self, first: T, rest: Iterable[T] = ()) -> None:
        self._first = first
        self._rest: PVector[T] = pvector(rest)
        self._mut_borrow: Optional[object] = None
        self._consumed = False

    def __bool__(self):
        return True

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, OneOrMany):
            return NotImplemented
        self._check_owned()
        other._check_owned()
        return self._first == other._first and self._rest == other._rest

    __hash__ = None  # type: ignore[assignment]

    def __getitem__(self, index):
        self._check_owned()
        if isinstance(index, slice):
            # Slices may be empty, so they cannot be containers themselves
            return list(self)[index]
        if index < 0:
            index += len(self)
        if index == 0:
            return self._first
        if 0 < index < len(self):
            return self._rest[index - 1]
        raise IndexError("OneOrMany index out of range")

    def __iter__(self) -> Iterator[T]:
        self._check_owned()
        return _chain(self._first, self._rest)

    def __len__(self):
        self._check_owned()
        return 1 + len(self._rest)

    def __repr__(self):
        if self._consumed:
            return "OneOrMany(<consumed>)"
        return f"OneOrMany({list(self)!r})"

    def __copy__(self) -> Self:
        return self.copy()

    def __reduce__(self):
        # Rebuilt from the elements alone, so borrow state is never carried over
        return type(self), (self.first, tuple(self._rest))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> CoreSchema:
        return codec.one_or_many_schema(cls, source_type, handler)

    @property
    def first(self) -> T:
        self._check_owned()
        return self._first

    @property
    def rest(self) -> "PVector[T]":
        self._check_owned()
        return self._rest

    @property
    def is_empty(self) -> bool:
        """Always False; a OneOrMany can never be empty."""
        return False

    def copy(self) -> Self:
        """Return a shallow copy of this collection."""
        self._check_owned()
        return type(self)(self._first, self._rest)

    def push(self, item: T) -> None:
        """Append `item` to the end of the collection."""
        self._check_writable()
        self._rest = self._rest.append(item)

    def insert(self, index: int, item: T) -> None:
        """Insert `item` before position `index`.

        Inserting at index 0 replaces the head and moves the previous head to the
        front of the tail. Raise an IndexError (leaving the collection untouched)
        if `index` is negative or greater than the length of the collection."""
        self._check_writable()
        if not 0 <= index <= len(self):
            raise IndexError(
                f"insertion index (is {index}) "
                f"should be in 0..=len (is {len(self)})"
            )
        if index == 0:
            self._rest = pvector([self._first]).extend(self._rest)
            self._first = item
        else:
            i = index - 1
            self._rest = self._rest[:i].append(item).extend(self._rest[i:])

    def iter_mut(self) -> Iterator[Slot]:
        """Iterate over the collection yielding a :py:class:`Slot` for each
        position, through which elements may be read and replaced in place.

        Only one mutable iteration may run at a time. While it runs, the collection
        cannot grow or be consumed."""
        self._check_writable()
        token = object()
        self._mut_borrow = token
        try:
            for index in range(len(self)):
                yield Slot(self, index, token)
        finally:
            self._mut_borrow = None

    def into_iter(self) -> Iterator[T]:
        """Take ownership of every element and return an iterator over them.

        The collection is consumed by this call and may not be used afterwards."""
        self._check_writable()
        first, rest = self._first, self._rest
        del self._first
        del self._rest
        self._consumed = True
        return _chain(first, rest)

    def map(self, op: Callable[[T], U]) -> "OneOrMany[U]":
        """Return a new collection with `op` applied to every element, head first."""
        self._check_owned()
        first, rest = self._first, self._rest
        head = op(first)
        return OneOrMany(head, (op(item) for item in rest))

    def try_map(
        self, op: Callable[[T], Result[U, E]]
    ) -> Result["OneOrMany[U]", E]:
        """Apply a fallible `op` to every element, head first.

        The first Failure returned by `op` is returned as is and no further elements
        are visited. If every call succeeds, return a Success wrapping the new
        collection."""
        self._check_owned()
        first, rest = self._first, self._rest

        head = op(first)
        if not is_successful(head):
            return head  # type: ignore[return-value]

        tail = []
        for item in rest:
            result = op(item)
            if not is_successful(result):
                return result  # type: ignore[return-value]
            tail.append(result.unwrap())

        return Success(OneOrMany(head.unwrap(), tail))

    def _set(self, index: int, value: T) -> None:
        if index == 0:
            self._first = value
        else:
            self._rest = self._rest.set(index - 1, value)

    def _check_owned(self) -> None:
        if self._consumed:
            raise RuntimeError("OneOrMany has been consumed by into_iter()")

    def _check_writable(self) -> None:
        self._check_owned()
        if self._mut_borrow is not None:
            raise RuntimeError("OneOrMany is borrowed by an active iter_mut()")


def _chain(first: T, rest: Iterable[T]) -> Iterator[T]:
    yield first
    yield from rest


def one(item: T) -> OneOrMany[T]:
    """Creates a new OneOrMany holding only `item`."""
    return OneOrMany(item)


def many(items: Iterable[T]) -> OneOrMany[T]:
    """Creates a new OneOrMany from items, preserving their order.

    Raise an EmptyListError if `items` produces no elements."""
    it = iter(items)
    try:
        first = next(it)
    except StopIteration:
        raise EmptyListError() from None
    return OneOrMany(first, it)


def merge(colls: Iterable[OneOrMany[T]]) -> OneOrMany[T]:
    """Concatenate the elements of every collection in `colls` into a new one.

    Each input is non-empty, so this can only fail (with an EmptyListError) when
    `colls` itself is empty."""
    return many(itertools.chain.from_iterable(colls))
