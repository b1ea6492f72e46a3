"""Generic element container and a simple in-memory output tree."""

from __future__ import annotations

import copy
from typing import Any, Callable, Generic, Iterable, Iterator, TypeVar

T = TypeVar("T")
R = TypeVar("R")


class OutputTree:
    """Column-oriented record of snapshots taken from registered branches."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._branches: dict[str, Callable[[], Any]] = {}
        self.rows: list[dict[str, Any]] = []

    @property
    def branch_names(self) -> list[str]:
        return list(self._branches)

    def branch(self, name: str, getter: Callable[[], Any]) -> None:
        """Register a branch whose value is read from ``getter`` on every fill."""
        self._branches[name] = getter

    def fill(self) -> None:
        """Append one entry holding a copy of every branch's current value."""
        self.rows.append({name: copy.deepcopy(get()) for name, get in self._branches.items()})

    def reset(self) -> None:
        """Drop all filled entries, keeping the branches."""
        self.rows.clear()

    def __len__(self) -> int:
        return len(self.rows)


class TreeOut:
    """Mixin for objects that write their state to an optional output tree."""

    def __init__(self) -> None:
        self.tree: OutputTree | None = None

    @property
    def is_tree_set(self) -> bool:
        return self.tree is not None

    def set_tree(self, tree: OutputTree) -> None:
        self.tree = tree

    def clear_tree(self) -> None:
        if self.tree is not None:
            self.tree.reset()

    def fill_tree(self) -> None:
        if self.tree is not None:
            self.tree.fill()

    def make_branches(self) -> None:
        """Register branches on the output tree; nothing by default."""


class Cluster(Generic[T]):
    """Ordered container of elements with a name."""

    def __init__(self, name: str = "", elements: Iterable[T] = ()) -> None:
        self.name = name
        self.elements: list[T] = []
        for element in elements:
            self.append(element)

    def append(self, element: T) -> None:
        self.elements.append(element)

    def extend(self, other: Iterable[T]) -> None:
        """Append every element of another cluster or iterable."""
        for element in list(other):
            self.append(element)

    def erase(self, index: int) -> T:
        """Remove the element at ``index`` and return it."""
        size = len(self.elements)
        if not -size <= index < size:
            raise IndexError(f"index {index} out of range for cluster of size {size}")
        return self.elements.pop(index)

    def clear(self) -> None:
        self.elements.clear()

    def copy_from(self, other: "Cluster[T]") -> None:
        """Replace the contents with the elements of another cluster."""
        items = list(other)
        self.clear()
        for element in items:
            self.append(element)

    def project(self, func: Callable[[T], R]) -> list[R]:
        """Values of ``func`` applied to each element, in order."""
        return [func(element) for element in self.elements]

    def first(self) -> T:
        if not self.elements:
            raise IndexError("cluster is empty")
        return self.elements[0]

    def last(self) -> T:
        if not self.elements:
            raise IndexError("cluster is empty")
        return self.elements[-1]

    @property
    def is_empty(self) -> bool:
        return not self.elements

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[T]:
        return iter(self.elements)

    def __getitem__(self, index: int) -> T:
        return self.elements[index]