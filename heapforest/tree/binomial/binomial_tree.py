from typing import Any, Iterator

from heapforest.exceptions import ShapeViolationError
from heapforest.ordering import Comparator, default_comparator


class BinomialTree:
    """
    Binomial tree node.

    A tree of order `k` holds exactly `2**k` values: its root and `k`
    children which are binomial trees of orders `k-1, k-2, ..., 0`, stored
    in that order. Trees only grow through `link`, which keeps that shape.

    Attributes
    ----------
    value : Any
        The value stored at the root.
    order : int
        Number of children, equal to log2 of the number of values.
    children : list[BinomialTree]
        Child subtrees sorted by descending order.
    """
    __slots__ = ("value", "order", "children")

    def __init__(self, value: Any) -> None:
        self.value = value
        self.order = 0
        self.children = []

    @staticmethod
    def link(
        a: "BinomialTree",
        b: "BinomialTree",
        comparator: Comparator = default_comparator
    ) -> "BinomialTree":
        """
        Link two trees of equal order into one tree of order + 1.

        The root ordering after the other becomes the leftmost child of the
        root ordering first. On ties `a` stays the root.

        Parameters
        ----------
        a : BinomialTree
            First tree, kept as root when both roots compare equal.
        b : BinomialTree
            Second tree, same order as `a`.
        comparator : Callable[[Any, Any], int]
            Three-way comparison of the root values.

        Returns
        -------
        BinomialTree
            The linked tree (`a` or `b`, modified in place).

        Raises
        ------
        ShapeViolationError
            If the orders of `a` and `b` differ.
        """
        if a.order != b.order:
            raise ShapeViolationError(
                f"Cannot link binomial trees of orders {a.order} and {b.order}"
            )
        if comparator(a.value, b.value) <= 0:
            parent, child = a, b
        else:
            parent, child = b, a
        parent.children.insert(0, child)
        parent.order += 1
        return parent

    def size(self) -> int:
        return 1 << self.order

    def preorder(self) -> list[Any]:
        """Values in preorder: the root first, then each child subtree."""
        values = []
        stack = [self]
        while stack:
            node = stack.pop()
            values.append(node.value)
            stack.extend(reversed(node.children))
        return values

    def __iter__(self) -> Iterator[Any]:
        return iter(self.preorder())

    def __len__(self) -> int:
        return self.size()

    def _validate(self, comparator: Comparator = default_comparator) -> bool:
        """Check the binomial shape and heap order of the whole subtree."""
        stack = [self]
        while stack:
            node = stack.pop()
            if len(node.children) != node.order:
                return False
            for expected, child in zip(
                range(node.order - 1, -1, -1), node.children
            ):
                if child.order != expected:
                    return False
                if comparator(node.value, child.value) > 0:
                    return False
                stack.append(child)
        return True

    def __repr__(self) -> str:
        return f"BinomialTree(value={self.value!r}, order={self.order})"
