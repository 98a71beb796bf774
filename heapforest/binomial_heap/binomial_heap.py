import logging
from typing import Any, Iterable, Iterator, Optional

from heapforest.exceptions import ConsumedHeapError, EmptyHeapError
from heapforest.ordering import Comparator, as_values, resolve_comparator
from heapforest.tree.binomial.binomial_tree import BinomialTree

logger = logging.getLogger(__name__)


class BinomialHeap:
    """
    Mergeable min-heap stored as a forest of binomial trees.

    The forest holds at most one tree per order, sorted by increasing
    order, so the root orders are the set bits of `len(heap)`. Merging two
    forests works like adding two binary numbers: trees of equal order are
    linked and carried to the next order.

    Only the minimum is reachable from outside; there is no handle to an
    arbitrary value, hence no decrease-key or delete.

    Parameters
    ----------
    values : Iterable[Any], optional
        Initial values (a numpy array is accepted).
    comparator : Callable[[Any, Any], int], optional
        Three-way comparison, by default the natural ordering.
    is_max_heap : bool
        Reverse the comparator so the largest value comes out first.
    """

    def __init__(
        self,
        values: Optional[Iterable[Any]] = None,
        comparator: Optional[Comparator] = None,
        is_max_heap: bool = False
    ) -> None:
        self._comparator = resolve_comparator(comparator, is_max_heap)
        self._is_max_heap = is_max_heap
        self._roots = []
        self._size = 0
        self._consumed = False
        self.insert_many(values)

    @classmethod
    def min_heap(
        cls,
        values: Optional[Iterable[Any]] = None,
        comparator: Optional[Comparator] = None
    ) -> "BinomialHeap":
        return cls(values, comparator, is_max_heap=False)

    @classmethod
    def max_heap(
        cls,
        values: Optional[Iterable[Any]] = None,
        comparator: Optional[Comparator] = None
    ) -> "BinomialHeap":
        return cls(values, comparator, is_max_heap=True)

    @property
    def comparator(self) -> Comparator:
        return self._comparator

    @property
    def is_max_heap(self) -> bool:
        return self._is_max_heap

    def __len__(self) -> int:
        self._check_usable()
        return self._size

    def __bool__(self) -> bool:
        self._check_usable()
        return self._size > 0

    def is_empty(self) -> bool:
        self._check_usable()
        return self._size == 0

    def _check_usable(self) -> None:
        if self._consumed:
            raise ConsumedHeapError(
                "Heap was merged into another heap and can no longer be used"
            )

    def insert(self, value: Any) -> None:
        """Add `value` as an order-0 tree and merge it into the forest."""
        self._check_usable()
        self._roots = self._meld(self._roots, [BinomialTree(value)])
        self._size += 1

    def insert_many(self, values: Optional[Iterable[Any]]) -> None:
        for value in as_values(values):
            self.insert(value)

    def merge(self, other: "BinomialHeap") -> "BinomialHeap":
        """
        Move every value of `other` into this heap.

        `other` is consumed: its trees are spliced in without copying and
        any later use of it raises `ConsumedHeapError`.

        Parameters
        ----------
        other : BinomialHeap
            Heap ordered by the same comparator.

        Returns
        -------
        BinomialHeap
            This heap, holding the values of both.

        Raises
        ------
        ValueError
            If `other` is this heap, is not a BinomialHeap or uses another
            comparator.
        """
        self._check_usable()
        if other is self:
            raise ValueError("Cannot merge a heap with itself")
        if not isinstance(other, BinomialHeap):
            raise ValueError(
                f"Cannot merge BinomialHeap with {type(other).__name__}"
            )
        other._check_usable()
        if other._comparator != self._comparator:
            raise ValueError("Cannot merge heaps with different comparators")

        self._roots = self._meld(self._roots, other._roots)
        self._size += other._size
        logger.debug(
            "merged binomial heap of %d values, %d values over %d roots",
            other._size, self._size, len(self._roots)
        )
        other._roots = []
        other._size = 0
        other._consumed = True
        return self

    def _meld(
        self,
        left: list[BinomialTree],
        right: list[BinomialTree]
    ) -> list[BinomialTree]:
        """
        Ripple-carry addition of two root lists sorted by increasing order.

        At each order at most three trees meet: one from each list and the
        carry. One tree is kept as a root, two are linked into the carry of
        the next order.
        """
        comparator = self._comparator
        roots = []
        carry = None
        i = j = 0
        while i < len(left) or j < len(right) or carry is not None:
            # the carry never exceeds the order of the remaining trees
            if carry is not None:
                order = carry.order
                same = [carry]
            else:
                heads = []
                if i < len(left):
                    heads.append(left[i].order)
                if j < len(right):
                    heads.append(right[j].order)
                order = min(heads)
                same = []
            if i < len(left) and left[i].order == order:
                same.append(left[i])
                i += 1
            if j < len(right) and right[j].order == order:
                same.append(right[j])
                j += 1

            if len(same) == 1:
                roots.append(same[0])
                carry = None
            elif len(same) == 2:
                carry = BinomialTree.link(same[0], same[1], comparator)
            else:
                roots.append(same[0])
                carry = BinomialTree.link(same[1], same[2], comparator)
        return roots

    def _min_index(self) -> int:
        if not self._roots:
            raise EmptyHeapError("Heap is empty")
        comparator = self._comparator
        best = 0
        for index in range(1, len(self._roots)):
            if comparator(self._roots[index].value,
                          self._roots[best].value) < 0:
                best = index
        return best

    def find_min(self) -> Any:
        """
        Return the first value in heap order without removing it.

        Raises
        ------
        EmptyHeapError
            If the heap holds no values.
        """
        self._check_usable()
        return self._roots[self._min_index()].value

    def extract_min(self) -> Any:
        """
        Remove and return the first value in heap order.

        The children of the removed root form a valid root list of their
        own (once put in increasing order) and are merged back in.

        Raises
        ------
        EmptyHeapError
            If the heap holds no values.
        """
        self._check_usable()
        tree = self._roots.pop(self._min_index())
        self._roots = self._meld(self._roots, tree.children[::-1])
        self._size -= 1
        return tree.value

    peek = find_min
    top = extract_min

    def orders(self) -> list[int]:
        """Orders of the root trees, increasing."""
        self._check_usable()
        return [tree.order for tree in self._roots]

    def clear(self) -> None:
        self._check_usable()
        self._roots = []
        self._size = 0

    def __iter__(self) -> Iterator[Any]:
        """Iterate over the stored values in no particular order."""
        self._check_usable()
        for tree in self._roots:
            yield from tree.preorder()

    def _validate(self) -> bool:
        """Check root ordering, tree shapes, heap order and size."""
        previous = -1
        total = 0
        for tree in self._roots:
            if tree.order <= previous:
                return False
            if not tree._validate(self._comparator):
                return False
            previous = tree.order
            total += tree.size()
        return total == self._size

    def __repr__(self) -> str:
        kind = "max" if self._is_max_heap else "min"
        orders = [tree.order for tree in self._roots]
        return f"BinomialHeap({kind}, size={self._size}, orders={orders})"
