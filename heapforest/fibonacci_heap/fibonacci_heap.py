import logging
from typing import Any, Iterable, Iterator, Optional

from heapforest.exceptions import (
    ConsumedHeapError,
    EmptyHeapError,
    InvalidDecreaseError,
    InvalidHandleError,
)
from heapforest.ordering import Comparator, as_values, resolve_comparator

logger = logging.getLogger(__name__)


class _OwnerToken:
    """
    Identity of the heap a node lives in.

    When a heap is merged into another one its token is forwarded to the
    surviving heap's token, so the nodes it spliced over stay owned without
    being touched.
    """
    __slots__ = ("forward",)

    def __init__(self) -> None:
        self.forward = None

    def resolve(self) -> "_OwnerToken":
        root = self
        while root.forward is not None:
            root = root.forward
        # path compression
        token = self
        while token is not root:
            following = token.forward
            token.forward = root
            token = following
        return root


class FibonacciNode:
    """
    Node of a Fibonacci heap, handed out by `FibonacciHeap.insert` as the
    handle for later `decrease_key` and `delete` calls.

    Siblings form a circular doubly linked ring through `_left`/`_right`;
    `_child` points at any one node of the child ring. A node is marked
    once it has lost a child since it last became a child itself.
    """
    __slots__ = (
        "_value", "_degree", "_marked", "_parent", "_child",
        "_left", "_right", "_owner"
    )

    def __init__(self, value: Any, owner: Optional[_OwnerToken]) -> None:
        self._value = value
        self._degree = 0
        self._marked = False
        self._parent = None
        self._child = None
        self._left = self
        self._right = self
        self._owner = owner

    @property
    def value(self) -> Any:
        return self._value

    @property
    def degree(self) -> int:
        return self._degree

    @property
    def marked(self) -> bool:
        return self._marked

    @property
    def parent(self) -> Optional["FibonacciNode"]:
        return self._parent

    @property
    def is_root(self) -> bool:
        return self._parent is None

    @property
    def is_alive(self) -> bool:
        """False once the node has been extracted, deleted or cleared."""
        return self._owner is not None

    def children(self) -> list["FibonacciNode"]:
        if self._child is None:
            return []
        return self._child._siblings()

    def _siblings(self) -> list["FibonacciNode"]:
        """Every node of this node's ring, starting with this one."""
        nodes = [self]
        node = self._right
        while node is not self:
            nodes.append(node)
            node = node._right
        return nodes

    def _insert_before(self, node: "FibonacciNode") -> None:
        """Put the singleton `node` to the left of this node in its ring."""
        node._left = self._left
        node._right = self
        self._left._right = node
        self._left = node

    def _splice(self, node: "FibonacciNode") -> None:
        """Join the ring holding `node` into the ring holding this node."""
        own_right = self._right
        other_right = node._right
        own_right._left = node
        other_right._left = self
        self._right = other_right
        node._right = own_right

    def _unlink(self) -> None:
        """Take this node out of its ring, leaving it a singleton."""
        self._left._right = self._right
        self._right._left = self._left
        self._left = self
        self._right = self

    def __repr__(self) -> str:
        return (
            f"FibonacciNode(value={self._value!r}, degree={self._degree}, "
            f"marked={self._marked})"
        )


class FibonacciHeap:
    """
    Fibonacci heap.

    A circular ring of heap-ordered trees with a pointer to the root holding
    the minimum. Insert and merge only splice rings, in O(1). Trees of
    equal degree are linked lazily, when `extract_min` consolidates the
    root ring, in amortized O(log n). `decrease_key` cuts a node that
    became smaller than its parent back to the root ring; a parent losing
    its second child is cut as well (cascading cut), which keeps a node of
    degree `k` above `F(k+2)` descendants and decrease-key in amortized
    O(1).

    `insert` returns the node as a handle. Handles stay valid through
    merges and become invalid once their value is extracted or deleted.

    Parameters
    ----------
    values : Iterable[Any], optional
        Initial values (a numpy array is accepted).
    comparator : Callable[[Any, Any], int], optional
        Three-way comparison, by default the natural ordering.
    is_max_heap : bool
        Reverse the comparator so the largest value comes out first. The
        key operations then move values upwards: `decrease_key` accepts
        only values ordering before the current one.
    """

    def __init__(
        self,
        values: Optional[Iterable[Any]] = None,
        comparator: Optional[Comparator] = None,
        is_max_heap: bool = False
    ) -> None:
        self._comparator = resolve_comparator(comparator, is_max_heap)
        self._is_max_heap = is_max_heap
        self._min = None
        self._count = 0
        self._token = _OwnerToken()
        self._consumed = False
        self.insert_many(values)

    @classmethod
    def min_heap(
        cls,
        values: Optional[Iterable[Any]] = None,
        comparator: Optional[Comparator] = None
    ) -> "FibonacciHeap":
        return cls(values, comparator, is_max_heap=False)

    @classmethod
    def max_heap(
        cls,
        values: Optional[Iterable[Any]] = None,
        comparator: Optional[Comparator] = None
    ) -> "FibonacciHeap":
        return cls(values, comparator, is_max_heap=True)

    @property
    def comparator(self) -> Comparator:
        return self._comparator

    @property
    def is_max_heap(self) -> bool:
        return self._is_max_heap

    def __len__(self) -> int:
        self._check_usable()
        return self._count

    def __bool__(self) -> bool:
        self._check_usable()
        return self._count > 0

    def is_empty(self) -> bool:
        self._check_usable()
        return self._count == 0

    def _check_usable(self) -> None:
        if self._consumed:
            raise ConsumedHeapError(
                "Heap was merged into another heap and can no longer be used"
            )

    def owns(self, handle: Any) -> bool:
        """Whether `handle` is a live node of this heap."""
        return (
            isinstance(handle, FibonacciNode)
            and handle._owner is not None
            and handle._owner.resolve() is self._token
        )

    __contains__ = owns

    def _check_handle(self, handle: Any) -> FibonacciNode:
        self._check_usable()
        if not self.owns(handle):
            raise InvalidHandleError(
                f"{handle!r} is not an element of this heap"
            )
        return handle

    def _add_root(self, node: FibonacciNode) -> None:
        if self._min is None:
            node._left = node
            node._right = node
            self._min = node
        else:
            self._min._insert_before(node)

    def insert(self, value: Any) -> FibonacciNode:
        """
        Add `value` as a singleton root tree.

        Returns
        -------
        FibonacciNode
            Handle for `decrease_key` and `delete`.
        """
        self._check_usable()
        node = FibonacciNode(value, self._token)
        self._add_root(node)
        if self._comparator(value, self._min._value) < 0:
            self._min = node
        self._count += 1
        return node

    def insert_many(
        self,
        values: Optional[Iterable[Any]]
    ) -> list[FibonacciNode]:
        return [self.insert(value) for value in as_values(values)]

    def merge(self, other: "FibonacciHeap") -> "FibonacciHeap":
        """
        Splice the root ring of `other` into this heap in O(1).

        `other` is consumed: any later use of it raises `ConsumedHeapError`.
        Handles obtained from `other` now refer to values of this heap.

        Raises
        ------
        ValueError
            If `other` is this heap, is not a FibonacciHeap or uses another
            comparator.
        """
        self._check_usable()
        if other is self:
            raise ValueError("Cannot merge a heap with itself")
        if not isinstance(other, FibonacciHeap):
            raise ValueError(
                f"Cannot merge FibonacciHeap with {type(other).__name__}"
            )
        other._check_usable()
        if other._comparator != self._comparator:
            raise ValueError("Cannot merge heaps with different comparators")

        if other._min is not None:
            if self._min is None:
                self._min = other._min
            else:
                self._min._splice(other._min)
                if self._comparator(other._min._value, self._min._value) < 0:
                    self._min = other._min
        self._count += other._count
        logger.debug(
            "merged fibonacci heap of %d values, %d values now",
            other._count, self._count
        )

        other._token.forward = self._token
        other._min = None
        other._count = 0
        other._consumed = True
        return self

    def find_min(self) -> Any:
        """
        Return the first value in heap order without removing it.

        Raises
        ------
        EmptyHeapError
            If the heap holds no values.
        """
        self._check_usable()
        if self._min is None:
            raise EmptyHeapError("Heap is empty")
        return self._min._value

    def extract_min(self) -> Any:
        """
        Remove and return the first value in heap order.

        The children of the minimum join the root ring, then the ring is
        consolidated until no two roots share a degree.

        Raises
        ------
        EmptyHeapError
            If the heap holds no values.
        """
        self._check_usable()
        node = self._min
        if node is None:
            raise EmptyHeapError("Heap is empty")

        if node._child is not None:
            for child in node._child._siblings():
                child._parent = None
                child._marked = False
            node._splice(node._child)
            node._child = None
            node._degree = 0

        if node._right is node:
            self._min = None
        else:
            self._min = node._right
            node._unlink()
            self._consolidate()

        self._count -= 1
        node._owner = None
        return node._value

    peek = find_min
    top = extract_min

    def _link(self, a: FibonacciNode, b: FibonacciNode) -> FibonacciNode:
        """Make one of two roots a child of the other; `a` wins ties."""
        if self._comparator(a._value, b._value) <= 0:
            parent, child = a, b
        else:
            parent, child = b, a
        child._unlink()
        if parent._child is None:
            parent._child = child
        else:
            parent._child._insert_before(child)
        child._parent = parent
        child._marked = False
        parent._degree += 1
        return parent

    def _consolidate(self) -> None:
        roots = self._min._siblings()
        by_degree = []
        for node in roots:
            degree = node._degree
            while degree < len(by_degree) and by_degree[degree] is not None:
                other = by_degree[degree]
                by_degree[degree] = None
                node = self._link(other, node)
                degree = node._degree
            if degree >= len(by_degree):
                by_degree.extend([None] * (degree + 1 - len(by_degree)))
            by_degree[degree] = node

        self._min = None
        remaining = 0
        for node in by_degree:
            if node is None:
                continue
            remaining += 1
            if (self._min is None
                    or self._comparator(node._value, self._min._value) < 0):
                self._min = node
        logger.debug("consolidated %d roots into %d", len(roots), remaining)

    def decrease_key(self, handle: FibonacciNode, value: Any) -> None:
        """
        Replace the value of `handle` with one ordering strictly before it.

        If the node now orders before its parent it is cut to the root
        ring, and its ancestors are cut in cascade while they are marked.

        Raises
        ------
        InvalidHandleError
            If `handle` is not a live node of this heap.
        InvalidDecreaseError
            If `value` does not order strictly before the current value.
        """
        node = self._check_handle(handle)
        if self._comparator(value, node._value) >= 0:
            raise InvalidDecreaseError(
                f"{value!r} does not precede the current value "
                f"{node._value!r}"
            )
        node._value = value
        parent = node._parent
        if (parent is not None
                and self._comparator(value, parent._value) < 0):
            self._cut(node, parent)
            self._cascading_cut(parent)
        if self._comparator(value, self._min._value) < 0:
            self._min = node

    def delete(self, handle: FibonacciNode) -> Any:
        """
        Remove the value of `handle` from the heap and return it.

        The node is cut to the root ring as if its value had been decreased
        below every other value, then extracted as the minimum.

        Raises
        ------
        InvalidHandleError
            If `handle` is not a live node of this heap.
        """
        node = self._check_handle(handle)
        parent = node._parent
        if parent is not None:
            self._cut(node, parent)
            self._cascading_cut(parent)
        self._min = node
        return self.extract_min()

    def _cut(self, node: FibonacciNode, parent: FibonacciNode) -> None:
        """Move `node` from the child ring of `parent` to the root ring."""
        if parent._child is node:
            parent._child = node._right if node._right is not node else None
        node._unlink()
        parent._degree -= 1
        node._parent = None
        node._marked = False
        self._add_root(node)

    def _cascading_cut(self, node: FibonacciNode) -> None:
        """
        Walk up from a node that just lost a child: marked ancestors are
        cut, the first unmarked non-root ancestor gets marked.
        """
        cuts = 0
        while node._parent is not None:
            if not node._marked:
                node._marked = True
                break
            parent = node._parent
            self._cut(node, parent)
            cuts += 1
            node = parent
        if cuts:
            logger.debug("cascading cut moved %d nodes to the root ring", cuts)

    def _nodes(self) -> list[FibonacciNode]:
        if self._min is None:
            return []
        nodes = []
        stack = self._min._siblings()
        while stack:
            node = stack.pop()
            nodes.append(node)
            stack.extend(node.children())
        return nodes

    def __iter__(self) -> Iterator[Any]:
        """Iterate over the stored values in no particular order."""
        self._check_usable()
        for node in self._nodes():
            yield node._value

    def roots(self) -> list[FibonacciNode]:
        """Root nodes in ring order, starting with the minimum."""
        self._check_usable()
        if self._min is None:
            return []
        return self._min._siblings()

    def root_count(self) -> int:
        return len(self.roots())

    def preorder(self) -> list[list[Any]]:
        """
        Values of each tree in preorder, one list per root, starting with
        the tree holding the minimum.
        """
        self._check_usable()
        trees = []
        for root in self.roots():
            values = []
            stack = [root]
            while stack:
                node = stack.pop()
                values.append(node._value)
                stack.extend(reversed(node.children()))
            trees.append(values)
        return trees

    def clear(self) -> None:
        """Remove every value, invalidating all handles."""
        self._check_usable()
        for node in self._nodes():
            node._owner = None
        self._min = None
        self._count = 0

    def _validate(self) -> bool:
        """
        Check ring links, parent links, degrees, heap order, marks on
        roots, the element count and the minimum pointer.
        """
        if self._min is None:
            return self._count == 0

        comparator = self._comparator
        total = 0
        stack = []
        for root in self._min._siblings():
            if root._parent is not None or root._marked:
                return False
            if comparator(root._value, self._min._value) < 0:
                return False
            stack.append(root)

        while stack:
            node = stack.pop()
            total += 1
            if node._right._left is not node or node._left._right is not node:
                return False
            if not self.owns(node):
                return False
            children = node.children()
            if len(children) != node._degree:
                return False
            for child in children:
                if child._parent is not node:
                    return False
                if comparator(node._value, child._value) > 0:
                    return False
                stack.append(child)
        return total == self._count

    def __repr__(self) -> str:
        kind = "max" if self._is_max_heap else "min"
        return f"FibonacciHeap({kind}, size={self._count})"
