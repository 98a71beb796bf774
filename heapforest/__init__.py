from heapforest.binomial_heap.binomial_heap import BinomialHeap
from heapforest.exceptions import (
    ConsumedHeapError,
    EmptyHeapError,
    HeapError,
    InvalidDecreaseError,
    InvalidHandleError,
    ShapeViolationError,
)
from heapforest.fibonacci_heap.fibonacci_heap import (
    FibonacciHeap,
    FibonacciNode,
)
from heapforest.ordering import (
    ReversedComparator,
    default_comparator,
    reverse_comparator,
)
from heapforest.selection import get_topk, heapsort
from heapforest.tree.binomial.binomial_tree import BinomialTree

__version__ = "0.1.0"
