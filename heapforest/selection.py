from functools import cmp_to_key
from typing import Any, Iterable, Optional, Union

import numpy as np

from heapforest.binomial_heap.binomial_heap import BinomialHeap
from heapforest.fibonacci_heap.fibonacci_heap import FibonacciHeap
from heapforest.ordering import Comparator

Heap = Union[BinomialHeap, FibonacciHeap]


def get_topk(heap: Heap, k: int) -> list[Any]:
    """
    Function to get the top-K values of a heap without modifying it.

    For a min heap these are the K smallest values, for a max heap the K
    largest, in the order `extract_min` would return them.

    Parameters
    ----------
    heap : BinomialHeap | FibonacciHeap
        The heap to read from.
    k : int
        The number of 'top-K' values to retrieve.

    Returns
    -------
    list[Any]
        The 'top-K' values.

    Raises
    ------
    ConsumedHeapError
        If `heap` was merged into another heap.
    """
    if heap.is_empty():
        return []
    if k <= 0:
        return []

    values = sorted(heap, key=cmp_to_key(heap.comparator))
    return values[:k]


def heapsort(
    values: Iterable[Any],
    comparator: Optional[Comparator] = None,
    is_max_heap: bool = False,
    heap_type: type = BinomialHeap
) -> Union[list[Any], np.ndarray]:
    """
    Sort values by pushing them through a heap.

    Parameters
    ----------
    values : Iterable[Any]
        Values to sort; a numpy array is accepted.
    comparator : Callable[[Any, Any], int], optional
        Three-way comparison, by default the natural ordering.
    is_max_heap : bool
        Sort in descending order, by default False.
    heap_type : type
        `BinomialHeap` or `FibonacciHeap`, by default BinomialHeap.

    Returns
    -------
    list[Any] | np.ndarray
        The sorted values, as an array of the input dtype when `values` is
        a numpy array.
    """
    if heap_type not in (BinomialHeap, FibonacciHeap):
        raise ValueError(
            f"heap_type must be BinomialHeap or FibonacciHeap, "
            f"got {heap_type!r}"
        )
    heap = heap_type(values, comparator, is_max_heap)
    result = [heap.extract_min() for _ in range(len(heap))]
    if isinstance(values, np.ndarray):
        return np.array(result, dtype=values.dtype)
    return result
