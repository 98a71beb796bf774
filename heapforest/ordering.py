from typing import Any, Callable, Iterable, Optional

import numpy as np

Comparator = Callable[[Any, Any], int]


def default_comparator(a: Any, b: Any) -> int:
    """Natural ordering: -1, 0 or 1 like the sign of `a - b`."""
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


class ReversedComparator:
    """
    Comparator ordering values the opposite way of `comparator`.

    Two instances wrapping the same comparator compare equal, so heaps
    configured the same way can be merged with each other.
    """
    __slots__ = ("comparator",)

    def __init__(self, comparator: Comparator) -> None:
        self.comparator = comparator

    def __call__(self, a: Any, b: Any) -> int:
        return self.comparator(b, a)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ReversedComparator):
            return NotImplemented
        return self.comparator == other.comparator

    def __hash__(self) -> int:
        return hash((ReversedComparator, self.comparator))

    def __repr__(self) -> str:
        return f"ReversedComparator({self.comparator!r})"


def reverse_comparator(comparator: Comparator) -> Comparator:
    """Return the comparator ordering values the opposite way."""
    if isinstance(comparator, ReversedComparator):
        return comparator.comparator
    return ReversedComparator(comparator)


def resolve_comparator(
    comparator: Optional[Comparator] = None,
    is_max_heap: bool = False
) -> Comparator:
    """
    Build the comparator a heap orders its values with.

    Parameters
    ----------
    comparator : Callable[[Any, Any], int], optional
        Three-way comparison function, by default the natural ordering.
    is_max_heap : bool
        Reverse the ordering so the largest value comes out first, by
        default False.

    Returns
    -------
    Callable[[Any, Any], int]
        The comparator to store on the heap.

    Raises
    ------
    TypeError
        If `comparator` is given but is not callable.
    """
    if comparator is None:
        comparator = default_comparator
    elif not callable(comparator):
        raise TypeError(
            f"comparator must be callable, got {type(comparator).__name__}"
        )
    if is_max_heap:
        return reverse_comparator(comparator)
    return comparator


def as_values(values: Optional[Iterable[Any]]) -> Iterable[Any]:
    """Turn numpy arrays into Python scalars before they enter a heap."""
    if values is None:
        return ()
    if isinstance(values, np.ndarray):
        return values.tolist()
    return values
