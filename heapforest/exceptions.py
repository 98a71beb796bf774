class HeapError(Exception):
    """Base class for every error raised by heapforest."""


class EmptyHeapError(HeapError, RuntimeError):
    """Raised when the minimum of a heap holding no elements is requested."""


class InvalidDecreaseError(HeapError, ValueError):
    """Raised when decrease_key is given a value that does not strictly
    precede the current one under the heap comparator."""


class ShapeViolationError(HeapError, AssertionError):
    """Raised when two binomial trees of different orders are linked."""


class InvalidHandleError(HeapError, ValueError):
    """Raised when a handle is not (or no longer) part of the heap."""


class ConsumedHeapError(HeapError, RuntimeError):
    """Raised when a heap is used after being merged into another heap."""
