from heapforest.fibonacci_heap.fibonacci_heap import (
    FibonacciHeap,
    FibonacciNode,
)
