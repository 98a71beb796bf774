from heapforest.binomial_heap.binomial_heap import BinomialHeap
