import gc
import weakref

import numpy as np
import pytest

from heapforest.binomial_heap.binomial_heap import BinomialHeap
from heapforest.ordering import (
    as_values,
    default_comparator,
    resolve_comparator,
    reverse_comparator,
)


class TestOrdering:
    def test_default_comparator(self):
        assert default_comparator(1, 2) < 0
        assert default_comparator(2, 1) > 0
        assert default_comparator(2, 2) == 0
        assert default_comparator("a", "b") < 0

    def test_default_comparator_numpy_scalars(self):
        assert default_comparator(np.int64(1), np.int64(2)) == -1
        assert default_comparator(np.float64(2.5), 1.0) == 1

    def test_reverse_comparator(self):
        comparator = reverse_comparator(default_comparator)
        assert comparator(1, 2) > 0
        assert comparator(2, 1) < 0
        assert comparator(3, 3) == 0

    def test_reversed_comparators_compare_equal(self):
        """Test reversing the same comparator twice gives equal comparators"""
        assert (
            reverse_comparator(default_comparator)
            == reverse_comparator(default_comparator)
        )
        assert reverse_comparator(default_comparator) != default_comparator
        assert len({reverse_comparator(default_comparator),
                    reverse_comparator(default_comparator)}) == 1

    def test_reverse_comparator_twice_restores_original(self):
        """Test reversing a reversed comparator unwraps it"""
        reversed_twice = reverse_comparator(
            reverse_comparator(default_comparator)
        )
        assert reversed_twice is default_comparator

    def test_reverse_comparator_keeps_no_reference(self):
        """Test reversed comparators are not retained after the heap is gone"""
        def by_length(a, b):
            return len(a) - len(b)

        ref = weakref.ref(by_length)
        heap = BinomialHeap.max_heap(["a", "bbb"], comparator=by_length)
        assert heap.find_min() == "bbb"

        del heap
        del by_length
        gc.collect()
        assert ref() is None

    def test_resolve_comparator(self):
        assert resolve_comparator() is default_comparator
        assert resolve_comparator(is_max_heap=True) == reverse_comparator(
            default_comparator
        )

        def by_length(a, b):
            return len(a) - len(b)

        assert resolve_comparator(by_length) is by_length
        assert resolve_comparator(by_length, True)("aa", "b") < 0

    def test_resolve_comparator_rejects_non_callable(self):
        with pytest.raises(TypeError, match="comparator must be callable"):
            resolve_comparator("not callable")

    def test_as_values(self):
        assert list(as_values(None)) == []
        assert as_values(np.array([1, 2])) == [1, 2]
        values = [3, 4]
        assert as_values(values) is values
