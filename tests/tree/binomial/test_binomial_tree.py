import pytest

from heapforest.exceptions import ShapeViolationError
from heapforest.ordering import default_comparator, reverse_comparator
from heapforest.tree.binomial.binomial_tree import BinomialTree


def build(values):
    """Link len(values) == 2**k singletons pairwise into one tree."""
    trees = [BinomialTree(value) for value in values]
    while len(trees) > 1:
        trees = [
            BinomialTree.link(trees[i], trees[i + 1])
            for i in range(0, len(trees), 2)
        ]
    return trees[0]


class TestBinomialTree:
    def test_singleton(self):
        tree = BinomialTree(0)
        assert tree.value == 0
        assert tree.order == 0
        assert tree.children == []
        assert tree.size() == 1
        assert tree.preorder() == [0]
        assert tree._validate()

    def test_link_order_0(self):
        tree = BinomialTree.link(BinomialTree(0), BinomialTree(1))
        assert tree.value == 0
        assert tree.order == 1
        assert tree.preorder() == [0, 1]
        assert tree._validate()

    def test_link_smaller_root_wins(self):
        tree = BinomialTree.link(BinomialTree(5), BinomialTree(2))
        assert tree.value == 2
        assert [child.value for child in tree.children] == [5]

    def test_link_tie_keeps_first_operand(self):
        a = BinomialTree(7)
        b = BinomialTree(7)
        tree = BinomialTree.link(a, b)
        assert tree is a
        assert tree.children == [b]

    def test_link_order_1(self):
        left = BinomialTree.link(BinomialTree(0), BinomialTree(1))
        right = BinomialTree.link(BinomialTree(2), BinomialTree(3))
        tree = BinomialTree.link(left, right)

        assert tree.order == 2
        assert len(tree) == 4
        # newest child goes leftmost, children sorted by descending order
        assert [child.order for child in tree.children] == [1, 0]
        assert tree.preorder() == [0, 2, 3, 1]
        assert tree._validate()

    def test_link_order_2(self):
        tree = build([0, 1, 2, 3, 1, 2, 5, 6])
        assert tree.order == 3
        assert tree.size() == 8
        assert [child.order for child in tree.children] == [2, 1, 0]
        assert sorted(tree.preorder()) == [0, 1, 1, 2, 2, 3, 5, 6]
        assert list(tree) == tree.preorder()
        assert tree._validate()

    @pytest.mark.parametrize("order", [0, 1, 2, 3, 4, 5])
    def test_shape_of_order_k(self, order):
        tree = build(list(range(2 ** order)))
        assert tree.order == order
        assert len(tree.preorder()) == 2 ** order
        assert tree._validate()

    def test_link_unequal_orders_raise_error(self):
        big = BinomialTree.link(BinomialTree(0), BinomialTree(1))
        with pytest.raises(ShapeViolationError, match="orders 1 and 0"):
            BinomialTree.link(big, BinomialTree(2))

        with pytest.raises(AssertionError):
            BinomialTree.link(BinomialTree(2), big)

    def test_custom_comparator(self):
        comparator = reverse_comparator(default_comparator)
        tree = BinomialTree.link(BinomialTree(1), BinomialTree(9), comparator)
        assert tree.value == 9
        assert tree._validate(comparator)
        assert not tree._validate()

    def test_validate_detects_broken_heap_order(self):
        tree = build([0, 1, 2, 3])
        tree.children[0].value = -1
        assert not tree._validate()

    def test_validate_detects_broken_shape(self):
        tree = build([0, 1, 2, 3])
        tree.children.pop()
        assert not tree._validate()
