from heapforest.tree.binomial.binomial_tree import BinomialTree
