from heapforest import BinomialHeap, FibonacciHeap, get_topk


values = [10.5, 3.2, 15.0, 7.8, 20.1, 1.5]

# Create a binomial heap
print("Creating binomial heap...")
heap = BinomialHeap(values)

# Test basic properties
print(f"Heap size: {len(heap)}")
print(f"Is empty: {heap.is_empty()}")
print(f"Root orders: {heap.orders()}")
print(f"Top 3: {get_topk(heap, 3)}")
print(f"Minimum: {heap.extract_min()}")

# Fibonacci heap with handles
print("Creating fibonacci heap...")
fib = FibonacciHeap.min_heap()
handles = {value: fib.insert(value) for value in values}
print(f"Minimum: {fib.find_min()}")

fib.decrease_key(handles[20.1], 0.5)
print(f"Minimum after decrease_key: {fib.find_min()}")

fib.delete(handles[3.2])
print(f"Drained: {[fib.extract_min() for _ in range(len(fib))]}")
