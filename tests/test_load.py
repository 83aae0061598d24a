import threading
from concurrent.futures import ThreadPoolExecutor

from blockid.memory_store import InMemoryOptimisticDataStore
from blockid.unique_id_generator import UniqueIdGenerator


def test_heavy_concurrent_mixed_workload():
	"""
	Simulate heavy concurrent access from several generator instances sharing one store,
	mixing single next_id calls with ranged allocations across a few scopes.
	Ensures uniqueness per scope and that no id lies beyond the stored counter.
	"""
	store = InMemoryOptimisticDataStore()
	generators = [
		UniqueIdGenerator(store, batch_size=size, max_write_attempts=1000, backoff_base=0)
		for size in (1, 8, 32, 100)
	]
	scopes = ["users", "orders", "invoices"]

	total_single = 3000
	ranges = [2, 3, 5, 7, 10, 20, 50]
	repeat_ranges = 30

	results = {scope: [] for scope in scopes}
	lock = threading.Lock()

	def do_single(i: int):
		scope = scopes[i % len(scopes)]
		val = generators[i % len(generators)].next_id(scope)
		with lock:
			results[scope].append(val)

	def do_range(i: int, k: int):
		scope = scopes[i % len(scopes)]
		vals = generators[(i + 1) % len(generators)].get_id_range(scope, k)
		assert vals == sorted(vals)
		with lock:
			results[scope].extend(vals)

	with ThreadPoolExecutor(max_workers=64) as ex:
		futures = [ex.submit(do_single, i) for i in range(total_single)]
		for r in range(repeat_ranges):
			for k in ranges:
				futures.append(ex.submit(do_range, r, k))
	for f in futures:
		f.result()

	assert sum(len(v) for v in results.values()) == total_single + repeat_ranges * sum(ranges)
	for scope, vals in results.items():
		assert len(set(vals)) == len(vals), scope
		assert max(vals) < int(store.get_data(scope))
