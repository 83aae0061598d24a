import threading
import weakref
from dataclasses import dataclass


@dataclass(frozen=True)
class ScopeWindow:
	"""Half-open range [next_id, upper_bound) reserved by this instance for one scope."""

	next_id: int
	upper_bound: int

	def __post_init__(self) -> None:
		if self.next_id > self.upper_bound:
			raise ValueError(f"window start {self.next_id} is past its bound {self.upper_bound}")

	@property
	def remaining(self) -> int:
		return self.upper_bound - self.next_id

	@property
	def exhausted(self) -> bool:
		return self.next_id == self.upper_bound

	def take(self, count: int = 1) -> "ScopeWindow":
		"""Return the window left after issuing `count` ids from the front."""
		return ScopeWindow(self.next_id + count, self.upper_bound)


class ScopeGuards:
	"""
	Lazily created lock per scope name; unrelated scopes never contend.

	Locks are held weakly: once no caller references a scope's lock it is discarded,
	and the next caller gets a fresh one.
	"""

	def __init__(self):
		self._registry_lock = threading.Lock()
		self._locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()

	def for_scope(self, scope_name: str) -> threading.Lock:
		with self._registry_lock:
			lock = self._locks.get(scope_name)
			if lock is None:
				lock = self._locks[scope_name] = threading.Lock()
			return lock

	def __len__(self) -> int:
		with self._registry_lock:
			return len(self._locks)
