import threading
from typing import Dict, Optional

from .cancellation import CancellationToken, check
from .store import OptimisticDataStore


class InMemoryOptimisticDataStore(OptimisticDataStore):
	"""
	Process-local store. Several generators sharing one instance behave like
	generators on different hosts sharing a real backend.
	"""

	def __init__(self, initial: Optional[Dict[str, str]] = None):
		self._lock = threading.Lock()
		self._data: Dict[str, str] = dict(initial or {})

	def get_data(self, scope_name: str, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
		check(cancellation)
		with self._lock:
			return self._data.get(scope_name)

	def try_optimistic_write(
		self,
		scope_name: str,
		expected_data: Optional[str],
		data: str,
		cancellation: Optional[CancellationToken] = None,
	) -> bool:
		check(cancellation)
		with self._lock:
			if self._data.get(scope_name) != expected_data:
				return False
			self._data[scope_name] = data
			return True

	def snapshot(self) -> Dict[str, str]:
		with self._lock:
			return dict(self._data)
