from abc import ABC, abstractmethod
from typing import Optional

from .cancellation import CancellationToken


class OptimisticDataStore(ABC):
	"""
	Shared counter storage used by every generator instance.

	One record per scope holds the decimal-string exclusive upper bound of all
	ids ever reserved for that scope.
	"""

	@abstractmethod
	def get_data(self, scope_name: str, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
		"""Return the stored counter for `scope_name`, or None if the scope was never written."""
		raise NotImplementedError

	@abstractmethod
	def try_optimistic_write(
		self,
		scope_name: str,
		expected_data: Optional[str],
		data: str,
		cancellation: Optional[CancellationToken] = None,
	) -> bool:
		"""
		Atomically replace the counter with `data` iff it still equals `expected_data`.

		`expected_data=None` means the record must still be absent. Returns False
		without touching the store when the precondition no longer holds.
		"""
		raise NotImplementedError
