from abc import ABC, abstractmethod
from typing import List, Optional

from .cancellation import CancellationToken


class IdGenerator(ABC):
	@abstractmethod
	def next_id(self, scope_name: str, cancellation: Optional[CancellationToken] = None) -> int:
		"""Get the next ID number for `scope_name` (unique across instances, increasing per instance)."""
		raise NotImplementedError

	@abstractmethod
	def get_id_range(
		self, scope_name: str, count: int, cancellation: Optional[CancellationToken] = None
	) -> List[int]:
		"""Get `count` increasing ID numbers for `scope_name`."""
		raise NotImplementedError
