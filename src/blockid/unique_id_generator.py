import time
from typing import Dict, List, Optional

import structlog

from .cancellation import CancellationToken, check
from .codec import advance_counter, decode_counter, encode_counter
from .errors import ContentionError, InvalidArgumentError
from .id_generator import IdGenerator
from .store import OptimisticDataStore
from .window import ScopeGuards, ScopeWindow

logger = structlog.get_logger(__name__)


class UniqueIdGenerator(IdGenerator):
	"""
	Hands out ids per scope from locally cached batches reserved in a shared store.

	- Each scope keeps an in-memory window [next_id, upper_bound); ids are served from it
	  without touching the store.
	- When the window runs dry a new batch is reserved with an optimistic write: read the
	  counter V, write V + batch_size on condition the store still holds V, retry on conflict.
	- Conflicts back off exponentially and give up with ContentionError after
	  `max_write_attempts` lost writes. Store faults are never retried here.
	- Thread-safe: one lock per scope serialises refills and issuance for that scope.
	- Unused ids of a window are lost when the process exits; they are never handed out again.
	"""

	def __init__(
		self,
		store: OptimisticDataStore,
		batch_size: int = 100,
		initial_value: int = 0,
		max_write_attempts: int = 25,
		backoff_base: float = 0.01,
		backoff_max: float = 0.5,
	):
		if isinstance(batch_size, bool) or not isinstance(batch_size, int) or batch_size <= 0:
			raise InvalidArgumentError("batch_size must be a positive integer")
		if isinstance(initial_value, bool) or not isinstance(initial_value, int) or initial_value < 0:
			raise InvalidArgumentError("initial_value must be a non-negative integer")
		if isinstance(max_write_attempts, bool) or not isinstance(max_write_attempts, int) or max_write_attempts <= 0:
			raise InvalidArgumentError("max_write_attempts must be a positive integer")
		if backoff_base < 0 or backoff_max < 0:
			raise InvalidArgumentError("backoff delays must not be negative")
		self._store = store
		self._batch_size = batch_size
		self._initial_value = initial_value
		self._max_write_attempts = max_write_attempts
		self._backoff_base = backoff_base
		self._backoff_max = backoff_max

		self._guards = ScopeGuards()
		self._windows: Dict[str, ScopeWindow] = {}

	@property
	def batch_size(self) -> int:
		return self._batch_size

	def next_id(self, scope_name: str, cancellation: Optional[CancellationToken] = None) -> int:
		_validate_scope(scope_name)
		with self._guards.for_scope(scope_name):
			window = self._available_window(scope_name, cancellation)
			self._consume(scope_name, window, 1)
			return window.next_id

	def get_id_range(
		self, scope_name: str, count: int, cancellation: Optional[CancellationToken] = None
	) -> List[int]:
		"""
		Issue `count` ids in one call.

		Ids are consecutive inside a batch. When the call spans a batch boundary the next
		batch may start further on, past ranges other instances reserved meanwhile.

		If reserving a later batch fails, the ids already taken from earlier batches in this
		call are lost rather than handed back; they are never issued again.
		"""
		_validate_scope(scope_name)
		if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
			raise InvalidArgumentError("count must be a positive integer")
		with self._guards.for_scope(scope_name):
			result: List[int] = []
			remaining = count
			while remaining > 0:
				window = self._available_window(scope_name, cancellation)
				take = min(remaining, window.remaining)
				result.extend(range(window.next_id, window.next_id + take))
				self._consume(scope_name, window, take)
				remaining -= take
			return result

	def cached_scopes(self) -> int:
		"""Number of scopes currently holding unissued ids in memory."""
		return len(self._windows)

	# Both helpers below expect the caller to hold the scope guard.

	def _available_window(self, scope_name: str, cancellation: Optional[CancellationToken]) -> ScopeWindow:
		window = self._windows.get(scope_name)
		if window is None:
			window = self._acquire_batch(scope_name, cancellation)
			self._windows[scope_name] = window
		return window

	def _consume(self, scope_name: str, window: ScopeWindow, count: int) -> None:
		left = window.take(count)
		if left.exhausted:
			# An exhausted window is the same as none.
			del self._windows[scope_name]
		else:
			self._windows[scope_name] = left

	def _acquire_batch(self, scope_name: str, cancellation: Optional[CancellationToken]) -> ScopeWindow:
		attempt = 0
		while True:
			check(cancellation)
			data = self._store.get_data(scope_name, cancellation)
			start = decode_counter(data, self._initial_value)
			upper_bound = advance_counter(start, self._batch_size)

			check(cancellation)
			if self._store.try_optimistic_write(scope_name, data, encode_counter(upper_bound), cancellation):
				logger.info(
					"reserved id batch",
					scope=scope_name,
					start=start,
					upper_bound=upper_bound,
					attempts=attempt + 1,
				)
				return ScopeWindow(start, upper_bound)

			attempt += 1
			if attempt >= self._max_write_attempts:
				logger.error("giving up on id batch", scope=scope_name, attempts=attempt)
				raise ContentionError(
					f"failed to reserve ids for scope {scope_name!r} after {attempt} conflicting writes"
				)
			delay = min(self._backoff_base * (2 ** (attempt - 1)), self._backoff_max)
			logger.warning("id batch write conflict", scope=scope_name, attempt=attempt, retry_in=delay)
			if cancellation is not None:
				cancellation.sleep(delay)
			elif delay > 0:
				time.sleep(delay)


def _validate_scope(scope_name: str) -> None:
	if not isinstance(scope_name, str) or not scope_name:
		raise InvalidArgumentError("scope_name must be a non-empty string")
