import threading
import time
from typing import Optional

from .errors import CancelledError, InvalidArgumentError


class CancellationToken:
	"""
	Cancellation signal for a single id request.

	- `cancel()` may be called from any thread.
	- An optional `timeout` (seconds) turns into a monotonic deadline measured
	  from construction; once it passes the token counts as cancelled.
	"""

	def __init__(self, timeout: Optional[float] = None):
		if timeout is not None and timeout < 0:
			raise InvalidArgumentError("timeout must not be negative")
		self._event = threading.Event()
		self._deadline = None if timeout is None else time.monotonic() + timeout

	def cancel(self) -> None:
		self._event.set()

	@property
	def cancelled(self) -> bool:
		if self._event.is_set():
			return True
		return self._deadline is not None and time.monotonic() >= self._deadline

	def remaining(self) -> Optional[float]:
		"""Seconds left before the deadline, or None when there is no deadline."""
		if self._deadline is None:
			return None
		return max(0.0, self._deadline - time.monotonic())

	def raise_if_cancelled(self) -> None:
		if self._event.is_set():
			raise CancelledError("id request was cancelled")
		if self._deadline is not None and time.monotonic() >= self._deadline:
			raise CancelledError("id request deadline exceeded")

	def sleep(self, seconds: float) -> None:
		"""Wait up to `seconds`, waking early and raising if cancelled meanwhile."""
		if seconds > 0:
			remaining = self.remaining()
			if remaining is not None:
				seconds = min(seconds, remaining)
			self._event.wait(seconds)
		self.raise_if_cancelled()


def check(token: Optional[CancellationToken]) -> None:
	if token is not None:
		token.raise_if_cancelled()
