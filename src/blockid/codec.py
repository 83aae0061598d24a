import re
from typing import Optional

from .errors import CounterOverflowError, StoreCorruptedError

# Counters are stored as signed 64-bit values by every backend we target.
MAX_COUNTER = 2 ** 63 - 1

_DECIMAL = re.compile(r"[0-9]+")


def decode_counter(data: Optional[str], default: int) -> int:
	"""
	Parse a stored counter value.

	`None` means the scope has never been written and maps to `default`.
	Anything other than a plain ASCII decimal within [0, MAX_COUNTER] raises
	StoreCorruptedError.
	"""
	if data is None:
		return default
	if not isinstance(data, str) or _DECIMAL.fullmatch(data) is None:
		raise StoreCorruptedError(f"counter value {data!r} is not a non-negative decimal integer")
	value = int(data)
	if value > MAX_COUNTER:
		raise StoreCorruptedError(f"counter value {data!r} exceeds {MAX_COUNTER}")
	return value


def encode_counter(value: int) -> str:
	if value < 0 or value > MAX_COUNTER:
		raise CounterOverflowError(f"counter value {value} is outside [0, {MAX_COUNTER}]")
	return str(value)


def advance_counter(value: int, batch_size: int) -> int:
	"""Return `value + batch_size`, refusing to go past MAX_COUNTER."""
	if value > MAX_COUNTER - batch_size:
		raise CounterOverflowError(
			f"reserving {batch_size} ids after {value} would exceed {MAX_COUNTER}"
		)
	return value + batch_size
