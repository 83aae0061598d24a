"""Typed failures raised while generating ids."""


class IdGenerationError(Exception):
	"""Base class for every failure raised by blockid."""


class InvalidArgumentError(IdGenerationError, ValueError):
	"""Empty scope name, non-positive batch size or count, bad setting."""


class StoreUnavailableError(IdGenerationError):
	"""The backing store could not be reached or rejected the request."""


class StoreCorruptedError(IdGenerationError):
	"""The stored counter is not a valid non-negative decimal integer."""


class ContentionError(IdGenerationError):
	"""Conditional writes kept losing until the attempt ceiling was hit."""


class CounterOverflowError(IdGenerationError):
	"""Reserving another batch would push the counter past its maximum."""


class CancelledError(IdGenerationError):
	"""The call was cancelled or its deadline passed."""
