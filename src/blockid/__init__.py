from .cancellation import CancellationToken
from .errors import (
	CancelledError,
	ContentionError,
	CounterOverflowError,
	IdGenerationError,
	InvalidArgumentError,
	StoreCorruptedError,
	StoreUnavailableError,
)
from .id_generator import IdGenerator
from .memory_store import InMemoryOptimisticDataStore
from .store import OptimisticDataStore
from .unique_id_generator import UniqueIdGenerator

__all__ = [
	"CancellationToken",
	"CancelledError",
	"ContentionError",
	"CounterOverflowError",
	"IdGenerationError",
	"IdGenerator",
	"InMemoryOptimisticDataStore",
	"InvalidArgumentError",
	"OptimisticDataStore",
	"StoreCorruptedError",
	"StoreUnavailableError",
	"UniqueIdGenerator",
]
