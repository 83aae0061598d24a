import os
import sys

import pytest

# Add src to PYTHONPATH so tests run from a plain checkout
PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
	sys.path.insert(0, SRC_DIR)

from blockid.memory_store import InMemoryOptimisticDataStore  # noqa: E402
from blockid.unique_id_generator import UniqueIdGenerator  # noqa: E402


@pytest.fixture
def store():
	return InMemoryOptimisticDataStore()


@pytest.fixture
def make_generator(store):
	def _make(batch_size: int = 3, **kwargs) -> UniqueIdGenerator:
		kwargs.setdefault("backoff_base", 0)
		return UniqueIdGenerator(store, batch_size=batch_size, **kwargs)

	return _make
