import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .dynamodb_store import DynamoDbOptimisticDataStore
from .errors import InvalidArgumentError
from .logging import resolve_level
from .unique_id_generator import UniqueIdGenerator

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


@dataclass
class GeneratorSettings:
	table_name: str = "id_counters"
	region_name: str = "ap-south-1"
	endpoint_url: Optional[str] = None
	batch_size: int = 100
	initial_value: int = 0
	max_write_attempts: int = 25
	create_table_if_not_exists: bool = False
	log_json: bool = False
	log_level: str = "INFO"

	@classmethod
	def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GeneratorSettings":
		"""Build settings from BLOCKID_* variables (AWS_REGION is honoured for the region)."""
		env = os.environ if environ is None else environ
		defaults = cls()
		return cls(
			table_name=env.get("BLOCKID_TABLE_NAME", defaults.table_name),
			region_name=env.get("BLOCKID_REGION") or env.get("AWS_REGION") or defaults.region_name,
			endpoint_url=env.get("BLOCKID_ENDPOINT_URL") or None,
			batch_size=_int(env, "BLOCKID_BATCH_SIZE", defaults.batch_size, minimum=1),
			initial_value=_int(env, "BLOCKID_INITIAL_VALUE", defaults.initial_value, minimum=0),
			max_write_attempts=_int(env, "BLOCKID_MAX_WRITE_ATTEMPTS", defaults.max_write_attempts, minimum=1),
			create_table_if_not_exists=_bool(env, "BLOCKID_CREATE_TABLE", defaults.create_table_if_not_exists),
			log_json=_bool(env, "BLOCKID_LOG_JSON", defaults.log_json),
			log_level=_level(env, "BLOCKID_LOG_LEVEL", defaults.log_level),
		)


def build_generator(settings: GeneratorSettings, boto3_resource: Optional[object] = None) -> UniqueIdGenerator:
	store = DynamoDbOptimisticDataStore(
		table_name=settings.table_name,
		region_name=settings.region_name,
		endpoint_url=settings.endpoint_url,
		boto3_resource=boto3_resource,
		create_table_if_not_exists=settings.create_table_if_not_exists,
	)
	return UniqueIdGenerator(
		store,
		batch_size=settings.batch_size,
		initial_value=settings.initial_value,
		max_write_attempts=settings.max_write_attempts,
	)


def _int(env: Mapping[str, str], name: str, default: int, minimum: int) -> int:
	raw = env.get(name)
	if raw is None or raw.strip() == "":
		return default
	try:
		value = int(raw)
	except ValueError:
		raise InvalidArgumentError(f"{name} must be an integer, got {raw!r}") from None
	if value < minimum:
		raise InvalidArgumentError(f"{name} must be >= {minimum}, got {value}")
	return value


def _bool(env: Mapping[str, str], name: str, default: bool) -> bool:
	raw = env.get(name)
	if raw is None:
		return default
	lowered = raw.strip().lower()
	if lowered in _TRUE:
		return True
	if lowered in _FALSE:
		return False
	raise InvalidArgumentError(f"{name} must be a boolean, got {raw!r}")


def _level(env: Mapping[str, str], name: str, default: str) -> str:
	raw = env.get(name)
	if raw is None or raw.strip() == "":
		return default
	try:
		resolve_level(raw)
	except InvalidArgumentError:
		raise InvalidArgumentError(f"{name} must be a log level name, got {raw!r}") from None
	return raw.strip().upper()
