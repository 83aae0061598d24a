from typing import Optional

import boto3
import structlog
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from .cancellation import CancellationToken, check
from .errors import StoreCorruptedError, StoreUnavailableError
from .store import OptimisticDataStore

logger = structlog.get_logger(__name__)


class DynamoDbOptimisticDataStore(OptimisticDataStore):
	"""
	Counter store backed by a DynamoDB table.

	- One item per scope, keyed by `counter_id`, with the counter in a string attribute `value`.
	- Reads are strongly consistent so a generator always sees the latest committed batch.
	- Writes are conditional PutItem calls: the write is rejected by DynamoDB unless
	  the item still holds the value this caller read (or is still absent).
	"""

	def __init__(
		self,
		table_name: str,
		region_name: Optional[str] = None,
		endpoint_url: Optional[str] = None,
		boto3_resource: Optional[object] = None,
		create_table_if_not_exists: bool = False,
	):
		self._table_name = table_name
		if boto3_resource is not None:
			self._dynamodb = boto3_resource
		else:
			self._dynamodb = boto3.resource(
				"dynamodb",
				region_name=region_name or "ap-south-1",
				endpoint_url=endpoint_url,
				config=Config(retries={"max_attempts": 10, "mode": "standard"}),
			)

		if create_table_if_not_exists:
			self._ensure_table()

		self._table = self._dynamodb.Table(self._table_name)

	def _ensure_table(self) -> None:
		try:
			existing_tables = [t.name for t in self._dynamodb.tables.all()]
			if self._table_name in existing_tables:
				return
			logger.info("creating counter table", table=self._table_name)
			self._dynamodb.create_table(
				TableName=self._table_name,
				AttributeDefinitions=[{"AttributeName": "counter_id", "AttributeType": "S"}],
				KeySchema=[{"AttributeName": "counter_id", "KeyType": "HASH"}],
				BillingMode="PAY_PER_REQUEST",
			)
			self._dynamodb.Table(self._table_name).wait_until_exists()
		except (BotoCoreError, ClientError) as e:
			raise StoreUnavailableError(f"cannot provision table {self._table_name!r}: {e}") from e

	def get_data(self, scope_name: str, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
		check(cancellation)
		try:
			response = self._table.get_item(Key={"counter_id": scope_name}, ConsistentRead=True)
		except (BotoCoreError, ClientError) as e:
			logger.error("counter read failed", table=self._table_name, scope=scope_name, error=str(e))
			raise StoreUnavailableError(f"cannot read counter for scope {scope_name!r}: {e}") from e

		item = response.get("Item")
		if item is None:
			return None
		value = item.get("value")
		if not isinstance(value, str):
			raise StoreCorruptedError(
				f"counter for scope {scope_name!r} is stored as {type(value).__name__}, expected a string"
			)
		return value

	def try_optimistic_write(
		self,
		scope_name: str,
		expected_data: Optional[str],
		data: str,
		cancellation: Optional[CancellationToken] = None,
	) -> bool:
		check(cancellation)
		if expected_data is None:
			condition = {"ConditionExpression": "attribute_not_exists(counter_id)"}
		else:
			condition = {
				"ConditionExpression": "#v = :expected",
				"ExpressionAttributeNames": {"#v": "value"},
				"ExpressionAttributeValues": {":expected": expected_data},
			}
		try:
			self._table.put_item(Item={"counter_id": scope_name, "value": data}, **condition)
		except ClientError as e:
			if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
				return False
			logger.error("counter write failed", table=self._table_name, scope=scope_name, error=str(e))
			raise StoreUnavailableError(f"cannot write counter for scope {scope_name!r}: {e}") from e
		except BotoCoreError as e:
			logger.error("counter write failed", table=self._table_name, scope=scope_name, error=str(e))
			raise StoreUnavailableError(f"cannot write counter for scope {scope_name!r}: {e}") from e
		return True
