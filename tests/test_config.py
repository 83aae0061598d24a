import boto3
import pytest
from moto import mock_aws

from blockid.config import GeneratorSettings, build_generator
from blockid.errors import InvalidArgumentError


def test_defaults_from_empty_environment():
	settings = GeneratorSettings.from_env({})

	assert settings == GeneratorSettings()
	assert settings.batch_size == 100
	assert settings.initial_value == 0
	assert settings.max_write_attempts == 25


def test_overrides_from_environment():
	settings = GeneratorSettings.from_env(
		{
			"BLOCKID_TABLE_NAME": "counters",
			"AWS_REGION": "eu-west-1",
			"BLOCKID_ENDPOINT_URL": "http://localhost:8000",
			"BLOCKID_BATCH_SIZE": "500",
			"BLOCKID_INITIAL_VALUE": "1",
			"BLOCKID_MAX_WRITE_ATTEMPTS": "5",
			"BLOCKID_CREATE_TABLE": "true",
			"BLOCKID_LOG_JSON": "1",
			"BLOCKID_LOG_LEVEL": "debug",
		}
	)

	assert settings.table_name == "counters"
	assert settings.region_name == "eu-west-1"
	assert settings.endpoint_url == "http://localhost:8000"
	assert settings.batch_size == 500
	assert settings.initial_value == 1
	assert settings.max_write_attempts == 5
	assert settings.create_table_if_not_exists is True
	assert settings.log_json is True
	assert settings.log_level == "DEBUG"


def test_blockid_region_wins_over_aws_region():
	settings = GeneratorSettings.from_env({"AWS_REGION": "eu-west-1", "BLOCKID_REGION": "us-east-2"})

	assert settings.region_name == "us-east-2"


@pytest.mark.parametrize(
	"name,value",
	[
		("BLOCKID_BATCH_SIZE", "0"),
		("BLOCKID_BATCH_SIZE", "ten"),
		("BLOCKID_INITIAL_VALUE", "-1"),
		("BLOCKID_CREATE_TABLE", "maybe"),
		("BLOCKID_LOG_LEVEL", "verbose"),
	],
)
def test_invalid_values_rejected(name, value):
	with pytest.raises(InvalidArgumentError):
		GeneratorSettings.from_env({name: value})


@mock_aws
def test_build_generator_wires_dynamodb_store():
	dynamodb = boto3.resource("dynamodb", region_name="ap-south-1")
	settings = GeneratorSettings(table_name="ids", batch_size=10, create_table_if_not_exists=True)

	gen = build_generator(settings, boto3_resource=dynamodb)

	assert gen.batch_size == 10
	assert gen.next_id("orders") == 0
	item = dynamodb.Table("ids").get_item(Key={"counter_id": "orders"})["Item"]
	assert item["value"] == "10"
