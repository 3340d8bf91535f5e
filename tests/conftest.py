"""Pytest configuration and fixtures."""

import json
from datetime import datetime, timezone

import httpx
import pytest

from kinesis_client.client import KinesisClient
from kinesis_client.config import Settings
from kinesis_client.context import AWSContext
from kinesis_client.signing.signer import TimestampPair

# AWS documentation example credentials
TEST_SECRET_KEY = "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY"
TEST_ACCESS_KEY_ID = "AKIDEXAMPLE"
TEST_REGION = "us-east-1"
TEST_ENDPOINT = "kinesis.us-east-1.amazonaws.com"


@pytest.fixture
def fixed_timestamp():
    """Frozen timestamp pair (2015-08-30 12:36:00 UTC)."""
    return TimestampPair.from_datetime(datetime(2015, 8, 30, 12, 36, 0, tzinfo=timezone.utc))


@pytest.fixture
def test_settings():
    """Settings independent of the process environment."""
    return Settings(
        _env_file=None,
        AWS_SECRET_ACCESS_KEY=TEST_SECRET_KEY,
        AWS_ACCESS_KEY_ID=TEST_ACCESS_KEY_ID,
        AWS_SESSION_TOKEN=None,
        AWS_REGION=TEST_REGION,
        KINESIS_ENDPOINT=TEST_ENDPOINT,
        METRICS_ENABLED=True,
        KINESIS_MAX_RESPONSE_SIZE=1024,
    )


@pytest.fixture
def aws_context():
    """Context with long-term credentials."""
    return AWSContext(
        secret_key=TEST_SECRET_KEY,
        access_key_id=TEST_ACCESS_KEY_ID,
        region=TEST_REGION,
        endpoint=TEST_ENDPOINT,
    )


@pytest.fixture
def temporary_aws_context():
    """Context with temporary credentials."""
    return AWSContext(
        secret_key=TEST_SECRET_KEY,
        access_key_id=TEST_ACCESS_KEY_ID,
        session_token="FQoGZXIvYXdzEXAMPLETOKEN",
        region=TEST_REGION,
        endpoint=TEST_ENDPOINT,
    )


@pytest.fixture
def captured_requests():
    """Requests seen by the mock transport."""
    return []


@pytest.fixture
def make_client(test_settings, fixed_timestamp, captured_requests):
    """Factory for a client backed by httpx.MockTransport."""
    clients = []

    def _make(context, handler=None):
        def _record(request: httpx.Request) -> httpx.Response:
            captured_requests.append(request)
            if handler is not None:
                return handler(request)
            return httpx.Response(200, json={"StreamNames": [], "HasMoreStreams": False})

        http_client = httpx.Client(transport=httpx.MockTransport(_record))
        client = KinesisClient(
            context=context,
            config=test_settings,
            http_client=http_client,
            clock=lambda: fixed_timestamp,
        )
        clients.append(http_client)
        return client

    yield _make

    for http_client in clients:
        http_client.close()


@pytest.fixture
def mock_describe_stream_response():
    """Mock DescribeStream response."""
    return {
        "StreamDescription": {
            "StreamName": "test-stream",
            "StreamARN": "arn:aws:kinesis:us-east-1:123456789012:stream/test-stream",
            "StreamStatus": "ACTIVE",
            "Shards": [
                {
                    "ShardId": "shardId-000000000000",
                    "HashKeyRange": {
                        "StartingHashKey": "0",
                        "EndingHashKey": "340282366920938463463374607431768211455",
                    },
                    "SequenceNumberRange": {
                        "StartingSequenceNumber": "49590338271490256608559692538361571095921575989136588898",
                    },
                }
            ],
            "HasMoreShards": False,
            "RetentionPeriodHours": 24,
        }
    }


@pytest.fixture
def mock_resource_not_found_body():
    """Mock Kinesis error body."""
    return json.dumps({
        "__type": "ResourceNotFoundException",
        "message": "Stream missing-stream under account 123456789012 not found.",
    })
