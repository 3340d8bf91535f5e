"""JSON request bodies for the supported Kinesis actions."""

import json
from enum import Enum
from typing import Any, Dict, List, Sequence, Union
from pydantic import BaseModel, ConfigDict

from kinesis_client.signing.primitives import base64_encode

API_VERSION = "Kinesis_20131202"


class KinesisAction(str, Enum):
    """Supported Kinesis actions and their x-amz-target values."""
    LIST_STREAMS = f"{API_VERSION}.ListStreams"
    DESCRIBE_STREAM = f"{API_VERSION}.DescribeStream"
    PUT_RECORD = f"{API_VERSION}.PutRecord"
    PUT_RECORDS = f"{API_VERSION}.PutRecords"

    @property
    def operation(self) -> str:
        """Operation name without the API version prefix."""
        return self.value.split(".", 1)[1]


class Record(BaseModel):
    """A single record to put onto a stream. Data is opaque bytes."""

    model_config = ConfigDict(frozen=True)

    partition_key: str
    data: bytes


def _dumps(body: Dict[str, Any]) -> str:
    # Compact separators keep the wire shape {"A":"b","C":"d"}
    return json.dumps(body, separators=(",", ":"))


def build_records(
    partition_keys: Sequence[str],
    payloads: Sequence[Union[bytes, str]],
) -> List[Record]:
    """
    Pair payloads with partition keys.

    If fewer keys than payloads are given, the last key is reused for
    every remaining payload.

    Raises:
        ValueError: If no keys or no payloads are given
    """
    if not partition_keys:
        raise ValueError("At least one partition key is required")
    if not payloads:
        raise ValueError("At least one record payload is required")

    records = []
    for i, payload in enumerate(payloads):
        key = partition_keys[min(i, len(partition_keys) - 1)]
        data = payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)
        records.append(Record(partition_key=key, data=data))
    return records


def list_streams_payload() -> str:
    return _dumps({})


def describe_stream_payload(stream_name: str) -> str:
    return _dumps({"StreamName": stream_name})


def put_record_payload(stream_name: str, partition_key: str, data: bytes) -> str:
    return _dumps({
        "StreamName": stream_name,
        "PartitionKey": partition_key,
        "Data": base64_encode(data),
    })


def put_records_payload(stream_name: str, records: Sequence[Record]) -> str:
    """Batch body; records keep their given order."""
    return _dumps({
        "StreamName": stream_name,
        "Records": [
            {"PartitionKey": record.partition_key, "Data": base64_encode(record.data)}
            for record in records
        ],
    })
