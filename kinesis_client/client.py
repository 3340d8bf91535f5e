"""Amazon Kinesis Data Streams client."""

import time
from typing import Callable, List, Optional, Sequence, Union
import httpx
import structlog

from kinesis_client.config import Settings, settings as default_settings
from kinesis_client.context import AWSContext
from kinesis_client.dispatcher import RequestDispatcher, build_headers
from kinesis_client.monitoring import metrics
from kinesis_client.payloads import (
    KinesisAction,
    Record,
    build_records,
    describe_stream_payload,
    list_streams_payload,
    put_record_payload,
    put_records_payload,
)
from kinesis_client.response import KinesisResponse
from kinesis_client.signing.signer import SigV4Signer, TimestampPair

logger = structlog.get_logger(__name__)


class KinesisClient:
    """
    Client for the Kinesis JSON API.

    Every call runs the same lifecycle: read the clock once, build the
    payload, sign it, POST it and return the captured response. Nothing
    is retried; transport failures come back as status code 0 and API
    failures as the provider's status code with the error body verbatim.
    """

    def __init__(
        self,
        context: Optional[AWSContext] = None,
        config: Optional[Settings] = None,
        http_client: Optional[httpx.Client] = None,
        dispatcher: Optional[RequestDispatcher] = None,
        clock: Optional[Callable[[], TimestampPair]] = None,
        verify_ssl: Optional[bool] = None,
    ):
        """
        Initialize Kinesis client.

        Args:
            context: Credentials and endpoint (defaults to one built from settings)
            config: Settings used for defaults (defaults to the global settings)
            http_client: Optional caller owned httpx client
            dispatcher: Optional dispatcher (overrides http_client)
            clock: Timestamp source, one read per request
            verify_ssl: Override TLS verification setting

        Raises:
            ConfigurationError: If a required credential or config value is missing
        """
        self.config = config or default_settings
        self.context = context or AWSContext.from_settings(self.config)

        self.signer = SigV4Signer(
            access_key=self.context.access_key_id,
            secret_key=self.context.secret_key,
            region=self.context.region,
        )

        self.dispatcher = dispatcher or RequestDispatcher(
            timeout=self.config.request_timeout_seconds,
            verify_ssl=self.config.verify_ssl if verify_ssl is None else verify_ssl,
            max_response_size=self.config.max_response_size,
            http_client=http_client,
        )
        self._clock = clock or TimestampPair.now

    def __enter__(self) -> "KinesisClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        self.dispatcher.close()

    def _make_request(self, action: KinesisAction, payload: str) -> KinesisResponse:
        """
        Sign and send one request.

        Args:
            action: Kinesis action
            payload: JSON request body

        Returns:
            KinesisResponse
        """
        timestamp = self._clock()

        authorization = self.signer.sign_request(
            host=self.context.endpoint,
            payload=payload,
            timestamp=timestamp,
        )
        headers = build_headers(
            authorization=authorization,
            target=action.value,
            amz_date=timestamp.long,
            session_token=self.context.session_token,
        )

        logger.info(
            "making_kinesis_request",
            action=action.operation,
            endpoint=self.context.endpoint,
            region=self.context.region,
            temporary_credentials=self.context.has_session_token,
        )

        started = time.perf_counter()
        response = self.dispatcher.post(
            url=self.context.url,
            headers=headers,
            payload=payload,
            action=action.value,
        )
        elapsed = time.perf_counter() - started

        if self.config.metrics_enabled:
            metrics.kinesis_request_duration_seconds.labels(action=action.operation).observe(elapsed)
            metrics.kinesis_requests_total.labels(
                action=action.operation,
                status_code=str(response.status_code),
            ).inc()
            if response.is_transport_error:
                metrics.kinesis_transport_errors_total.labels(action=action.operation).inc()

        if response.ok:
            logger.info("kinesis_request_succeeded", action=action.operation, duration=round(elapsed, 3))
        elif not response.is_transport_error:
            logger.warning(
                "kinesis_request_failed",
                action=action.operation,
                status=response.status_code,
                duration=round(elapsed, 3),
            )

        return response

    def list_streams(self) -> KinesisResponse:
        """List streams (first page only)."""
        return self._make_request(KinesisAction.LIST_STREAMS, list_streams_payload())

    def describe_stream(self, stream_name: str) -> KinesisResponse:
        """
        Describe a stream.

        Args:
            stream_name: Stream name

        Returns:
            KinesisResponse whose body holds the StreamDescription on success
        """
        logger.info("describing_stream", stream_name=stream_name)
        return self._make_request(KinesisAction.DESCRIBE_STREAM, describe_stream_payload(stream_name))

    def put_record(
        self,
        stream_name: str,
        partition_key: str,
        data: Union[bytes, str],
    ) -> KinesisResponse:
        """
        Put one record onto a stream.

        Args:
            stream_name: Stream name
            partition_key: Partition key the record is routed by
            data: Record payload, sent as-is (str is UTF-8 encoded)

        Returns:
            KinesisResponse
        """
        if isinstance(data, str):
            data = data.encode("utf-8")

        logger.info("putting_record", stream_name=stream_name, size=len(data))

        response = self._make_request(
            KinesisAction.PUT_RECORD,
            put_record_payload(stream_name, partition_key, data),
        )
        if response.ok and self.config.metrics_enabled:
            metrics.kinesis_records_put_total.labels(stream_name=stream_name).inc()
        return response

    def put_records(self, stream_name: str, records: Sequence[Record]) -> KinesisResponse:
        """
        Put a batch of records onto a stream.

        Args:
            stream_name: Stream name shared by all records
            records: Records in send order

        Returns:
            KinesisResponse (per-record failures are reported in the body)

        Raises:
            ValueError: If records is empty
        """
        if not records:
            raise ValueError("At least one record is required")

        logger.info(
            "putting_records",
            stream_name=stream_name,
            records_count=len(records),
            size=sum(len(record.data) for record in records),
        )

        response = self._make_request(
            KinesisAction.PUT_RECORDS,
            put_records_payload(stream_name, records),
        )
        if response.ok and self.config.metrics_enabled:
            metrics.kinesis_records_put_total.labels(stream_name=stream_name).inc(len(records))
        return response

    def put(
        self,
        stream_name: str,
        partition_keys: Sequence[str],
        payloads: Sequence[Union[bytes, str]],
    ) -> KinesisResponse:
        """
        Put one or many records.

        A single payload is sent with PutRecord; several payloads are sent
        in one PutRecords call. When fewer partition keys than payloads are
        given, the last key is reused for the remaining payloads.

        Raises:
            ValueError: If no keys or no payloads are given
        """
        records: List[Record] = build_records(partition_keys, payloads)

        if len(records) == 1:
            return self.put_record(stream_name, records[0].partition_key, records[0].data)
        return self.put_records(stream_name, records)
