"""AWS Signature Version 4 signing for Kinesis JSON requests."""

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict
import structlog

from kinesis_client.signing.primitives import hash_hex, hex_encode, hmac_sha256

logger = structlog.get_logger(__name__)

ALGORITHM = "AWS4-HMAC-SHA256"
SERVICE = "kinesis"
SCOPE_TERMINATOR = "aws4_request"
CONTENT_TYPE = "application/x-amz-json-1.1"

# Order and casing are part of the signature
SIGNED_HEADERS = "content-type;host;x-amz-date"

LONG_DATE_FORMAT = "%Y%m%dT%H%M%SZ"
SHORT_DATE_FORMAT = "%Y%m%d"


class TimestampPair(BaseModel):
    """Long (YYYYMMDDTHHMMSSZ) and short (YYYYMMDD) forms of one instant."""

    model_config = ConfigDict(frozen=True)

    long: str
    short: str

    @classmethod
    def from_datetime(cls, moment: datetime) -> "TimestampPair":
        """Build both forms from one instant. Naive datetimes are taken as UTC."""
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        else:
            moment = moment.astimezone(timezone.utc)
        return cls(
            long=moment.strftime(LONG_DATE_FORMAT),
            short=moment.strftime(SHORT_DATE_FORMAT),
        )

    @classmethod
    def now(cls) -> "TimestampPair":
        """Single clock read."""
        return cls.from_datetime(datetime.now(timezone.utc))


class SigV4Signer:
    """AWS Signature Version 4 signer for POST / with a JSON body."""

    def __init__(
        self,
        access_key: str,
        secret_key: str,
        region: str = "us-east-1",
        service: str = SERVICE,
    ):
        """
        Initialize SigV4 signer.

        Args:
            access_key: AWS access key ID
            secret_key: AWS secret access key
            region: AWS region
            service: AWS service name (kinesis)
        """
        self.access_key = access_key
        self.secret_key = secret_key
        self.region = region
        self.service = service

    def __repr__(self) -> str:
        return f"SigV4Signer(access_key={self.access_key!r}, region={self.region!r}, service={self.service!r})"

    @staticmethod
    def canonical_request(host: str, amz_date: str, payload: str) -> str:
        """
        Create canonical request.

        Method, path and the signed header set are fixed for this API
        family: always POST /, no query string, and exactly
        content-type, host and x-amz-date.
        """
        return "\n".join([
            "POST",
            "/",
            "",
            f"content-type:{CONTENT_TYPE}",
            f"host:{host}",
            f"x-amz-date:{amz_date}",
            "",
            SIGNED_HEADERS,
            hash_hex(payload),
        ])

    def credential_scope(self, date_stamp: str) -> str:
        """Create credential scope (date/region/service/aws4_request)."""
        return f"{date_stamp}/{self.region}/{self.service}/{SCOPE_TERMINATOR}"

    def string_to_sign(self, amz_date: str, date_stamp: str, canonical_request: str) -> str:
        """Create string to sign."""
        return "\n".join([
            ALGORITHM,
            amz_date,
            self.credential_scope(date_stamp),
            hash_hex(canonical_request),
        ])

    def get_signature_key(self, date_stamp: str) -> bytes:
        """Derive signing key."""
        k_secret = f"AWS4{self.secret_key}".encode("utf-8")
        k_date = hmac_sha256(k_secret, date_stamp)
        k_region = hmac_sha256(k_date, self.region)
        k_service = hmac_sha256(k_region, self.service)
        k_signing = hmac_sha256(k_service, SCOPE_TERMINATOR)
        return k_signing

    def signature(self, string_to_sign: str, date_stamp: str) -> str:
        """Calculate hex signature."""
        signing_key = self.get_signature_key(date_stamp)
        return hex_encode(hmac_sha256(signing_key, string_to_sign))

    def authorization_header(self, date_stamp: str, signature: str) -> str:
        """Create Authorization header value."""
        return (
            f"{ALGORITHM} "
            f"Credential={self.access_key}/{self.credential_scope(date_stamp)}, "
            f"SignedHeaders={SIGNED_HEADERS}, "
            f"Signature={signature}"
        )

    def sign_request(
        self,
        host: str,
        payload: str,
        timestamp: Optional[TimestampPair] = None,
    ) -> str:
        """
        Sign a Kinesis request.

        Args:
            host: Endpoint host the request is sent to
            payload: JSON request body
            timestamp: Timestamp pair for this request (defaults to now)

        Returns:
            Authorization header value
        """
        if timestamp is None:
            timestamp = TimestampPair.now()

        canonical_request = self.canonical_request(host, timestamp.long, payload)
        string_to_sign = self.string_to_sign(timestamp.long, timestamp.short, canonical_request)
        signature = self.signature(string_to_sign, timestamp.short)

        logger.debug(
            "request_signed",
            host=host,
            amz_date=timestamp.long,
            scope=self.credential_scope(timestamp.short),
        )

        return self.authorization_header(timestamp.short, signature)
