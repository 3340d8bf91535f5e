"""HTTP dispatch of signed Kinesis requests."""

from typing import Dict, Optional
import httpx
import structlog

from kinesis_client.response import BoundedBuffer, KinesisResponse
from kinesis_client.signing.signer import CONTENT_TYPE

logger = structlog.get_logger(__name__)


def build_headers(
    authorization: str,
    target: str,
    amz_date: str,
    session_token: Optional[str] = None,
) -> Dict[str, str]:
    """
    Build the full header set for one request.

    Headers embed the request timestamp through the signature, so a set
    is only valid for the request it was built for.

    Args:
        authorization: Authorization header value
        target: x-amz-target action identifier
        amz_date: Long form timestamp the request was signed with
        session_token: Only for temporary credentials

    Returns:
        Ordered header mapping
    """
    headers = {
        "Authorization": authorization,
        "Content-Type": CONTENT_TYPE,
        # Empty value suppresses 100-continue negotiation
        "Expect": "",
    }
    if session_token:
        headers["x-amz-security-token"] = session_token
    headers["x-amz-target"] = target
    headers["x-amz-date"] = amz_date
    return headers


def _header_block(response: httpx.Response) -> str:
    lines = [f"{response.http_version} {response.status_code} {response.reason_phrase}"]
    for name, value in response.headers.multi_items():
        lines.append(f"{name}: {value}")
    return "\r\n".join(lines) + "\r\n\r\n"


class RequestDispatcher:
    """Performs one synchronous POST per request and captures the outcome."""

    def __init__(
        self,
        timeout: float = 20.0,
        verify_ssl: bool = True,
        max_response_size: int = 65536,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Initialize dispatcher.

        Args:
            timeout: Request timeout in seconds
            verify_ssl: Verify TLS certificate and hostname
            max_response_size: Cap for captured header and body text
            http_client: Optional caller owned client (not closed here)
        """
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.max_response_size = max_response_size

        if not verify_ssl:
            logger.warning("tls_verification_disabled")

        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout, verify=verify_ssl)

    def close(self):
        if self._owns_client:
            self._client.close()

    def post(
        self,
        url: str,
        headers: Dict[str, str],
        payload: str,
        action: str,
    ) -> KinesisResponse:
        """
        POST payload to url.

        Args:
            url: Base URL (https://host)
            headers: Signed header set
            payload: JSON body that was signed
            action: x-amz-target value, for logging

        Returns:
            KinesisResponse with status 0 on transport failure, otherwise
            the HTTP status code and captured header/body text
        """
        header_buffer = BoundedBuffer(self.max_response_size)
        body_buffer = BoundedBuffer(self.max_response_size)

        try:
            with self._client.stream(
                "POST",
                f"{url}/",
                headers=headers,
                content=payload.encode("utf-8"),
                timeout=self.timeout,
            ) as response:
                header_buffer.write(_header_block(response))
                for chunk in response.iter_bytes():
                    body_buffer.write(chunk)
                status_code = response.status_code

        except httpx.RequestError as e:
            error_message = str(e) or type(e).__name__
            logger.error("kinesis_transport_error", action=action, url=url, error=error_message)
            return KinesisResponse(action=action, status_code=0, error_message=error_message)

        if body_buffer.truncated or header_buffer.truncated:
            logger.warning(
                "kinesis_response_truncated",
                action=action,
                max_response_size=self.max_response_size,
            )

        return KinesisResponse(
            action=action,
            status_code=status_code,
            headers=header_buffer.text,
            body=body_buffer.text,
            headers_truncated=header_buffer.truncated,
            body_truncated=body_buffer.truncated,
        )
