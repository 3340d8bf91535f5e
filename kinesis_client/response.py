"""Response capture for Kinesis requests."""

import json
from typing import Any, Dict, Optional, Union

from kinesis_client.exceptions import KinesisAPIError, KinesisTransportError


class BoundedBuffer:
    """
    Text buffer with a hard capacity.

    Writes past the capacity are dropped silently; the caller always
    sees the full write as consumed.
    """

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError("capacity must be >= 0")
        self.capacity = capacity
        self._data = bytearray()
        self.truncated = False

    def write(self, chunk: Union[bytes, str]) -> int:
        """Append chunk up to capacity. Returns the size of chunk."""
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        space = self.capacity - len(self._data)
        if len(chunk) > space:
            self.truncated = True
            self._data.extend(chunk[:max(space, 0)])
        else:
            self._data.extend(chunk)
        return len(chunk)

    def reset(self):
        self._data.clear()
        self.truncated = False

    def __len__(self) -> int:
        return len(self._data)

    @property
    def text(self) -> str:
        # A cut may land inside a multi-byte character
        return self._data.decode("utf-8", errors="replace")


class KinesisResponse:
    """Outcome of one Kinesis request."""

    def __init__(
        self,
        action: str,
        status_code: int,
        headers: str = "",
        body: str = "",
        error_message: Optional[str] = None,
        headers_truncated: bool = False,
        body_truncated: bool = False,
    ):
        self.action = action
        self.status_code = status_code
        self.headers = headers
        self.body = body
        self.error_message = error_message
        self.headers_truncated = headers_truncated
        self.body_truncated = body_truncated

    def __repr__(self) -> str:
        return f"KinesisResponse(action={self.action!r}, status_code={self.status_code})"

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    @property
    def is_transport_error(self) -> bool:
        return self.status_code == 0

    def json(self) -> Dict[str, Any]:
        """Parse the response body."""
        return json.loads(self.body)

    def raise_for_status(self) -> "KinesisResponse":
        """
        Raise for transport or API failures.

        Raises:
            KinesisTransportError: On status code 0
            KinesisAPIError: On any other non-200 status code
        """
        if self.is_transport_error:
            raise KinesisTransportError(self.error_message or "Transport error", action=self.action)

        if not self.ok:
            error_type = None
            message = f"Request failed: {self.status_code}"
            try:
                data = json.loads(self.body)
            except ValueError:
                data = None
            if isinstance(data, dict):
                error_type = data.get("__type")
                if error_type and "#" in error_type:
                    error_type = error_type.rsplit("#", 1)[1]
                detail = data.get("message") or data.get("Message")
                if detail:
                    message = f"{error_type}: {detail}" if error_type else detail
            raise KinesisAPIError(
                message,
                status_code=self.status_code,
                error_type=error_type,
                body=self.body,
                action=self.action,
            )

        return self
