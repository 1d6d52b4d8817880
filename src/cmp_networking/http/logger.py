"""
HTTP traffic logger for debugging and auditing.

Logs requests and responses passing through the facade to a file with
timestamps, HTTP method, direction indicators, and full payloads.
"""

import json
from datetime import UTC
from datetime import datetime
from pathlib import Path
from typing import Any
from typing import Protocol


class HTTPLogger(Protocol):
    """Protocol for HTTP logging callbacks."""

    def log_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: str | None,
    ) -> None:
        """Log an outgoing HTTP request."""
        ...

    def log_response(
        self,
        method: str,
        url: str,
        status: int,
        body: str,
    ) -> None:
        """Log an incoming HTTP response."""
        ...

    def log_error(
        self,
        method: str,
        url: str,
        error: BaseException,
    ) -> None:
        """Log a request that produced no response."""
        ...


class FileHTTPLogger:
    """
    Logs HTTP traffic to a file.

    Format:
        [timestamp] [method] [direction] [type] payload

    Where:
        - timestamp: ISO 8601 format
        - method: GET or POST
        - direction: >>> for outgoing, <<< for incoming, !!! for failures
        - type: REQUEST, RESPONSE, or ERROR
        - payload: JSON-formatted data
    """

    def __init__(self, log_file: Path):
        """
        Initialize the file logger.

        Args:
            log_file: Path to the log file. Parent directories will be created
                      if they don't exist.
        """
        self.log_file = log_file
        self._ensure_log_file()

    def _ensure_log_file(self) -> None:
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        self.log_file.touch(exist_ok=True)

    def _format_timestamp(self) -> str:
        return datetime.now(UTC).isoformat(timespec="milliseconds")

    def _write_log(self, entry: str) -> None:
        with self.log_file.open("a", encoding="utf-8") as f:
            f.write(entry + "\n")

    def _sanitize_headers(self, headers: dict[str, str]) -> dict[str, str]:
        """Sanitize headers by masking sensitive values."""
        sanitized = {}
        sensitive_keys = {"authorization", "cookie", "x-api-key", "api-key"}
        for key, value in headers.items():
            if key.lower() in sensitive_keys:
                # Show first 10 chars, mask the rest
                if len(value) > 14:
                    sanitized[key] = value[:10] + "..." + value[-4:]
                else:
                    sanitized[key] = "***"
            else:
                sanitized[key] = value
        return sanitized

    def _parse_body(self, body: str | None) -> Any:
        """Embed JSON bodies as objects, anything else verbatim."""
        if not body:
            return body
        try:
            return json.loads(body)
        except json.JSONDecodeError:
            return body

    def log_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: str | None,
    ) -> None:
        """Log an outgoing HTTP request."""
        payload = {
            "url": url,
            "headers": self._sanitize_headers(headers),
            "body": self._parse_body(body),
        }
        entry = f"[{self._format_timestamp()}] [{method}] >>> REQUEST {json.dumps(payload, ensure_ascii=False)}"
        self._write_log(entry)

    def log_response(
        self,
        method: str,
        url: str,
        status: int,
        body: str,
    ) -> None:
        """Log an incoming HTTP response."""
        payload = {
            "url": url,
            "status": status,
            "body": self._parse_body(body),
        }
        entry = f"[{self._format_timestamp()}] [{method}] <<< RESPONSE {json.dumps(payload, ensure_ascii=False)}"
        self._write_log(entry)

    def log_error(
        self,
        method: str,
        url: str,
        error: BaseException,
    ) -> None:
        """Log a request that produced no response."""
        payload = {
            "url": url,
            "error": error.__class__.__name__,
            "message": str(error),
        }
        entry = f"[{self._format_timestamp()}] [{method}] !!! ERROR {json.dumps(payload, ensure_ascii=False)}"
        self._write_log(entry)
