"""
Debug logging hooks for a secret-store HTTP client.

The client owns the transport; it hands each request, response and failure
to HTTPDebugLogger, which redacts the artifacts before anything is logged.

Example:
    debug = HTTPDebugLogger(extra_query_keys=["sig"])
    debug.log_request("PUT", url, headers, body)
    debug.log_response(res.status_code, res.headers, res.content)
"""

import logging
from collections.abc import Mapping
from typing import Iterable, Optional

from .engine import Body, RedactionEngine, get_default_engine

MIN_TOKEN_LENGTH = 10


class HTTPDebugLogger:
    """Write redacted request/response debug lines to a logger."""

    def __init__(
        self,
        engine: Optional[RedactionEngine] = None,
        logger: Optional[logging.Logger] = None,
        extra_query_keys: Iterable[str] = (),
    ):
        self.engine = engine or get_default_engine()
        self.logger = logger or logging.getLogger(__name__)
        self.extra_query_keys = tuple(extra_query_keys)

    def _safe_body(self, body: Body) -> str:
        return self.engine.redact_bytes_chain(body).decode("utf-8", errors="replace")

    def log_request(
        self,
        method: str,
        url: str,
        headers: Optional[Mapping] = None,
        body: Optional[Body] = None,
    ) -> None:
        safe_url = self.engine.redact_url(url, self.extra_query_keys)
        self.logger.debug(f"{method.upper()} request to: {safe_url}")
        if headers is not None:
            self.logger.debug(f"Request headers: {self.engine.redact_headers(headers)}")
        if body:
            self.logger.debug(f"Request body: {self._safe_body(body)}")

    def log_response(
        self,
        status_code: int,
        headers: Optional[Mapping] = None,
        body: Optional[Body] = None,
    ) -> None:
        """
        Log a response. Bodies of failed responses (status >= 300) go out
        at ERROR so they show up without debug logging enabled.
        """
        self.logger.debug(f"Response status: {status_code}")
        if headers is not None:
            self.logger.debug(f"Response headers: {self.engine.redact_headers(headers)}")

        safe_body = self._safe_body(body) if body else ""
        if status_code >= 300:
            self.logger.error(f"Request failed (status {status_code}): {safe_body or '(empty body)'}")
            if status_code == 401:
                self.logger.error("Authentication failed - check token validity and permissions")
        elif safe_body:
            self.logger.debug(f"Response body: {safe_body}")

    def log_transport_error(self, exc: BaseException) -> None:
        """Log a transport failure with its message scrubbed."""
        message, _ = self.engine.redact(str(exc))
        self.logger.error(f"HTTP request failed: {type(exc).__name__}: {message}")

    def log_token_hint(self, token: Optional[str]) -> None:
        """Report the token's length only; its content is never logged."""
        length = len(token or "")
        if length < MIN_TOKEN_LENGTH:
            self.logger.warning(f"Token seems too short (length: {length}), may be invalid")
        else:
            self.logger.debug(f"Token length: {length}")
