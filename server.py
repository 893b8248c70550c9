"""
Secret Store Log Redactor - MCP Server for sanitizing debug artifacts

A local MCP (Model Context Protocol) server that lets AI agents and tooling
sanitize the debug output of a secret-store HTTP client before reading or
sharing it: request headers, URLs, request/response bodies, structured log
fields and free-form messages.

Tools:
    - sanitize_headers: Mask credential headers, preview the rest
    - sanitize_url: Mask sensitive query parameters
    - sanitize_body: JSON + PEM redaction with authorization fallback
    - sanitize_fields: Recursive field-map redaction + key=value rendering
    - sanitize_message: Free-text scrubbing for error strings

Configuration (environment or .env):
    - REDACTION_EXTRA_SENSITIVE_KEYS: comma-separated extra key substrings
    - REDACTION_EXTRA_QUERY_KEYS: comma-separated query parameters to always mask
    - REDACTION_LOAD_DEFAULT_PROFILE: "false" to drop the default vocabulary
    - LOG_LEVEL: logging level when run as a script
"""

import logging
import os
from functools import lru_cache
from typing import Any, Optional

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from log_redaction import REDACTION_MASK, RedactionEngine
from log_redaction.profiles import KeywordProfile

# Load environment variables from .env file
load_dotenv()

# Initialize MCP server
mcp = FastMCP(
    "secret-store-log-redactor",
    instructions="MCP Server for redacting secrets from HTTP client debug output"
)


def _split_list(raw: Optional[str]) -> list[str]:
    return [item.strip() for item in (raw or "").split(",") if item.strip()]


def get_engine() -> RedactionEngine:
    """
    Return the RedactionEngine for the current environment configuration.

    One engine is built per distinct configuration and reused across tool
    calls.
    """
    load_default = os.getenv("REDACTION_LOAD_DEFAULT_PROFILE", "true").lower() != "false"
    extra_keys = tuple(_split_list(os.getenv("REDACTION_EXTRA_SENSITIVE_KEYS")))
    return _build_engine(load_default, extra_keys)


@lru_cache(maxsize=8)
def _build_engine(load_default: bool, extra_keys: tuple[str, ...]) -> RedactionEngine:
    engine = RedactionEngine(load_default_profile=load_default)
    if extra_keys:
        engine.load_profile(KeywordProfile(extra_keys))
    return engine


def get_extra_query_keys() -> list[str]:
    """Return the query parameter names configured to always be masked."""
    return _split_list(os.getenv("REDACTION_EXTRA_QUERY_KEYS"))


@mcp.tool()
def sanitize_headers(headers: dict[str, Any]) -> dict[str, Any]:
    """
    Redact an HTTP header set.

    Args:
        headers: Header name -> list of values (a single string is accepted).
                 Example: {"Authorization": ["Bearer abc"], "Accept": ["*/*"]}

    Returns:
        A dictionary containing:
        - status: "success" or "error"
        - headers: The redacted headers. Authorization, Cookie and any
          header with a sensitive name become "****"; other values longer
          than 16 characters are shortened to a head…tail preview.
    """
    try:
        return {
            "status": "success",
            "headers": get_engine().redact_headers(headers)
        }
    except Exception as e:
        return {
            "status": "error",
            "message": f"Unexpected error: {str(e)}"
        }


@mcp.tool()
def sanitize_url(url: str, extra_sensitive_keys: Optional[list[str]] = None) -> dict[str, Any]:
    """
    Redact the query string of a URL.

    Args:
        url: The URL to sanitize.
             Example: "https://store/v2/configurations/app?token=abc&page=2"
        extra_sensitive_keys: Additional parameter names to mask, on top of
                              the vocabulary and REDACTION_EXTRA_QUERY_KEYS.

    Returns:
        A dictionary containing:
        - status: "success" or "error"
        - url: The URL with sensitive parameters masked. Malformed URLs are
          returned unchanged.
    """
    try:
        extra = get_extra_query_keys() + list(extra_sensitive_keys or [])
        return {
            "status": "success",
            "url": get_engine().redact_url(url, extra)
        }
    except Exception as e:
        return {
            "status": "error",
            "message": f"Unexpected error: {str(e)}"
        }


@mcp.tool()
def sanitize_body(body: str) -> dict[str, Any]:
    """
    Make an HTTP request or response body safe to print.

    JSON bodies have sensitive keys masked and long strings previewed, PEM
    blocks are masked, and a body still mentioning an authorization header
    or bearer credential is replaced entirely by "****".

    Returns:
        A dictionary containing:
        - status: "success" or "error"
        - body: The sanitized body
        - collapsed: True if the whole body was replaced by the mask
    """
    try:
        safe = get_engine().redact_bytes_chain(body).decode("utf-8", errors="replace")
        return {
            "status": "success",
            "body": safe,
            "collapsed": safe == REDACTION_MASK
        }
    except Exception as e:
        return {
            "status": "error",
            "message": f"Unexpected error: {str(e)}"
        }


@mcp.tool()
def sanitize_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """
    Redact a structured log field map.

    Returns:
        A dictionary containing:
        - status: "success" or "error"
        - fields: The redacted map, same keys at every nesting level
        - kv: The same fields rendered as "key=value key=value"
    """
    try:
        engine = get_engine()
        return {
            "status": "success",
            "fields": engine.safe_fields(fields),
            "kv": engine.safe_kv_string(fields)
        }
    except Exception as e:
        return {
            "status": "error",
            "message": f"Unexpected error: {str(e)}"
        }


@mcp.tool()
def sanitize_message(message: str) -> dict[str, Any]:
    """
    Scrub a free-form log message (error strings, exception text).

    Returns:
        A dictionary containing:
        - status: "success" or "error"
        - message: The scrubbed message
        - was_redacted: True if anything was replaced
    """
    try:
        safe, was_redacted = get_engine().redact(message)
        return {
            "status": "success",
            "message": safe,
            "was_redacted": was_redacted
        }
    except Exception as e:
        return {
            "status": "error",
            "message": f"Unexpected error: {str(e)}"
        }


if __name__ == "__main__":
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "WARNING").upper())
    # Run the MCP server using stdio transport
    mcp.run()
