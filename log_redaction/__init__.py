"""
Log Redaction - Sanitization of secret-store client debug output

This module scrubs tokens, passwords, certificates and arbitrary API
payloads from HTTP headers, URL query strings, JSON bodies and PEM text
before they reach a log.

Architecture:
    - RedactionEngine: Classifier, walker, format adapters and chain sanitizer
    - SensitivityProfile: Abstract base class for classification policies
    - profiles/: Directory containing concrete policies
    - HTTPDebugLogger: Request/response logging hooks built on the engine

Example:
    from log_redaction import RedactionEngine

    engine = RedactionEngine()
    engine.redact_bytes_chain(b'{"token": "abc", "note": "hi"}')
    # b'{"token":"****","note":"hi"}'
"""

from .base_profile import KeyPattern, RedactionPattern, SensitivityProfile
from .engine import RedactionEngine, get_default_engine
from .http_debug import HTTPDebugLogger
from .masking import PREVIEW_WINDOW, REDACTION_MASK, RedactionResult, redact_pem, truncate_preview

__all__ = [
    "RedactionEngine",
    "get_default_engine",
    "SensitivityProfile",
    "KeyPattern",
    "RedactionPattern",
    "HTTPDebugLogger",
    "RedactionResult",
    "REDACTION_MASK",
    "PREVIEW_WINDOW",
    "truncate_preview",
    "redact_pem",
]
