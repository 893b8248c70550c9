"""
RedactionEngine - Core engine for sanitizing secret-store debug output.

This engine orchestrates:
1. Key classification against the loaded sensitivity profiles
2. Masking / previewing of scalar values
3. Recursive walking of field maps and decoded JSON trees
4. Format adapters for HTTP headers, URL query strings, JSON bodies and PEM text
5. A chain sanitizer for byte blobs of unknown format

Parse and serialization errors never escape: adapters fail open and hand
back the caller's input unchanged.

Thread-safe and designed for use on every request/response log line.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional, Union
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import scrubadub

from .base_profile import SensitivityProfile
from .masking import REDACTION_MASK, RedactionResult, redact_pem, truncate_preview
from .profiles import DEFAULT_PROFILE

logger = logging.getLogger(__name__)

# Masked whatever the loaded profiles say
ALWAYS_MASKED_HEADERS = frozenset({"authorization", "cookie"})

# Any of these left in a chain-sanitized body collapses it to the mask
CREDENTIAL_MARKERS = ("authorization:", "bearer ")

Body = Union[bytes, bytearray, str]


class RedactionEngine:
    """
    Engine for making secret-store HTTP artifacts safe to log.

    Example:
        engine = RedactionEngine()

        engine.redact_headers({"Authorization": ["Bearer abc"]})
        # {"Authorization": ["****"]}

        engine.redact_url("https://x/y?token=abcdef123456&page=2")
        # "https://x/y?token=%2A%2A%2A%2A&page=2"

        engine.redact_bytes_chain(b'{"password": "hunter2", "id": 7}')
        # b'{"password":"****","id":7}'

    Thread Safety:
        Every redaction method is a pure function of its input and the
        loaded profiles. load_profile() and unload_profile() should only be
        called during initialization.
    """

    def __init__(self, load_default_profile: bool = True):
        """
        Initialize the RedactionEngine.

        Args:
            load_default_profile: If True, loads the secret_store vocabulary.
                                  Set to False for a clean slate.
        """
        self._profiles: dict[str, SensitivityProfile] = {}
        self._key_patterns: tuple = ()
        self._scrubber = scrubadub.Scrubber()

        if load_default_profile:
            self.load_profile(DEFAULT_PROFILE)

    def load_profile(self, profile: SensitivityProfile) -> None:
        """
        Load a sensitivity profile into the engine.

        Note:
            If a profile with the same name already exists, it will be replaced.
        """
        self._profiles[profile.name] = profile
        self._rebuild_key_patterns()
        self._rebuild_scrubber()
        logger.info(f"Loaded sensitivity profile: {profile.name}")

    def unload_profile(self, profile_name: str) -> bool:
        """
        Remove a sensitivity profile from the engine.

        Returns:
            True if profile was removed, False if not found.
        """
        if profile_name in self._profiles:
            del self._profiles[profile_name]
            self._rebuild_key_patterns()
            self._rebuild_scrubber()
            logger.info(f"Unloaded sensitivity profile: {profile_name}")
            return True
        return False

    def list_profiles(self) -> list[str]:
        """Return a list of loaded profile names."""
        return list(self._profiles.keys())

    def _rebuild_key_patterns(self) -> None:
        patterns = []
        for profile in self._profiles.values():
            patterns.extend(profile.get_key_patterns())
        self._key_patterns = tuple(patterns)

    def _rebuild_scrubber(self) -> None:
        # scrubadub has no remove_detector; start over from the loaded profiles
        scrubber = scrubadub.Scrubber()
        for profile in self._profiles.values():
            for detector in profile.get_scrubadub_detectors():
                scrubber.add_detector(detector)
        self._scrubber = scrubber

    # -- classification and scalars ------------------------------------

    def is_sensitive_key(self, key: Any) -> bool:
        """
        Return True if a field, header or query-parameter name is sensitive.

        The name is lower-cased and tested against every loaded key pattern;
        no other normalization is applied.
        """
        lowered = str(key).lower()
        for pattern in self._key_patterns:
            if pattern.matches(lowered):
                return True
        return False

    def safe_value(self, key: Any, value: Any) -> Any:
        """
        Produce a loggable version of a single value.

        Sensitive key -> mask (whatever the value), string or bytes ->
        preview, anything else -> unchanged. Bytes are decoded as UTF-8
        with replacement characters before previewing.
        """
        if self.is_sensitive_key(key):
            return REDACTION_MASK
        return self._preview_scalar(value)

    @staticmethod
    def _preview_scalar(value: Any) -> Any:
        if isinstance(value, (bytes, bytearray)):
            value = bytes(value).decode("utf-8", errors="replace")
        if isinstance(value, str):
            return truncate_preview(value)
        return value

    # -- structural walker -----------------------------------------------

    def safe_fields(self, fields: Mapping) -> dict:
        """
        Recursively redact a field map.

        Nested mappings are walked even under sensitive keys, so the key set
        is preserved at every level. Sequence elements carry no key of their
        own and therefore only ever get previewed.
        """
        out = {}
        for key, value in fields.items():
            if isinstance(value, Mapping):
                out[key] = self.safe_fields(value)
            elif isinstance(value, (list, tuple)) and not self.is_sensitive_key(key):
                out[key] = self._safe_sequence(value)
            else:
                out[key] = self.safe_value(key, value)
        return out

    def _safe_sequence(self, items: Iterable) -> list:
        out = []
        for item in items:
            if isinstance(item, Mapping):
                out.append(self.safe_fields(item))
            elif isinstance(item, (list, tuple)):
                out.append(self._safe_sequence(item))
            else:
                out.append(self._preview_scalar(item))
        return out

    def safe_kv_string(self, fields: Mapping) -> str:
        """
        Render a field map as space-separated key=value pairs for inline logs.

        String values are written raw; everything else is JSON-encoded, or
        str()-ed when JSON cannot represent it (e.g. non-string dict keys).
        """
        parts = []
        for key, value in self.safe_fields(fields).items():
            if isinstance(value, str):
                rendered = value
            else:
                try:
                    rendered = json.dumps(value, ensure_ascii=False, default=str)
                except (TypeError, ValueError):
                    rendered = str(value)
            parts.append(f"{key}={rendered}")
        return " ".join(parts)

    # -- format adapters -------------------------------------------------

    def redact_headers(self, headers: Mapping) -> dict:
        """
        Redact an HTTP header multimap.

        Args:
            headers: Header name -> list of values. A plain string value
                     (as requests/httpx expose) is handled as one value.

        Returns:
            A new dict with the same names. Sensitive headers, plus
            Authorization and Cookie, collapse to a single mask.
        """
        safe = {}
        for name, values in headers.items():
            single = isinstance(values, str)
            if self.is_sensitive_key(name) or str(name).lower() in ALWAYS_MASKED_HEADERS:
                safe[name] = REDACTION_MASK if single else [REDACTION_MASK]
            elif single:
                safe[name] = truncate_preview(values)
            else:
                safe[name] = [truncate_preview(v) for v in values]
        return safe

    def redact_url(self, raw: str, extra_sensitive_keys: Iterable[str] = ()) -> str:
        """
        Redact the query string of a URL.

        Parameters are masked when their name is sensitive or equals one of
        extra_sensitive_keys (case-insensitive); other values are previewed.
        Scheme, host, path and fragment pass through. A URL that cannot be
        parsed is returned unchanged.
        """
        try:
            parts = urlsplit(raw)
            params = parse_qsl(parts.query, keep_blank_values=True)
        except (ValueError, TypeError) as e:
            logger.debug(f"URL not parseable, leaving as-is: {e}")
            return raw

        if not params:
            return raw

        extra = {k.casefold() for k in extra_sensitive_keys}
        redacted = []
        for name, value in params:
            if self.is_sensitive_key(name) or name.casefold() in extra:
                redacted.append((name, REDACTION_MASK))
            else:
                redacted.append((name, truncate_preview(value)))

        return urlunsplit(parts._replace(query=urlencode(redacted)))

    def try_redact_json(self, body: Body) -> RedactionResult:
        """
        Redact a JSON document, reporting whether it fell back.

        Returns:
            RedactionResult whose value has the same type as body. When the
            body is not JSON, or the result cannot be serialized, value is
            the original body and sanitized is False.
        """
        try:
            tree = json.loads(body)
        except (ValueError, TypeError, RecursionError) as e:
            return RedactionResult(body, sanitized=False, reason=f"not JSON: {e}")

        try:
            redacted = self._redact_json_node(tree)
            text = json.dumps(
                redacted, ensure_ascii=False, separators=(",", ":"), allow_nan=False
            )
        except (ValueError, TypeError, RecursionError) as e:
            logger.warning(f"JSON re-serialization failed, leaving body as-is: {e}")
            return RedactionResult(body, sanitized=False, reason=f"serialization failed: {e}")

        if isinstance(body, str):
            return RedactionResult(text)
        return RedactionResult(text.encode("utf-8"))

    def redact_json_bytes(self, body: Body) -> Body:
        """Redact a JSON body; non-JSON input comes back unchanged."""
        result = self.try_redact_json(body)
        if not result.sanitized:
            logger.debug(f"JSON redaction skipped: {result.reason}")
        return result.value

    def _redact_json_node(self, node: Any) -> Any:
        if isinstance(node, dict):
            out = {}
            for key, value in node.items():
                if self.is_sensitive_key(key):
                    out[key] = REDACTION_MASK
                else:
                    out[key] = self._redact_json_node(value)
            return out
        if isinstance(node, list):
            return [self._redact_json_node(item) for item in node]
        if isinstance(node, str):
            return truncate_preview(node)
        return node

    def redact_pem(self, text: str) -> str:
        """Replace every complete PEM block in text with the mask."""
        return redact_pem(text)

    # -- chain -----------------------------------------------------------

    def redact_bytes_chain(self, body: Body) -> bytes:
        """
        Make an arbitrary body safe to print.

        JSON redaction, then PEM redaction, then a last-resort scan: if an
        authorization or bearer marker is still present anywhere, the whole
        body is replaced by the mask.
        """
        if isinstance(body, str):
            body = body.encode("utf-8", errors="surrogateescape")
        body = self.redact_json_bytes(bytes(body))

        text = redact_pem(body.decode("utf-8", errors="surrogateescape"))
        lowered = text.lower()
        if any(marker in lowered for marker in CREDENTIAL_MARKERS):
            return REDACTION_MASK.encode("utf-8")
        return text.encode("utf-8", errors="surrogateescape")

    # -- free text -------------------------------------------------------

    def redact(self, text: Optional[str]) -> tuple[Optional[str], bool]:
        """
        Redact sensitive data from a free-form log message.

        Applies scrubadub's detectors, PEM block redaction, then the text
        patterns of every loaded profile.

        Returns:
            A tuple of (redacted_text, was_redacted).
        """
        if not text:
            return text, False

        original_text = text

        try:
            text = self._scrubber.clean(text)
        except Exception as e:
            logger.warning(f"Scrubadub error (continuing with patterns): {e}")

        text = redact_pem(text)

        for profile in self._profiles.values():
            for pattern in profile.get_text_patterns():
                try:
                    text = pattern.pattern.sub(pattern.replacement, text)
                except Exception as e:
                    logger.warning(f"Pattern '{pattern.name}' error: {e}")

        return text, text != original_text


# Singleton instance for convenience
_default_engine: Optional[RedactionEngine] = None


def get_default_engine() -> RedactionEngine:
    """
    Get the default RedactionEngine instance.

    For a custom policy, instantiate RedactionEngine directly.
    """
    global _default_engine
    if _default_engine is None:
        _default_engine = RedactionEngine()
    return _default_engine
