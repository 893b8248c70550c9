"""
Secret Store Profile - Default classification vocabulary.

Covers the field, header and query-parameter names a configuration/secret
store client exchanges with its server. Matching is substring-based and
case-insensitive, so `ApiKeyValue` and `my_private_note` are both sensitive.
The list is over-inclusive on purpose: a false positive only costs a
masked debug value.
"""

import re

from ..base_profile import KeyPattern, RedactionPattern, SensitivityProfile
from ..masking import REDACTION_MASK

SENSITIVE_KEY_SUBSTRINGS = (
    "token",
    "secret",
    "password",
    "passwd",
    "apikey",
    "api_key",
    "authorization",
    "auth",
    "credential",
    "private",
    "key",
    "cert",
    "certificate",
    "pem",
    "jwt",
    "bearer",
    "value",
)


class SecretStoreProfile(SensitivityProfile):
    """
    Default profile loaded by every RedactionEngine unless disabled.

    Key patterns are the vocabulary above. Text patterns catch credentials
    that show up inside free-form messages (error strings, exception text).
    """

    @property
    def name(self) -> str:
        return "secret_store"

    @property
    def description(self) -> str:
        return "Secret store vocabulary (tokens, passwords, keys, certificates)"

    def get_key_patterns(self) -> list[KeyPattern]:
        return [KeyPattern(text) for text in SENSITIVE_KEY_SUBSTRINGS]

    def get_text_patterns(self) -> list[RedactionPattern]:
        return [
            # Authorization header echoed into a message
            RedactionPattern(
                name="authorization_header",
                pattern=re.compile(r'(?i)\b(authorization)\s*:\s*\S+(?:\s+[^\s,;]+)?'),
                replacement=rf"\1: {REDACTION_MASK}",
                description="Authorization header line"
            ),

            # Bare bearer credential
            RedactionPattern(
                name="bearer_token",
                pattern=re.compile(r'(?i)\b(bearer)\s+[A-Za-z0-9._~+/=-]+'),
                replacement=rf"\1 {REDACTION_MASK}",
                description="Bearer token"
            ),

            # token=..., password: ... and friends
            RedactionPattern(
                name="secret_assignment",
                pattern=re.compile(
                    r'(?i)\b((?:api[_-]?key|access[_-]?token|token|secret|password|passwd|pwd))'
                    r'(\s*[=:]\s*)["\']?[^\s"\',;&]+["\']?'
                ),
                replacement=rf"\1\2{REDACTION_MASK}",
                description="Secret in key=value format"
            ),
        ]


# Export the default profile
DEFAULT_PROFILE = SecretStoreProfile()
