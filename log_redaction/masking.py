"""
Masking primitives shared by the engine and the profiles.

Kept free of engine state so they can be used on their own.
"""

import re
from dataclasses import dataclass
from typing import Any, Optional

REDACTION_MASK = "****"
PREVIEW_WINDOW = 16

# Whole armored block, any label, shortest match
PEM_BLOCK_PATTERN = re.compile(r'-----BEGIN [^-]+-----[\s\S]+?-----END [^-]+-----')


@dataclass(frozen=True)
class RedactionResult:
    """
    Outcome of a fail-open redaction.

    sanitized is False when the input could not be parsed or re-serialized;
    value is then the caller's original input and reason says why.
    """
    value: Any
    sanitized: bool = True
    reason: Optional[str] = None


def truncate_preview(text: str) -> str:
    """
    Shorten a string to head + "…" + tail when longer than the preview window.

    Strings of PREVIEW_WINDOW characters or fewer are returned unchanged,
    so short secrets under an unrecognized key are NOT hidden by this.
    """
    if len(text) <= PREVIEW_WINDOW:
        return text
    half = PREVIEW_WINDOW // 2
    return text[:half] + "…" + text[-half:]


def redact_pem(text: str) -> str:
    """Replace every complete PEM block with the mask."""
    return PEM_BLOCK_PATTERN.sub(REDACTION_MASK, text)
