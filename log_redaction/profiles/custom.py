"""
Keyword Profile - Classification rules supplied at runtime.

Used by the server to turn REDACTION_EXTRA_SENSITIVE_KEYS into a profile,
and by callers that want a per-deployment vocabulary.
"""

from typing import Iterable

from ..base_profile import KeyPattern, SensitivityProfile


class KeywordProfile(SensitivityProfile):
    """
    Profile built from plain keyword lists.

    Example:
        profile = KeywordProfile(["session", "otp"], exact=["sid"])
        engine.load_profile(profile)
    """

    def __init__(
        self,
        substrings: Iterable[str] = (),
        exact: Iterable[str] = (),
        name: str = "custom",
    ):
        self._name = name
        self._patterns = [KeyPattern(s.strip()) for s in substrings if s and s.strip()]
        self._patterns += [KeyPattern(s.strip(), exact=True) for s in exact if s and s.strip()]

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return f"Runtime keyword profile ({len(self._patterns)} patterns)"

    def get_key_patterns(self) -> list[KeyPattern]:
        return list(self._patterns)
