"""
Base Sensitivity Profile - Abstract base class for classification rules.

A profile tells the RedactionEngine which field, header and query-parameter
names denote sensitive content. Extend this class to tighten or widen the
policy for a deployment without touching the engine. For example:
    - secret_store.py for the default secret-store vocabulary
    - custom.py for names supplied through configuration

Each profile defines:
    - name: Unique identifier for the profile
    - description: Human-readable description
    - get_key_patterns(): Key-name patterns used by the classifier
    - get_text_patterns(): Optional regex patterns for free-text messages
    - get_scrubadub_detectors(): Optional custom scrubadub detectors
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Pattern


@dataclass(frozen=True)
class KeyPattern:
    """A single key-name classification rule."""
    text: str  # e.g., "token", "password"
    exact: bool = False  # True: whole-name match, False: substring match

    def matches(self, lowered_key: str) -> bool:
        """Test an already lower-cased key against this pattern."""
        needle = self.text.lower()
        if self.exact:
            return lowered_key == needle
        return needle in lowered_key


@dataclass
class RedactionPattern:
    """A single free-text redaction pattern definition."""
    name: str  # e.g., "bearer_token"
    pattern: Pattern[str]  # Compiled regex pattern
    replacement: str  # e.g., "Bearer ****"
    description: str = ""  # Human-readable description


class SensitivityProfile(ABC):
    """
    Abstract base class for sensitivity profiles.

    Example:
        class VaultProfile(SensitivityProfile):
            @property
            def name(self) -> str:
                return "vault"

            @property
            def description(self) -> str:
                return "HashiCorp Vault header and field names"

            def get_key_patterns(self) -> list[KeyPattern]:
                return [
                    KeyPattern("x-vault-token", exact=True),
                    KeyPattern("wrap"),
                ]
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this profile (e.g., 'secret_store', 'custom')."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what this profile covers."""
        pass

    @abstractmethod
    def get_key_patterns(self) -> list[KeyPattern]:
        """
        Return the key-name patterns that mark a field as sensitive.

        A key is sensitive when ANY pattern of ANY loaded profile matches it.
        """
        pass

    def get_text_patterns(self) -> list[RedactionPattern]:
        """
        Optional: Return regex patterns applied to free-text log messages.

        These run AFTER scrubadub's detectors and PEM block redaction.
        By default, returns an empty list.
        """
        return []

    def get_scrubadub_detectors(self) -> list:
        """
        Optional: Return custom scrubadub Detector classes.

        By default, returns an empty list (use scrubadub's built-in detectors).
        """
        return []

    def __repr__(self) -> str:
        return f"<SensitivityProfile: {self.name}>"
