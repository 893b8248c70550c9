"""
Sensitivity Profiles Package

Available profiles:
    - secret_store: Default vocabulary (token, secret, password, key, cert, ...)
    - custom: KeywordProfile built from runtime keyword lists

To add a new profile:
    1. Create a new file (e.g., vault.py)
    2. Subclass SensitivityProfile
    3. Implement get_key_patterns() with your KeyPatterns
    4. Register it with engine.load_profile()
"""

from .custom import KeywordProfile
from .secret_store import DEFAULT_PROFILE, SENSITIVE_KEY_SUBSTRINGS, SecretStoreProfile

__all__ = ["SecretStoreProfile", "KeywordProfile", "DEFAULT_PROFILE", "SENSITIVE_KEY_SUBSTRINGS"]
