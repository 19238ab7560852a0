from __future__ import annotations

from typing import Protocol


class CredentialPolicy(Protocol):
    """How passwords are stored and checked.

    The directory only talks to this interface, so a hashed scheme can be
    dropped in without touching login or password-change callers.
    """

    def prepare(self, raw_password: str) -> str:
        """Value to persist for ``raw_password``."""

        raise NotImplementedError

    def verify(self, stored: str, candidate: str) -> bool:
        raise NotImplementedError


class PlaintextCredentials(CredentialPolicy):
    """Stores passwords as given and compares by string equality."""

    def prepare(self, raw_password: str) -> str:
        return raw_password

    def verify(self, stored: str, candidate: str) -> bool:
        return stored is not None and candidate is not None and stored == candidate
