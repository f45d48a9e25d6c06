"""
Scoped credential handling
"""
from __future__ import annotations
from typing import Optional


class Credential:
    """
    Secret string that never shows up in reprs, logs or tracebacks.

    The transport layer calls reveal() at the moment it needs the value;
    wipe() drops the reference once the workflow is done with it.
    """
    __slots__ = ("_secret",)

    def __init__(self, secret: Optional[str]) -> None:
        self._secret = secret or ""

    def reveal(self) -> str:
        return self._secret

    def wipe(self) -> None:
        self._secret = ""

    def __bool__(self) -> bool:
        return bool(self._secret)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Credential):
            return self._secret == other._secret
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._secret)

    def __repr__(self) -> str:
        return "Credential('********')" if self._secret else "Credential('')"

    __str__ = __repr__

    def __enter__(self) -> Credential:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.wipe()
