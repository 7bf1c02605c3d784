"""Who results are recorded for.

Detection code never reads a global session; callers pass an
``IdentityProvider`` explicitly. Anonymous callers still get verdicts but
nothing is persisted for them.
"""

from __future__ import annotations

from typing import Optional, Protocol


class IdentityProvider(Protocol):
    def current_user_id(self) -> Optional[str]: ...


class StaticIdentity:
    """Identity fixed at construction (CLI ``--user``, request header, config)."""

    def __init__(self, user_id: Optional[str]) -> None:
        # Blank strings count as anonymous
        self._user_id = user_id.strip() if user_id and user_id.strip() else None

    def current_user_id(self) -> Optional[str]:
        return self._user_id

    def __repr__(self) -> str:
        return f"StaticIdentity({self._user_id!r})"


ANONYMOUS = StaticIdentity(None)
