# Allow-list gate: restricts logins to a configured set of GitHub logins.
# Created: 2026-10-12

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from repogate.github.models import Identity


@dataclass(frozen=True)
class AllowList:
    """Immutable set of case-folded usernames.

    An empty list disables the gate: every identity is admitted.
    """

    names: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_config(cls, raw: str | None) -> AllowList:
        """Build from a comma-separated string such as ``"alice, Bob"``."""
        if not raw:
            return cls()
        names = (part.strip().casefold() for part in raw.split(","))
        return cls(frozenset(n for n in names if n))

    @property
    def enabled(self) -> bool:
        return bool(self.names)

    @property
    def members(self) -> list[str]:
        return sorted(self.names)

    def is_allowed(self, identity: Identity) -> bool:
        if not self.names:
            return True
        username = (identity.username or "").strip().casefold()
        # A profile without any name never matches, even a stray empty entry.
        if not username:
            return False
        return username in self.names
