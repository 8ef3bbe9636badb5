"""Share scope utilities.

The default share scope is a per-user Jira setting that decides the
visibility of newly created filters. Keeping it in the domain layer lets the
filter client, the CLI and the tests share a single source of truth.
"""

from __future__ import annotations

from enum import Enum


class ShareScope(str, Enum):
    """Values accepted by `/filter/defaultShareScope`."""

    GLOBAL = "GLOBAL"
    PRIVATE = "PRIVATE"

    @classmethod
    def parse(cls, value: "ShareScope | str") -> "ShareScope":
        """Return the member for `value`.

        Matching is exact: Jira rejects lower-case scopes, so we do too.
        """

        if isinstance(value, cls):
            return value
        return cls(value)

    def label(self) -> str:
        """Human readable label for CLI output."""

        return "Shared with everyone" if self is ShareScope.GLOBAL else "Private"
