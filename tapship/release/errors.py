"""Error payload for the release and publish steps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True)
class ReleaseError:
    kind: Literal[
        "missing_credential",
        "invalid_config",
        "checksum_failed",
        "tap_failed",
        "filesystem_failed",
    ]
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
