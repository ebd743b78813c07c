"""Environment gate for publishing.

Runs before any side effect: a release that asks to publish must carry a
token, otherwise the run stops here.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from tapship.core.config import ReleaseConfig
from tapship.core.result import Err, Ok, Result
from tapship.release.errors import ReleaseError


@dataclass(frozen=True, slots=True)
class PublishRequest:
    """Whether to publish, and with which token."""

    publish: bool
    token: str | None = None

    def __repr__(self) -> str:
        token = "***" if self.token else None
        return f"PublishRequest(publish={self.publish!r}, token={token!r})"


def _is_set(env: Mapping[str, str], key: str) -> bool:
    return bool(env.get(key, ""))


def validate_environment(
    env: Mapping[str, str],
    *,
    config: ReleaseConfig,
) -> Result[PublishRequest, ReleaseError]:
    """Check the publish flag against the credential.

    The flag is presence-only: any non-empty value asks for a publish. The
    token is accepted as-is.
    """
    if not _is_set(env, config.publish_env):
        return Ok(PublishRequest(publish=False))

    if not _is_set(env, config.token_env):
        return Err(
            ReleaseError(
                kind="missing_credential",
                message=f"{config.publish_env} is set but {config.token_env} is missing",
                hint=f"Export {config.token_env} with push access to {config.tap.repo}.",
            )
        )

    return Ok(PublishRequest(publish=True, token=env[config.token_env]))
