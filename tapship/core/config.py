"""Typed release configuration and manifest loading.

The configuration is immutable and handed explicitly to every component.
Defaults describe the hygen standalone release; a ``tapship.toml`` at the
project root may override any of them:

    [release]
    work_dir = "standalone"
    platforms = ["macos", "win.exe", "linux"]
    checksum_command = ["shasum", "-a", "256"]

    [formula]
    description = "..."
    homepage = "..."
    source_repo = "owner/project"

    [tap]
    repo = "owner/homebrew-tap"
    author_name = "..."
    author_email = "..."
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_tuple, get_table

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "FormulaConfig",
    "Manifest",
    "ReleaseConfig",
    "TapConfig",
    "load_config",
    "load_manifest",
]

CONFIG_FILENAME = "tapship.toml"

DEFAULT_PLATFORMS = ("macos", "win.exe", "linux")
DEFAULT_CHECKSUM_COMMAND = ("shasum", "-a", "256")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Config or manifest could not be loaded."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class Manifest:
    """Project identity read from the manifest (package.json)."""

    name: str
    version: str


@dataclass(frozen=True, slots=True)
class FormulaConfig:
    """Fixed parts of the Homebrew formula."""

    description: str = "The simple, fast, and scalable code generator that lives in your project."
    homepage: str = "http://www.hygen.io/"
    source_repo: str = "jondot/hygen"


@dataclass(frozen=True, slots=True)
class TapConfig:
    """Tap repository and the identity used to commit to it."""

    repo: str = "jondot/homebrew-tap"
    host: str = "github.com"
    author_name: str = "tapship"
    author_email: str = "tapship@users.noreply.github.com"

    @property
    def public_url(self) -> str:
        return f"https://{self.host}/{self.repo}.git"

    def authenticated_url(self, token: str) -> str:
        return f"https://{token}@{self.host}/{self.repo}.git"


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Everything a release run needs besides the manifest and environment."""

    root: Path
    work_dir: str = "standalone"
    manifest: str = "package.json"
    platforms: tuple[str, ...] = DEFAULT_PLATFORMS
    checksum_platform: str = "macos"
    checksum_command: tuple[str, ...] = DEFAULT_CHECKSUM_COMMAND
    publish_env: str = "MANUAL_PUBLISH"
    token_env: str = "GITHUB_TOKEN"
    formula: FormulaConfig = field(default_factory=FormulaConfig)
    tap: TapConfig = field(default_factory=TapConfig)

    @property
    def work_path(self) -> Path:
        """Directory holding prebuilt binaries and produced archives."""
        return self.root / self.work_dir

    @property
    def manifest_path(self) -> Path:
        return self.root / self.manifest

    def scratch_path(self, platform_id: str) -> Path:
        """Per-platform scratch directory; unique per platform."""
        return self.root / f"__{platform_id}"

    @classmethod
    def from_dict(cls, root: Path, data: Mapping[str, object]) -> ReleaseConfig:
        """Build a config from parsed TOML, falling back to defaults per key."""
        release: StrDict = get_table(data, "release") or {}
        formula: StrDict = get_table(data, "formula") or {}
        tap: StrDict = get_table(data, "tap") or {}

        default_formula = FormulaConfig()
        default_tap = TapConfig()

        return cls(
            root=root,
            work_dir=get_str(release, "work_dir") or "standalone",
            manifest=get_str(release, "manifest") or "package.json",
            platforms=get_str_tuple(release, "platforms") or DEFAULT_PLATFORMS,
            checksum_platform=get_str(release, "checksum_platform") or "macos",
            checksum_command=get_str_tuple(release, "checksum_command")
            or DEFAULT_CHECKSUM_COMMAND,
            publish_env=get_str(release, "publish_env") or "MANUAL_PUBLISH",
            token_env=get_str(release, "token_env") or "GITHUB_TOKEN",
            formula=FormulaConfig(
                description=get_str(formula, "description") or default_formula.description,
                homepage=get_str(formula, "homepage") or default_formula.homepage,
                source_repo=get_str(formula, "source_repo") or default_formula.source_repo,
            ),
            tap=TapConfig(
                repo=get_str(tap, "repo") or default_tap.repo,
                host=get_str(tap, "host") or default_tap.host,
                author_name=get_str(tap, "author_name") or default_tap.author_name,
                author_email=get_str(tap, "author_email") or default_tap.author_email,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(root: Path, path: Path | None = None) -> Result[ReleaseConfig, ConfigError]:
    """Load the release config for a project root.

    Args:
        root: Project root (holds the manifest and the work directory).
        path: Explicit config file. When omitted, ``<root>/tapship.toml`` is
            used if present, otherwise defaults apply.

    Returns:
        Ok(ReleaseConfig) or Err(ConfigError).
    """
    if path is None:
        path = root / CONFIG_FILENAME
        if not path.exists():
            return Ok(ReleaseConfig(root=root))

    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    invalid = _check_release_lists(result.value, path)
    if invalid is not None:
        return Err(invalid)
    return Ok(ReleaseConfig.from_dict(root, result.value))


def _check_release_lists(data: Mapping[str, object], path: Path) -> ConfigError | None:
    """Reject list settings that are present but not a non-empty list of strings."""
    release = get_table(data, "release") or {}
    for key in ("platforms", "checksum_command"):
        if key in release and not get_str_tuple(release, key):
            return ConfigError(
                f"[release] {key} must be a non-empty list of strings",
                path=path,
                hint=f"got {release[key]!r}",
            )
    return None


def load_manifest(path: Path) -> Result[Manifest, ConfigError]:
    """Read ``name`` and ``version`` from a JSON manifest.

    The version is taken verbatim; its shape is not validated.
    """
    try:
        data_obj: object = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(
            ConfigError(
                f"Manifest not found: {path}",
                path=path,
                hint="Run from the project root or pass --root.",
            )
        )
    except OSError as e:
        return Err(ConfigError(f"Cannot read manifest: {e}", path=path))
    except json.JSONDecodeError as e:
        return Err(ConfigError(f"Invalid JSON in manifest: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Manifest root must be a JSON object", path=path))

    name = get_str(data, "name")
    version = get_str(data, "version")
    missing = [key for key, value in (("name", name), ("version", version)) if value is None]
    if name is None or version is None:
        return Err(ConfigError(f"Manifest missing: {', '.join(missing)}", path=path))

    return Ok(Manifest(name=name, version=version))
