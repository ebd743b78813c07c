"""Release orchestration and Homebrew tap publishing."""

from .env import PublishRequest, validate_environment
from .errors import ReleaseError
from .formula import render_formula
from .publish import PublishedFormula, publish_formula
from .service import ReleaseSummary, checksum_release, package_release, run_release

__all__ = [
    "PublishRequest",
    "PublishedFormula",
    "ReleaseError",
    "ReleaseSummary",
    "checksum_release",
    "package_release",
    "publish_formula",
    "render_formula",
    "run_release",
    "validate_environment",
]
