from __future__ import annotations

from pathlib import Path

import pytest

from tapship.core.config import ReleaseConfig
from tapship.test._support import make_project


@pytest.fixture
def project(tmp_path: Path) -> ReleaseConfig:
    return make_project(tmp_path)
