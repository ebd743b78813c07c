from __future__ import annotations

from pathlib import Path

from tapship.core.config import ReleaseConfig
from tapship.core.result import Err, Ok
from tapship.release.env import PublishRequest, validate_environment


def test_no_flag_means_no_publish(tmp_path: Path) -> None:
    config = ReleaseConfig(root=tmp_path)
    assert validate_environment({}, config=config) == Ok(PublishRequest(publish=False))


def test_token_alone_does_not_publish(tmp_path: Path) -> None:
    config = ReleaseConfig(root=tmp_path)
    result = validate_environment({"GITHUB_TOKEN": "t"}, config=config)
    assert result == Ok(PublishRequest(publish=False))


def test_empty_flag_counts_as_unset(tmp_path: Path) -> None:
    config = ReleaseConfig(root=tmp_path)
    result = validate_environment({"MANUAL_PUBLISH": ""}, config=config)
    assert result == Ok(PublishRequest(publish=False))


def test_flag_without_token_fails(tmp_path: Path) -> None:
    config = ReleaseConfig(root=tmp_path)
    result = validate_environment({"MANUAL_PUBLISH": "1"}, config=config)

    assert isinstance(result, Err)
    assert result.error.kind == "missing_credential"
    assert "GITHUB_TOKEN" in result.error.message
    assert result.error.hint is not None


def test_flag_with_empty_token_fails(tmp_path: Path) -> None:
    config = ReleaseConfig(root=tmp_path)
    result = validate_environment({"MANUAL_PUBLISH": "yes", "GITHUB_TOKEN": ""}, config=config)
    assert isinstance(result, Err)


def test_flag_with_token(tmp_path: Path) -> None:
    config = ReleaseConfig(root=tmp_path)
    result = validate_environment(
        {"MANUAL_PUBLISH": "true", "GITHUB_TOKEN": "ghp_anything"}, config=config
    )
    assert result == Ok(PublishRequest(publish=True, token="ghp_anything"))


def test_custom_variable_names(tmp_path: Path) -> None:
    config = ReleaseConfig(root=tmp_path, publish_env="RELEASE", token_env="TAP_TOKEN")
    assert isinstance(validate_environment({"RELEASE": "1"}, config=config), Err)
    assert validate_environment({"RELEASE": "1", "TAP_TOKEN": "x"}, config=config) == Ok(
        PublishRequest(publish=True, token="x")
    )


def test_repr_hides_token() -> None:
    assert "secret" not in repr(PublishRequest(publish=True, token="secret"))
