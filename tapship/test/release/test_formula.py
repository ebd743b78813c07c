from __future__ import annotations

import pytest

from tapship.core.config import FormulaConfig
from tapship.release.formula import (
    formula_class_name,
    formula_filename,
    release_url,
    render_formula,
)

SHA = "0123456789abcdef" * 4


@pytest.mark.parametrize(
    ("name", "expected"),
    [("hygen", "Hygen"), ("my-tool", "MyTool"), ("a_b.c", "ABC"), ("x2", "X2")],
)
def test_class_name(name: str, expected: str) -> None:
    assert formula_class_name(name) == expected


def test_filename() -> None:
    assert formula_filename("hygen") == "hygen.rb"


def test_release_url() -> None:
    assert release_url(name="hygen", version="6.1.0", formula=FormulaConfig()) == (
        "https://github.com/jondot/hygen/releases/download/v6.1.0/hygen.macos.v6.1.0.tar.gz"
    )


def test_render_interpolates_version_and_checksum() -> None:
    text = render_formula(name="hygen", checksum=SHA, version="6.1.0", formula=FormulaConfig())

    assert text.startswith("class Hygen < Formula\n")
    assert '  version "6.1.0"\n' in text
    assert f'  sha256 "{SHA}"\n' in text
    assert (
        '  url "https://github.com/jondot/hygen/releases/download/v6.1.0/'
        'hygen.macos.v6.1.0.tar.gz"\n'
    ) in text
    assert '    bin.install "hygen"\n' in text
    assert '  homepage "http://www.hygen.io/"\n' in text
    assert 'system "#{bin}/hygen", "--version"' in text
    assert text.endswith("end\n")


def test_render_is_deterministic() -> None:
    a = render_formula(name="hygen", checksum=SHA, version="6.1.0", formula=FormulaConfig())
    b = render_formula(name="hygen", checksum=SHA, version="6.1.0", formula=FormulaConfig())
    assert a == b


def test_render_uses_formula_config() -> None:
    formula = FormulaConfig(
        description="A tool", homepage="https://example.com", source_repo="acme/tool"
    )
    text = render_formula(name="tool", checksum=SHA, version="1.0.0", formula=formula)
    assert '  desc "A tool"\n' in text
    assert "https://github.com/acme/tool/releases/download/v1.0.0/" in text


def test_version_is_verbatim() -> None:
    text = render_formula(
        name="hygen", checksum=SHA, version="7.0.0-beta.1", formula=FormulaConfig()
    )
    assert "v7.0.0-beta.1/hygen.macos.v7.0.0-beta.1.tar.gz" in text
    assert '  version "7.0.0-beta.1"\n' in text


def test_quotes_and_backslashes_are_escaped() -> None:
    formula = FormulaConfig(
        description='The "simple" generator \\ fast',
        homepage='https://example.com/?q="x"',
    )
    text = render_formula(name="hygen", checksum=SHA, version="6.1.0", formula=formula)

    assert '  desc "The \\"simple\\" generator \\\\ fast"\n' in text
    assert '  homepage "https://example.com/?q=\\"x\\""\n' in text


def test_interpolation_in_description_is_escaped() -> None:
    formula = FormulaConfig(description="uses #{ENV} literally")
    text = render_formula(name="hygen", checksum=SHA, version="6.1.0", formula=formula)

    assert '  desc "uses \\#{ENV} literally"\n' in text
    assert 'system "#{bin}/hygen", "--version"' in text
