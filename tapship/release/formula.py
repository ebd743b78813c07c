"""Homebrew formula rendering."""

from __future__ import annotations

import re

from tapship.core.config import FormulaConfig

__all__ = ["formula_class_name", "formula_filename", "release_url", "render_formula"]


def formula_class_name(name: str) -> str:
    """Homebrew class name for a formula: ``hygen`` -> ``Hygen``, ``my-tool`` -> ``MyTool``."""
    parts = [p for p in re.split(r"[^A-Za-z0-9]+", name) if p]
    return "".join(p[:1].upper() + p[1:] for p in parts)


def formula_filename(name: str) -> str:
    return f"{name}.rb"


def release_url(*, name: str, version: str, formula: FormulaConfig) -> str:
    """Download URL of the macOS archive attached to the GitHub release."""
    return (
        f"https://github.com/{formula.source_repo}/releases/download/"
        f"v{version}/{name}.macos.v{version}.tar.gz"
    )


def _ruby_str(value: str) -> str:
    """Escape a value for a double-quoted Ruby string literal."""
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("#{", "\\#{")


def render_formula(*, name: str, checksum: str, version: str, formula: FormulaConfig) -> str:
    """Render the formula text. Same inputs always give the same output."""
    url = release_url(name=name, version=version, formula=formula)
    return f'''class {formula_class_name(name)} < Formula
  desc "{_ruby_str(formula.description)}"
  homepage "{_ruby_str(formula.homepage)}"
  url "{_ruby_str(url)}"
  version "{_ruby_str(version)}"
  sha256 "{checksum}"

  def install
    bin.install "{_ruby_str(name)}"
  end

  test do
    system "#{{bin}}/{_ruby_str(name)}", "--version"
  end
end
'''
