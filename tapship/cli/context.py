from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from tapship.core.config import ReleaseConfig, load_config
from tapship.core.result import Err
from tapship.output.console import ConsoleProtocol, RichConsole
from tapship.output.errors import print_run_error, run_error_exit_code

ROOT_ENV = "TAPSHIP_ROOT"
CONFIG_ENV = "TAPSHIP_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: ReleaseConfig
    console: ConsoleProtocol


def project_root() -> Path:
    env = os.environ.get(ROOT_ENV)
    if env:
        return Path(env).expanduser().resolve()
    return Path.cwd().resolve()


def build_context() -> CLIContext:
    console = RichConsole()
    root = project_root()
    config_env = os.environ.get(CONFIG_ENV)
    config_path = Path(config_env).expanduser().resolve() if config_env else None

    result = load_config(root, config_path)
    if isinstance(result, Err):
        print_run_error(result.error, console)
        raise typer.Exit(code=run_error_exit_code(result.error))

    return CLIContext(config=result.value, console=console)
