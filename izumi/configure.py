"""Reading the user's configuration file of start-up commands."""

from __future__ import annotations

import os
from typing import Iterable

from .commands import run
from .state import ApplicationData

PATH_MAX = 4096
CONFIG_SUFFIX = "/.config/izumi/config"


def get_config_path() -> str | None:
    """Return the configuration file's path under ``$HOME``, or None."""
    home = os.environ.get("HOME")
    if home is None:
        return None
    if len(home) + len(CONFIG_SUFFIX) > PATH_MAX:
        return None
    return home + CONFIG_SUFFIX


def read_config_file(path: str | os.PathLike[str] | None) -> list[str] | None:
    """Return the commands in the file, skipping blank lines and ``#`` comments.

    Returns None when there is no path or the file cannot be opened.
    """
    if path is None:
        return None
    try:
        handle = open(path, "rb")
    except OSError:
        return None
    with handle:
        lines = [raw.decode("utf-8", "surrogateescape").removesuffix("\n") for raw in handle]
    return [line for line in lines if line and not line.startswith("#")]


def execute_config_commands(
    app_data: ApplicationData, commands: Iterable[str] | None
) -> bool:
    """Run each command in turn; False only when there are no commands to run."""
    if commands is None:
        return False
    for command in commands:
        app_data.command = command
        run(app_data)
    return True