"""Description and execution of an external command."""

from __future__ import annotations

import os
import subprocess
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from chainkeeper.errors import RunningCommandError


@dataclass
class Command:
    """A program to run, its arguments and environment overrides."""

    program: str | os.PathLike[str]
    args: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=dict)


def run_command_for_dir(cmd: Command, arg0: str, args: Iterable[Any]) -> int:
    """Run ``cmd`` with ``args`` appended.

    On POSIX the current process is replaced by the command; elsewhere the
    command is run to completion and its exit code returned. Failure to start
    the command raises :class:`RunningCommandError`.
    """
    cmd.args.extend(os.fspath(a) if isinstance(a, os.PathLike) else str(a) for a in args)
    argv = [os.fspath(cmd.program), *cmd.args]
    env = {**os.environ, **cmd.env}
    try:
        if os.name == "nt":
            return subprocess.run(argv, env=env, check=False).returncode
        os.execvpe(argv[0], argv, env)
    except OSError as exc:
        raise RunningCommandError(arg0) from exc
    raise RunningCommandError(arg0)