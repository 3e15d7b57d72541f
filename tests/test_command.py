import os
import sys
from unittest import mock

import pytest

from chainkeeper.command import Command, run_command_for_dir
from chainkeeper.errors import RunningCommandError


class _Replaced(Exception):
    pass


def test_missing_program_raises_running_command_error(tmp_path):
    cmd = Command(tmp_path / "no-such-program")
    with pytest.raises(RunningCommandError) as info:
        run_command_for_dir(cmd, "no-such-program", ["--version"])
    assert str(info.value) == "command failed: 'no-such-program'"
    assert isinstance(info.value.__cause__, OSError)


def test_arguments_are_appended_even_on_failure(tmp_path):
    cmd = Command(tmp_path / "absent", ["first"])
    with pytest.raises(RunningCommandError):
        run_command_for_dir(cmd, "absent", ["second", tmp_path / "third"])
    assert cmd.args == ["first", "second", os.fspath(tmp_path / "third")]


def test_exec_receives_argv_and_merged_environment():
    cmd = Command(sys.executable, env={"CK_TEST_VAR": "value"})
    with mock.patch("os.execvpe", side_effect=_Replaced) as execvpe:
        with pytest.raises(_Replaced):
            run_command_for_dir(cmd, "python", ["-c", "pass"])
    program, argv, env = execvpe.call_args.args
    assert program == sys.executable
    assert argv == [sys.executable, "-c", "pass"]
    assert env["CK_TEST_VAR"] == "value"
    assert set(os.environ) <= set(env)