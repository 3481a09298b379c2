"""ProcessRunner and PackageInstaller."""

import sys

import pytest

from autopublish.errors import ProcessError
from autopublish.services.installer import PackageInstaller
from autopublish.services.process import ProcessRunner
from tests.conftest import RecordingRunner


def test_zero_exit_succeeds(capsys):
    runner = ProcessRunner()

    outcome = runner.run(sys.executable, ["-c", "pass"])

    assert outcome.exit_code == 0
    assert outcome.succeeded
    assert capsys.readouterr().out.startswith(f"💲 {sys.executable} -c pass")


@pytest.mark.parametrize("code", [1, 2, 127])
def test_non_zero_exit_raises_with_code(code):
    runner = ProcessRunner()

    with pytest.raises(ProcessError) as exc_info:
        runner.run(sys.executable, ["-c", f"import sys; sys.exit({code})"])

    assert exc_info.value.exit_code == code
    assert exc_info.value.spawn_error is None
    assert str(exc_info.value) == f"❌ The process exited with status code: {code}"


def test_missing_binary_raises_spawn_error(tmp_path):
    runner = ProcessRunner()
    missing = str(tmp_path / "no-such-validator")

    with pytest.raises(ProcessError) as exc_info:
        runner.run(missing, ["spec.html"])

    assert exc_info.value.exit_code is None
    assert isinstance(exc_info.value.spawn_error, FileNotFoundError)


def test_output_is_streamed_not_captured(capfd):
    runner = ProcessRunner()

    runner.run(sys.executable, ["-c", "print('hello from child')"])

    assert "hello from child" in capfd.readouterr().out


def test_cwd_and_env_overrides(tmp_path):
    runner = ProcessRunner(cwd=tmp_path)
    script = (
        "import os, sys; "
        "ok = os.getcwd() == sys.argv[1] and os.environ['AUTOPUBLISH_TEST'] == 'yes' "
        "and 'PATH' in os.environ; "
        "sys.exit(0 if ok else 3)"
    )

    outcome = runner.run(
        sys.executable,
        ["-c", script, str(tmp_path.resolve())],
        env={"AUTOPUBLISH_TEST": "yes"},
    )

    assert outcome.succeeded


def test_installer_passes_flags_and_packages():
    runner = RecordingRunner()
    installer = PackageInstaller(runner=runner)

    installer.install(["respec", "respec-validator"])

    assert runner.calls == [["npm", "install", "--silent", "respec", "respec-validator"]]


def test_installer_propagates_failure():
    installer = PackageInstaller(runner=RecordingRunner(exit_code=1), package_manager="yarn", install_args=["add"])

    with pytest.raises(ProcessError) as exc_info:
        installer.install(["respec"])

    assert exc_info.value.command == "yarn"
    assert exc_info.value.exit_code == 1


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_non_executable_file_raises_permission_error(tmp_path):
    script = tmp_path / "respec-validator"
    script.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    script.chmod(0o644)

    with pytest.raises(ProcessError) as exc_info:
        ProcessRunner().run(str(script), ["spec.html"])

    assert exc_info.value.exit_code is None
    assert isinstance(exc_info.value.spawn_error, PermissionError)
