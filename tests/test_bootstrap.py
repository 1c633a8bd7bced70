"""
Tests for the bootstrap use case — preconditions and the handoff plan.
"""

import os
from pathlib import Path

import pytest

from coffeebrew.core.use_cases.bootstrap import (
    CORE_MODULE,
    BootstrapError,
    check_preconditions,
    prepare_handoff,
)


@pytest.fixture
def install(tmp_path: Path) -> dict[str, Path]:
    """A prefix with bin/brew, a HOME, and an (empty) system config dir."""
    root = tmp_path.resolve()
    brew = root / "prefix" / "bin" / "brew"
    brew.parent.mkdir(parents=True)
    brew.write_text("#!/bin/sh\n")
    home = root / "home"
    home.mkdir()
    etc = root / "etc" / "homebrew"
    etc.mkdir(parents=True)
    return {
        "root": root,
        "brew": brew,
        "home": home,
        "etc": etc,
        "usr_local": root / "usr-local" / "bin" / "brew",
    }


def _prepare(install, env, args=("formulae",), **kwargs):
    return prepare_handoff(
        list(args),
        entrypoint=install["brew"],
        env=env,
        system_config_dir=install["etc"],
        usr_local_brew_file=install["usr_local"],
        getcwd=lambda: str(install["root"]),
        **kwargs,
    )


class TestPreconditions:
    def test_ok(self, tmp_path: Path):
        cwd = check_preconditions({"HOME": "/h"}, version_info=(3, 12, 0), getcwd=lambda: str(tmp_path))
        assert cwd == tmp_path

    def test_old_python(self):
        with pytest.raises(BootstrapError, match="Python 3.10 or newer"):
            check_preconditions({"HOME": "/h"}, version_info=(3, 8, 10))

    def test_missing_cwd(self):
        def gone() -> str:
            raise FileNotFoundError("cwd removed")

        with pytest.raises(BootstrapError, match="working directory doesn't exist"):
            check_preconditions({"HOME": "/h"}, getcwd=gone)

    def test_cwd_not_a_directory(self, tmp_path: Path):
        gone = tmp_path / "removed"
        with pytest.raises(BootstrapError, match=r"removed doesn't exist"):
            check_preconditions({"HOME": "/h"}, getcwd=lambda: str(gone))

    def test_unreadable_cwd(self, tmp_path: Path):
        with pytest.raises(BootstrapError, match="must be readable"):
            check_preconditions({"HOME": "/h"}, getcwd=lambda: str(tmp_path), readable=lambda p: False)

    def test_readable_checked_on_cwd(self, tmp_path: Path):
        seen = []
        check_preconditions(
            {"HOME": "/h"}, getcwd=lambda: str(tmp_path), readable=lambda p: seen.append(p) or True,
        )
        assert seen == [tmp_path]

    def test_missing_home(self):
        with pytest.raises(BootstrapError, match=r"\$HOME must be set"):
            check_preconditions({}, getcwd=lambda: "/")

    def test_first_failure_wins(self):
        with pytest.raises(BootstrapError, match="Python"):
            check_preconditions({}, version_info=(2, 7))


class TestPrepareHandoff:
    def test_arguments_passed_unchanged(self, install):
        args = ("formulae", "--json", "--help", "x y")
        result = _prepare(install, {"HOME": str(install["home"])}, args=args)
        assert result.plan is not None
        assert result.plan.argv == ("-m", CORE_MODULE, *args)

    def test_layout_exported(self, install):
        result = _prepare(install, {"HOME": str(install["home"])})
        env = result.plan.env
        prefix = install["root"] / "prefix"
        assert env["HOMEBREW_PREFIX"] == str(prefix)
        assert env["HOMEBREW_REPOSITORY"] == str(prefix)
        assert env["HOMEBREW_LIBRARY"] == str(prefix / "Library")
        assert env["HOMEBREW_BREW_FILE"] == str(install["brew"])

    def test_layout_not_overridable_by_config(self, install):
        (install["etc"] / "brew.env").write_text("HOMEBREW_LIBRARY=/elsewhere\n")
        result = _prepare(install, {"HOME": str(install["home"])})
        assert result.plan.env["HOMEBREW_LIBRARY"] != "/elsewhere"

    def test_cache_defaulted(self, install):
        env = {"HOME": str(install["home"]), "XDG_CACHE_HOME": str(install["root"] / "xdg")}
        result = _prepare(install, env)
        assert result.plan.env["HOMEBREW_CACHE"]

    def test_cache_from_config(self, install):
        (install["etc"] / "brew.env").write_text("HOMEBREW_CACHE=/var/cache/brew\n")
        result = _prepare(install, {"HOME": str(install["home"])})
        assert result.plan.env["HOMEBREW_CACHE"] == "/var/cache/brew"

    def test_environment_sanitized(self, install):
        env = {
            "HOME": str(install["home"]),
            "PATH": "/home/u/bin:/usr/bin",
            "EDITOR": "vim",
            "HOMEBREW_TMUX": "spoofed",
            "PYTHONPATH": "/evil",
            "AWS_SECRET_ACCESS_KEY": "x",
        }
        result = _prepare(install, env)
        out = result.plan.env
        assert out["PATH"] == "/usr/bin:/bin:/usr/sbin:/sbin"
        assert out["HOMEBREW_PATH"] == "/home/u/bin:/usr/bin"
        assert out["HOMEBREW_EDITOR"] == "vim"
        assert "HOMEBREW_TMUX" not in out
        assert "PYTHONPATH" not in out
        assert "AWS_SECRET_ACCESS_KEY" not in out
        assert "EDITOR" not in out

    def test_user_config_applied(self, install):
        user_env = install["home"] / ".homebrew" / "brew.env"
        user_env.parent.mkdir()
        user_env.write_text("HOMEBREW_NO_INSTALL_FROM_API=1\nNOT_OURS=1\n")
        result = _prepare(install, {"HOME": str(install["home"])})
        assert result.plan.env["HOMEBREW_NO_INSTALL_FROM_API"] == "1"
        assert "NOT_OURS" not in result.plan.env

    def test_config_errors_collected(self, install):
        (install["etc"] / "brew.env").write_text("HOMEBREW_BROKEN\nHOMEBREW_OK=1\n")
        result = _prepare(install, {"HOME": str(install["home"])})
        assert result.error is None
        assert len(result.config_errors) == 1
        assert result.plan.env["HOMEBREW_OK"] == "1"

    def test_interpreter_override(self, install):
        env = {"HOME": str(install["home"]), "HOMEBREW_PYTHON_PATH": "/opt/python/bin/python3"}
        result = _prepare(install, env)
        assert result.plan.interpreter == "/opt/python/bin/python3"

    def test_precondition_failure_stops_early(self, install):
        result = _prepare(install, {})
        assert result.plan is None
        assert result.layout is None
        assert result.to_dict() == {"error": "$HOME must be set to run brew."}

    def test_unreadable_cwd_stops_early(self, install):
        result = _prepare(install, {"HOME": str(install["home"])}, readable=lambda p: False)
        assert result.plan is None
        assert "must be readable" in result.error

    def test_inherited_env_untouched(self, install):
        env = {"HOME": str(install["home"]), "EDITOR": "vim"}
        snapshot = dict(env)
        _prepare(install, env)
        assert env == snapshot

    def test_to_dict(self, install):
        result = _prepare(install, {"HOME": str(install["home"])})
        data = result.to_dict()
        assert data["argv"][:2] == ["-m", CORE_MODULE]
        assert data["layout"]["homebrew_prefix"] == str(install["root"] / "prefix")
        assert data["env"]["HOME"] == str(install["home"])


def test_live_process_env_not_read(install, monkeypatch):
    monkeypatch.setenv("HOMEBREW_LEAKED_FROM_PROCESS", "1")
    result = _prepare(install, {"HOME": str(install["home"])})
    assert "HOMEBREW_LEAKED_FROM_PROCESS" not in result.plan.env
    assert os.environ["HOMEBREW_LEAKED_FROM_PROCESS"] == "1"
