"""Tests for compose tool invocation."""

import signal
import subprocess

import pytest

from dcr import compose_runner
from dcr.errors import ComposeToolNotFoundError


class TestResolveComposeCommand:
    """Test compose executable selection."""

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("DCR_COMPOSE_COMMAND", "podman compose")

        assert compose_runner.resolve_compose_command() == ["podman", "compose"]

    def test_docker_plugin_preferred(self, monkeypatch):
        monkeypatch.delenv("DCR_COMPOSE_COMMAND", raising=False)
        monkeypatch.setattr(compose_runner.shutil, "which", lambda name: f"/usr/bin/{name}")

        assert compose_runner.resolve_compose_command() == ["docker", "compose"]

    def test_standalone_fallback(self, monkeypatch):
        monkeypatch.delenv("DCR_COMPOSE_COMMAND", raising=False)
        monkeypatch.setattr(
            compose_runner.shutil,
            "which",
            lambda name: "/usr/bin/docker-compose" if name == "docker-compose" else None,
        )

        assert compose_runner.resolve_compose_command() == ["docker-compose"]

    def test_nothing_installed(self, monkeypatch):
        monkeypatch.delenv("DCR_COMPOSE_COMMAND", raising=False)
        monkeypatch.setattr(compose_runner.shutil, "which", lambda name: None)

        with pytest.raises(ComposeToolNotFoundError):
            compose_runner.resolve_compose_command()


class TestBuildArgv:
    """Test argv assembly."""

    def test_minimal(self, tmp_path):
        compose_file = tmp_path / "compose.yaml"

        argv = compose_runner.build_argv(["docker", "compose"], compose_file, ["ps"])

        assert argv == ["docker", "compose", "-f", str(compose_file), "ps"]

    def test_override_and_env_file(self, tmp_path):
        compose_file = tmp_path / "compose.yaml"
        override = tmp_path / "compose.override.yaml"
        override.write_text("services: {}\n", encoding="utf-8")
        env_file = tmp_path / ".env.prod"

        argv = compose_runner.build_argv(
            ["docker-compose"], compose_file, ["up", "-d"], env_file=env_file
        )

        assert argv == [
            "docker-compose",
            "-f",
            str(compose_file),
            "-f",
            str(override),
            "--env-file",
            str(env_file),
            "up",
            "-d",
        ]


class TestRunCompose:
    """Test subprocess execution."""

    def test_returns_exit_status_with_signals_absorbed(self, monkeypatch):
        seen = {}

        def fake_run(argv, check):
            seen["argv"] = argv
            seen["check"] = check
            seen["sigint"] = signal.getsignal(signal.SIGINT)
            return subprocess.CompletedProcess(argv, 2)

        monkeypatch.setattr(compose_runner.subprocess, "run", fake_run)
        before = signal.getsignal(signal.SIGINT)

        assert compose_runner.run_compose(["docker", "compose", "ps"]) == 2
        assert seen["argv"] == ["docker", "compose", "ps"]
        assert seen["check"] is False
        assert seen["sigint"] is not before
        assert signal.getsignal(signal.SIGINT) is before

    def test_missing_executable(self, monkeypatch):
        def fake_run(argv, check):
            raise FileNotFoundError(argv[0])

        monkeypatch.setattr(compose_runner.subprocess, "run", fake_run)

        with pytest.raises(ComposeToolNotFoundError):
            compose_runner.run_compose(["nope", "compose"])
