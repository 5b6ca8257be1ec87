"""Pytest configuration and fixtures for dcr tests."""

import pytest

from dcr import compose_runner
from dcr.session import Session

COMPOSE_YAML = """\
services:
  api:
    image: example/api
  worker:
    image: example/worker
  db:
    image: postgres:16
"""

GROUPS_YAML = """\
groups:
  backend:
    - api
    - worker
  data:
    - db
"""


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Isolated config directory for project marker files."""
    path = tmp_path / "config"
    path.mkdir()
    monkeypatch.setenv("DCR_HOME", str(path))
    return path


@pytest.fixture
def project_dir(tmp_path):
    """Project directory with a compose file and a group file."""
    path = tmp_path / "shop"
    path.mkdir()
    (path / "docker-compose.yml").write_text(COMPOSE_YAML, encoding="utf-8")
    (path / ".dcrgroups").write_text(GROUPS_YAML, encoding="utf-8")
    return path


@pytest.fixture
def plain_project_dir(tmp_path):
    """Project directory with a compose file only."""
    path = tmp_path / "plain"
    path.mkdir()
    (path / "compose.yaml").write_text(COMPOSE_YAML, encoding="utf-8")
    return path


@pytest.fixture
def session(project_dir, config_dir):
    """Session with group support."""
    return Session.open(
        "shop",
        config_dir,
        project_dir / "docker-compose.yml",
        project_dir / ".dcrgroups",
    )


@pytest.fixture
def plain_session(plain_project_dir, config_dir):
    """Session without group support."""
    return Session.open("plain", config_dir, plain_project_dir / "compose.yaml")


@pytest.fixture
def compose_calls(monkeypatch):
    """Record compose invocations instead of spawning processes.

    Set ``returncode`` on the returned object to simulate failures.
    """

    class Recorder:
        def __init__(self) -> None:
            self.argvs: list[list[str]] = []
            self.returncode = 0

        def run(self, argv) -> int:
            self.argvs.append(list(argv))
            return self.returncode

    recorder = Recorder()
    monkeypatch.setattr(compose_runner, "resolve_compose_command", lambda: ["docker", "compose"])
    monkeypatch.setattr(compose_runner, "run_compose", recorder.run)
    return recorder
