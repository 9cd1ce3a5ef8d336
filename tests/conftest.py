"""Pytest configuration and shared fixtures."""

import os
from unittest.mock import Mock

import pytest

from buildstep.config.loader import DEFAULT_REGISTRY_VARIABLES
from buildstep.lib.output import set_color_enabled


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Isolate every test from the caller's docker and CI environment.

    Removes registry, build argument and config override variables, points
    XDG_CONFIG_HOME and DOCKER_CONFIG into tmp_path and runs from tmp_path so
    no user or project config file is picked up.
    """
    for name in list(os.environ):
        if (
            name.startswith("DOCKER_BUILD_ARG_")
            or name.startswith("BUILDSTEP_")
            or name in DEFAULT_REGISTRY_VARIABLES
            or name in ("DOCKER_AUTH_CONFIG", "DOCKER_HOST", "LOG_LEVEL", "LOG_FORMAT")
        ):
            monkeypatch.delenv(name, raising=False)

    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setenv("DOCKER_CONFIG", str(tmp_path / "docker-config"))
    monkeypatch.chdir(tmp_path)
    set_color_enabled(False)
    yield
    set_color_enabled(None)


@pytest.fixture
def dockerfile(tmp_path):
    """Create a Dockerfile inside a build context directory.

    Returns
    -------
    Path
        Path to the Dockerfile
    """
    context = tmp_path / "app"
    context.mkdir()
    path = context / "Dockerfile"
    path.write_text("FROM alpine:3.20\n")
    return path


@pytest.fixture
def mock_config():
    """Default configuration as produced by ConfigLoader.

    Returns
    -------
    dict
        Test configuration dictionary.
    """
    return {
        "docker": {"binary": "docker", "host": None},
        "cache": {"registry_variables": list(DEFAULT_REGISTRY_VARIABLES)},
    }


class FakeDocker:
    """Routes mocked ``subprocess.run`` calls by docker subcommand.

    Attributes
    ----------
    daemon_up : bool
        Result of ``docker info``
    experimental : bool
        Value printed by ``docker version --format``
    squash_option : bool
        Whether ``docker build --help`` lists --squash
    pullable : set[str]
        Images for which ``docker pull`` succeeds
    build_returncode : int
        Exit status of ``docker build``
    calls : list[list[str]]
        Every command that was run
    """

    def __init__(self):
        self.daemon_up = True
        self.experimental = False
        self.squash_option = True
        self.pullable = set()
        self.build_returncode = 0
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        sub = cmd[1:]

        if sub[0] == "info":
            if self.daemon_up:
                return Mock(returncode=0, stdout="Server Version: 27.0.3\n", stderr="")
            return Mock(
                returncode=1,
                stdout="",
                stderr="Cannot connect to the Docker daemon at tcp://localhost:2375\n",
            )
        if sub[0] == "version":
            return Mock(returncode=0, stdout=f"{str(self.experimental).lower()}\n", stderr="")
        if sub[:2] == ["build", "--help"]:
            lines = ["Usage:  docker build [OPTIONS] PATH | URL | -", "Options:"]
            lines.append("      --pull                    Always attempt to pull a newer version")
            if self.squash_option:
                lines.append("      --squash                  Squash newly built layers")
            lines.append("  -t, --tag list                Name and optionally a tag")
            return Mock(returncode=0, stdout="\n".join(lines) + "\n", stderr="")
        if sub[0] == "pull":
            if sub[1] in self.pullable:
                return Mock(returncode=0, stdout="", stderr="")
            return Mock(returncode=1, stdout="", stderr=f"Error response from daemon: manifest for {sub[1]} not found\n")
        if sub[0] == "build":
            return Mock(returncode=self.build_returncode, stdout=None, stderr=None)

        raise AssertionError(f"Unexpected docker command: {cmd}")

    def commands(self, subcommand):
        return [call for call in self.calls if call[1] == subcommand]

    @property
    def build_call(self):
        builds = [call for call in self.commands("build") if call[2:3] != ["--help"]]
        assert len(builds) == 1, builds
        return builds[0]


@pytest.fixture
def fake_docker(monkeypatch):
    """Mock docker subprocess calls.

    Returns
    -------
    FakeDocker
        Configurable fake installed as subprocess.run in the docker wrapper.
    """
    fake = FakeDocker()
    monkeypatch.setattr("buildstep.lib.docker.subprocess.run", fake)
    return fake
