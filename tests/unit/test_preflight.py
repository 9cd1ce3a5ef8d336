"""Unit tests for daemon precondition checks."""

import pytest

from buildstep.commands.build.preflight import ensure_daemon, resolve_squash
from buildstep.exceptions import EXIT_DAEMON_UNAVAILABLE, DaemonUnavailableError
from buildstep.lib.docker import DockerCLI


@pytest.mark.unit
class TestEnsureDaemon:
    """Tests for ensure_daemon()."""

    def test_reachable_daemon(self, fake_docker):
        ensure_daemon(DockerCLI())
        assert fake_docker.calls == [["docker", "info"]]

    def test_unreachable_daemon_raises(self, fake_docker):
        fake_docker.daemon_up = False

        with pytest.raises(DaemonUnavailableError) as exc_info:
            ensure_daemon(DockerCLI(host="tcp://localhost:2375"))

        assert exc_info.value.exit_code == EXIT_DAEMON_UNAVAILABLE
        assert exc_info.value.details["docker_host"] == "tcp://localhost:2375"
        assert "Cannot connect" in exc_info.value.details["reason"]


@pytest.mark.unit
class TestResolveSquash:
    """Tests for resolve_squash()."""

    def test_not_requested_skips_docker(self, fake_docker):
        assert resolve_squash(DockerCLI(), requested=False) is False
        assert fake_docker.calls == []

    def test_experimental_daemon_with_squash_option(self, fake_docker):
        fake_docker.experimental = True
        assert resolve_squash(DockerCLI(), requested=True) is True

    def test_non_experimental_daemon_disables_squash(self, fake_docker, capsys):
        fake_docker.experimental = False

        assert resolve_squash(DockerCLI(), requested=True) is False
        assert "not running in experimental mode" in capsys.readouterr().out
        assert fake_docker.commands("build") == []

    def test_missing_squash_option_disables_squash(self, fake_docker, capsys):
        fake_docker.experimental = True
        fake_docker.squash_option = False

        assert resolve_squash(DockerCLI(), requested=True) is False
        assert "does not support --squash" in capsys.readouterr().out
