"""Unit tests for the docker process wrapper."""

from unittest.mock import Mock, patch

import pytest

from buildstep.exceptions import DaemonUnavailableError
from buildstep.lib.docker import CommandResult, DockerCLI, format_command


@pytest.mark.unit
class TestFormatCommand:
    """Tests for format_command()."""

    def test_masks_build_arg_values(self):
        cmd = ["docker", "build", "--build-arg", "TOKEN=s3cret", "--build-arg", "EMPTY=", "-t", "app", "."]
        assert format_command(cmd) == "docker build --build-arg TOKEN=*** --build-arg EMPTY=*** -t app ."

    def test_leaves_other_arguments(self):
        assert format_command(["docker", "pull", "app:latest"]) == "docker pull app:latest"


@pytest.mark.unit
class TestDockerCLI:
    """Tests for DockerCLI."""

    @patch("buildstep.lib.docker.subprocess.run")
    def test_run_captures_output(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout="ok\n", stderr="")

        result = DockerCLI().run(["info"])

        assert result == CommandResult(returncode=0, stdout="ok\n", stderr="")
        assert result.ok
        cmd = mock_run.call_args.args[0]
        assert cmd == ["docker", "info"]
        assert mock_run.call_args.kwargs["capture_output"] is True
        assert mock_run.call_args.kwargs["check"] is False

    @patch("buildstep.lib.docker.subprocess.run")
    def test_host_exported_as_docker_host(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout="", stderr="")

        DockerCLI(host="tcp://docker:2375").ping()

        assert mock_run.call_args.kwargs["env"]["DOCKER_HOST"] == "tcp://docker:2375"

    @patch("buildstep.lib.docker.subprocess.run")
    def test_build_streams_output(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout=None, stderr=None)

        result = DockerCLI(binary="/usr/bin/docker").build(["-t", "app", "."])

        assert mock_run.call_args.args[0] == ["/usr/bin/docker", "build", "-t", "app", "."]
        assert mock_run.call_args.kwargs["capture_output"] is False
        assert result.stdout == ""

    @patch("buildstep.lib.docker.subprocess.run", side_effect=FileNotFoundError)
    def test_missing_binary_is_daemon_unavailable(self, mock_run):
        with pytest.raises(DaemonUnavailableError, match="Docker CLI not found"):
            DockerCLI(binary="nodocker").ping()

    @patch("buildstep.lib.docker.subprocess.run")
    def test_verbose_echoes_masked_command(self, mock_run, capsys):
        mock_run.return_value = Mock(returncode=0, stdout=None, stderr=None)

        DockerCLI(verbose=True).build(["--build-arg", "PASSWORD=hunter2", "."])

        out = capsys.readouterr().out
        assert "Executing: docker build --build-arg PASSWORD=***" in out
        assert "hunter2" not in out

    @pytest.mark.parametrize(
        "stdout, expected",
        [("true\n", True), ("false\n", False), ("", False)],
    )
    @patch("buildstep.lib.docker.subprocess.run")
    def test_server_experimental(self, mock_run, stdout, expected):
        mock_run.return_value = Mock(returncode=0, stdout=stdout, stderr="")
        assert DockerCLI().server_experimental() is expected

    @patch("buildstep.lib.docker.subprocess.run")
    def test_build_supports_matches_option_names_only(self, mock_run):
        mock_run.return_value = Mock(
            returncode=0,
            stdout=(
                "  -q, --quiet     Suppress the build output\n"
                "      --pull      Always attempt to pull (see --squash)\n"
            ),
            stderr="",
        )
        docker = DockerCLI()

        assert docker.build_supports("--quiet")
        assert not docker.build_supports("--squash")
