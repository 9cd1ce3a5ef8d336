"""Unit tests for build option validation."""

from argparse import Namespace

import pytest

from buildstep.commands.build.options import parse_options
from buildstep.exceptions import ValidationError


def make_args(**kwargs):
    defaults = {"tag": None, "dockerfile": None, "squash": False, "cache": False, "quiet": False}
    defaults.update(kwargs)
    return Namespace(**defaults)


@pytest.mark.unit
class TestParseOptions:
    """Tests for parse_options()."""

    def test_valid_options(self, dockerfile):
        options = parse_options(make_args(tag="app:1", dockerfile=str(dockerfile), squash=True, quiet=True))

        assert options.tag == "app:1"
        assert options.dockerfile == dockerfile.resolve()
        assert options.context == dockerfile.parent.resolve()
        assert options.squash is True
        assert options.cache is False
        assert options.quiet is True

    def test_relative_dockerfile_resolved(self, dockerfile):
        options = parse_options(make_args(tag="app", dockerfile="app/Dockerfile"))
        assert options.dockerfile == dockerfile.resolve()

    def test_missing_tag(self, dockerfile):
        with pytest.raises(ValidationError, match=r"Image tag \(-t\) is required"):
            parse_options(make_args(dockerfile=str(dockerfile)))

    def test_missing_dockerfile(self):
        with pytest.raises(ValidationError, match=r"Dockerfile \(-f\) is required"):
            parse_options(make_args(tag="app"))

    def test_missing_both_reports_both(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_options(make_args())

        message = str(exc_info.value)
        assert "Image tag (-t) is required" in message
        assert "Dockerfile (-f) is required" in message

    @pytest.mark.parametrize("tag", ["App:1", "app:!", "app name"])
    def test_invalid_tag(self, dockerfile, tag):
        with pytest.raises(ValidationError, match="Invalid image tag format"):
            parse_options(make_args(tag=tag, dockerfile=str(dockerfile)))

    def test_dockerfile_not_found(self, tmp_path):
        with pytest.raises(ValidationError, match="Dockerfile not found"):
            parse_options(make_args(tag="app", dockerfile=str(tmp_path / "missing" / "Dockerfile")))
