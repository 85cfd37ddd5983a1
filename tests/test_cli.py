"""Tests for the logstage command and its configuration loading."""

import gzip
import json
import logging
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from logstage.cli import (
    EXIT_FAILED,
    EXIT_LOCAL_MISSING,
    EXIT_REMOTE_MISSING,
    ConfigError,
    build_config,
    cli,
    load_config,
    setup_logging,
)


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


class TestArguments:
    """Tests for positional argument handling."""

    def test_missing_local(self, runner: CliRunner) -> None:
        """Should exit with 1 when no path is given."""
        result = runner.invoke(cli, [])
        assert result.exit_code == EXIT_LOCAL_MISSING == 1
        assert "local" in result.output.lower()

    def test_missing_remote(self, runner: CliRunner, local_dir: Path) -> None:
        """Should exit with 2 when only the local path is given."""
        result = runner.invoke(cli, [str(local_dir)])
        assert result.exit_code == EXIT_REMOTE_MISSING == 2
        assert "remote" in result.output.lower()


class TestTransferCommand:
    """Tests for complete runs through the CLI."""

    def test_transfer_success(
        self,
        runner: CliRunner,
        local_dir: Path,
        remote_dir: Path,
        temp_root: Path,
        make_file: Callable[..., Path],
    ) -> None:
        """Should deliver compressed logs and print the staging listing."""
        make_file(local_dir / "app.log", "hello\n")

        result = runner.invoke(
            cli, [str(local_dir), str(remote_dir), "--temp-dir", str(temp_root)]
        )

        assert result.exit_code == 0, result.output
        assert "app.log.gz" in result.output
        assert "0 directories, 1 files" in result.output
        with gzip.open(remote_dir / "app.log.gz", "rt") as f:
            assert f.read() == "hello\n"
        assert list(temp_root.iterdir()) == []

    def test_missing_local_directory(
        self, runner: CliRunner, tmp_path: Path, remote_dir: Path, temp_root: Path
    ) -> None:
        """Should exit with 3 and report the missing directory."""
        result = runner.invoke(
            cli, [str(tmp_path / "missing"), str(remote_dir), "--temp-dir", str(temp_root)]
        )

        assert result.exit_code == EXIT_FAILED
        assert "not found" in result.output.lower()
        assert list(temp_root.iterdir()) == []

    def test_config_file(
        self,
        runner: CliRunner,
        tmp_path: Path,
        local_dir: Path,
        remote_dir: Path,
        temp_root: Path,
        make_file: Callable[..., Path],
    ) -> None:
        """Should read settings from a JSON config file."""
        make_file(local_dir / "app.out", "out\n")
        make_file(local_dir / "app.log", "log\n")
        config_file = tmp_path / "logstage.json"
        config_file.write_text(json.dumps({"patterns": ["*.out"], "temp_dir": str(temp_root)}))

        result = runner.invoke(
            cli, [str(local_dir), str(remote_dir), "--config", str(config_file)]
        )

        assert result.exit_code == 0, result.output
        assert (remote_dir / "app.out.gz").exists()
        assert not (remote_dir / "app.log.gz").exists()

    def test_invalid_config_file(
        self, runner: CliRunner, tmp_path: Path, local_dir: Path, remote_dir: Path
    ) -> None:
        """Should exit with 3 on unknown config keys."""
        config_file = tmp_path / "logstage.json"
        config_file.write_text(json.dumps({"retention_days": 7}))

        result = runner.invoke(
            cli, [str(local_dir), str(remote_dir), "--config", str(config_file)]
        )

        assert result.exit_code == EXIT_FAILED
        assert "retention_days" in result.output

    def test_follow_link_chains_flag(
        self,
        runner: CliRunner,
        tmp_path: Path,
        local_dir: Path,
        remote_dir: Path,
        temp_root: Path,
        make_file: Callable[..., Path],
    ) -> None:
        """Should exclude chained targets only when asked to."""
        make_file(local_dir / "app-1.log")
        hops = tmp_path / "hops"
        hops.mkdir()
        (hops / "hop.log").symlink_to(local_dir / "app-1.log")
        (local_dir / "current.log").symlink_to(hops / "hop.log")
        args = [str(local_dir), str(remote_dir), "--temp-dir", str(temp_root)]

        result = runner.invoke(cli, [*args, "--follow-link-chains"])
        assert result.exit_code == 0, result.output
        assert not (remote_dir / "app-1.log.gz").exists()

        result = runner.invoke(cli, args)
        assert result.exit_code == 0, result.output
        assert (remote_dir / "app-1.log.gz").exists()


class TestConfigLoading:
    """Tests for load_config and build_config."""

    def test_load_config(self, tmp_path: Path) -> None:
        """Should return the JSON object."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"compress_level": 6}))
        assert load_config(path) == {"compress_level": 6}

    def test_load_config_not_object(self, tmp_path: Path) -> None:
        """Should reject non-object JSON."""
        path = tmp_path / "config.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_load_config_invalid_json(self, tmp_path: Path) -> None:
        """Should reject malformed JSON."""
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_build_config_overrides(self, tmp_path: Path) -> None:
        """Should let CLI overrides win and ignore unset ones."""
        config = build_config(
            {"compress_level": 6, "temp_dir": str(tmp_path)},
            compress_level=2,
            follow_link_chains=None,
        )
        assert config.compress_level == 2
        assert config.temp_dir == tmp_path
        assert config.follow_link_chains is False

    def test_build_config_invalid_value(self) -> None:
        """Should wrap validation errors."""
        with pytest.raises(ConfigError):
            build_config({"compress_level": 42})


class TestSetupLogging:
    """Tests for CLI logging setup."""

    @pytest.mark.parametrize(
        ("verbosity", "level"),
        [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (3, logging.DEBUG)],
    )
    def test_levels(self, verbosity: int, level: int) -> None:
        """Should map -v counts to log levels."""
        setup_logging(verbosity)
        logger = logging.getLogger("logstage")
        assert logger.level == level
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_replaces_handlers(self) -> None:
        """Should not stack handlers across calls."""
        setup_logging(0)
        setup_logging(1)
        assert len(logging.getLogger("logstage").handlers) == 1
