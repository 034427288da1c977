import sys

import pytest
from typer.testing import CliRunner

from hls_mirror import __version__
from hls_mirror.__main__ import main
from hls_mirror.cli import app as cli_app
from hls_mirror.exceptions import FetchError
from hls_mirror.models.stats import MirrorResult, MirrorStats

runner = CliRunner()
URL = "https://example.com/live/index.m3u8"


class FakeSession:
    """Stands in for MirrorSession so the CLI can be driven without a network."""

    error: Exception | None = None
    configs: list = []

    def __init__(self, config):
        self.config = config
        FakeSession.configs.append(config)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None

    async def run(self):
        if FakeSession.error:
            raise FakeSession.error
        return MirrorResult(
            playlist_url=self.config.input_url,
            manifest="#EXTM3U\n10001.ts\n",
            links=[],
            stats=MirrorStats(links_total=1, links_downloaded=1, bytes_downloaded=4),
            duration=0.5,
        )


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    monkeypatch.setattr(cli_app, "CONFIG_FILE", tmp_path / "config" / "config.ini")
    monkeypatch.setattr(cli_app, "MirrorSession", FakeSession)
    FakeSession.error = None
    FakeSession.configs = []


def test_version():
    result = runner.invoke(cli_app.app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_mirror_writes_index(tmp_path):
    out = tmp_path / "out"
    result = runner.invoke(
        cli_app.app,
        ["mirror", "-i", URL, "-o", str(out), "-t", "4", "-s", "250ms", "-p", "seg_"],
    )

    assert result.exit_code == 0, result.output
    assert (out / "index.m3u8").read_text(encoding="utf-8") == "#EXTM3U\n10001.ts\n"
    config = FakeSession.configs[0]
    assert config.workers == 4
    assert config.request_delay == pytest.approx(0.25)
    assert config.name_prefix == "seg_"


def test_mirror_uses_stored_defaults(tmp_path):
    cli_app.ConfigManager(cli_app.CONFIG_FILE).save_new_config({"workers": 6})

    result = runner.invoke(cli_app.app, ["mirror", "-i", URL, "-o", str(tmp_path)])

    assert result.exit_code == 0, result.output
    assert FakeSession.configs[0].workers == 6


@pytest.mark.parametrize(
    "args",
    [
        ["-i", "not-a-url"],
        ["-i", URL, "-t", "0"],
        ["-i", URL, "-t", "10001"],
        ["-i", URL, "-s", "soon"],
    ],
)
def test_invalid_options_exit_with_error(tmp_path, args):
    result = runner.invoke(cli_app.app, ["mirror", "-o", str(tmp_path), *args])

    assert result.exit_code == 1
    assert FakeSession.configs == []


def test_fatal_session_error_exits_with_error(tmp_path):
    FakeSession.error = FetchError(URL, "HTTP 404 Not Found")

    result = runner.invoke(cli_app.app, ["mirror", "-i", URL, "-o", str(tmp_path)])

    assert result.exit_code == 1
    assert not (tmp_path / "index.m3u8").exists()


def test_session_error_is_shown_with_suggestions(monkeypatch, tmp_path, capsys):
    FakeSession.error = FetchError(URL, "HTTP 404 Not Found")
    monkeypatch.setattr(
        sys, "argv", ["hls-mirror", "mirror", "-i", URL, "-o", str(tmp_path)]
    )

    with pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == 1
    output = capsys.readouterr().out
    assert "FetchError" in output
    assert "Check your internet connection" in output


def test_invalid_config_is_shown_with_suggestions(monkeypatch, tmp_path, capsys):
    argv = ["hls-mirror", "mirror", "-i", URL, "-o", str(tmp_path), "-t", "0"]
    monkeypatch.setattr(sys, "argv", argv)

    with pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == 1
    output = capsys.readouterr().out
    assert "ConfigurationError" in output
    assert "Review the options passed" in output
    assert FakeSession.configs == []


def test_init_writes_config_file():
    result = runner.invoke(cli_app.app, ["init"])

    assert result.exit_code == 0, result.output
    content = cli_app.CONFIG_FILE.read_text(encoding="utf-8")
    assert "workers = 1" in content


def test_init_asks_before_overwriting():
    cli_app.ConfigManager(cli_app.CONFIG_FILE).save_new_config({"workers": 3})

    result = runner.invoke(cli_app.app, ["init"], input="n\n")

    assert result.exit_code == 1
    assert "workers = 3" in cli_app.CONFIG_FILE.read_text(encoding="utf-8")


def test_show_config():
    result = runner.invoke(cli_app.app, ["--show-config"])
    assert result.exit_code == 0
    assert "request_timeout" in result.output
