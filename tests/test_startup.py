import pytest
from fastapi.testclient import TestClient

import tagger.main
import tagger_config
from tagger import __main__ as cli
from tagger.main import app
from tagger_config import ConfigError, get_source_dir


class FakeGateway:
    instances = []

    def __init__(self, executable=None):
        self.executable = executable
        self.opened = False
        self.closed = False
        self.keywords = {}
        FakeGateway.instances.append(self)

    def open(self):
        self.opened = True
        return self

    def close(self):
        self.closed = True

    def is_ready(self):
        return self.opened and not self.closed

    def read_keywords(self, path):
        from exif_helper import KeywordNotFoundError

        if path not in self.keywords:
            raise KeywordNotFoundError(path)
        return self.keywords[path]

    def write_keywords(self, path, raw):
        self.keywords[path] = raw


@pytest.fixture
def source_dir(monkeypatch, image_dir):
    monkeypatch.setitem(tagger_config.TAGGER_CONFIG, "source_dir", str(image_dir))
    return image_dir


@pytest.fixture
def fake_gateway(monkeypatch):
    FakeGateway.instances = []
    monkeypatch.setattr(tagger.main, "ExifToolGateway", FakeGateway)
    return FakeGateway


def test_get_source_dir_requires_value(monkeypatch):
    monkeypatch.setitem(tagger_config.TAGGER_CONFIG, "source_dir", "")
    with pytest.raises(ConfigError):
        get_source_dir()


def test_lifespan_opens_and_closes_gateway(source_dir, fake_gateway):
    with TestClient(app) as client:
        gateway = fake_gateway.instances[0]
        assert gateway.opened
        assert client.get("/index").status_code == 200
        assert client.get("/api/health").json() == {
            "status": "healthy",
            "exiftool_running": True,
            "files": 2,
        }
    assert gateway.closed
    assert tagger.main.session_controller is None


def test_lifespan_closes_gateway_when_app_errors(source_dir, fake_gateway):
    with pytest.raises(RuntimeError):
        with TestClient(app):
            raise RuntimeError("boom")
    assert fake_gateway.instances[0].closed


def test_lifespan_fails_without_files(monkeypatch, tmp_path, fake_gateway):
    monkeypatch.setitem(tagger_config.TAGGER_CONFIG, "source_dir", str(tmp_path))
    with pytest.raises(OSError):
        with TestClient(app):
            pass
    assert fake_gateway.instances == []


def test_cli_requires_source_directory(monkeypatch):
    monkeypatch.setitem(tagger_config.TAGGER_CONFIG, "source_dir", "")
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(cli.uvicorn, "run", lambda *args, **kwargs: pytest.fail("server started"))
    assert cli.main(["--src", ""]) == 1


def test_cli_rejects_missing_directory(monkeypatch, tmp_path):
    monkeypatch.setitem(tagger_config.TAGGER_CONFIG, "source_dir", "")
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(cli.uvicorn, "run", lambda *args, **kwargs: pytest.fail("server started"))
    assert cli.main(["--src", str(tmp_path / "missing")]) == 1


def test_cli_starts_server(monkeypatch, image_dir):
    calls = []
    monkeypatch.setitem(tagger_config.TAGGER_CONFIG, "source_dir", "")
    monkeypatch.setitem(tagger_config.TAGGER_CONFIG, "exiftool_path", None)
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(cli.uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))

    assert cli.main(["--src", str(image_dir), "--port", "9001", "--exiftool", "/opt/exiftool"]) == 0
    assert tagger_config.TAGGER_CONFIG["source_dir"] == str(image_dir)
    assert tagger_config.TAGGER_CONFIG["exiftool_path"] == "/opt/exiftool"
    assert calls[0][0] == ("tagger.main:app",)
    assert calls[0][1]["port"] == 9001


@pytest.mark.parametrize("given, expected", [("WARN", "warning"), ("info", "info"), ("FATAL", "critical")])
def test_log_level_names_are_normalised(given, expected):
    assert cli.log_level_name(given) == expected


def test_cli_passes_uvicorn_level_name(monkeypatch, image_dir):
    calls = []
    monkeypatch.setitem(tagger_config.TAGGER_CONFIG, "source_dir", "")
    monkeypatch.setitem(tagger_config.TAGGER_CONFIG, "exiftool_path", None)
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(cli.uvicorn, "run", lambda *args, **kwargs: calls.append(kwargs))

    assert cli.main(["--src", str(image_dir), "--log-level", "WARN"]) == 0
    assert calls[0]["log_level"] == "warning"


def test_cli_rejects_unknown_log_level(monkeypatch, image_dir):
    monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(cli.uvicorn, "run", lambda *args, **kwargs: pytest.fail("server started"))
    with pytest.raises(SystemExit):
        cli.main(["--src", str(image_dir), "--log-level", "LOUD"])
