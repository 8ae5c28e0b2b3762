"""
Shared test fixtures and configuration for recordstore tests.
"""
import contextlib
import json
from pathlib import Path

import pytest
from click.testing import CliRunner
from flask import Flask
from flask.testing import FlaskClient

from recordstore import create_app
from recordstore.cli.dictionary_cli import DictionaryCLI
from recordstore.config import Config
from recordstore.storage.collection import DictionaryCollection
from recordstore.storage.dictionary import Dictionary
from recordstore.utils.error_monitor import ErrorMonitor


@pytest.fixture
def temp_data_dir(tmp_path: Path) -> Path:
    """Create a temporary data directory for store tests."""
    data_dir = tmp_path / "stores"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def app(temp_data_dir: Path, tmp_path: Path) -> Flask:
    """Create a test Flask application over the temporary data directory."""
    app = create_app(
        Config,
        TESTING=True,
        DATA_DIR=temp_data_dir,
        ERROR_DUMP_DIR=tmp_path / "dumps",
    )
    yield app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def runner(app: Flask):
    """Create a Flask CLI test runner."""
    return app.test_cli_runner()


@pytest.fixture
def dictionary(temp_data_dir: Path) -> Dictionary:
    """An initialized, empty store named 'users'."""
    return Dictionary(temp_data_dir, "users").init()


@pytest.fixture
def collection(temp_data_dir: Path) -> DictionaryCollection:
    return DictionaryCollection(temp_data_dir).init()


@pytest.fixture
def dictionary_cli(collection: DictionaryCollection, tmp_path: Path) -> DictionaryCLI:
    return DictionaryCLI(collection, ErrorMonitor(tmp_path / "dumps"))


@pytest.fixture
def stdin():
    """
    Feed prompt answers to click while calling DictionaryCLI methods directly.

        with stdin("dict1\\n") as out:
            picked = dictionary_cli.user_pick_key()
        assert "dict1" in out.getvalue()
    """

    @contextlib.contextmanager
    def _feed(text: str):
        with CliRunner().isolation(input=text) as streams:
            out = _Output(streams[0])
            try:
                yield out
            finally:
                out.freeze()

    return _feed


class _Output:
    def __init__(self, stream):
        self._stream = stream
        self._frozen = None

    def freeze(self):
        self._frozen = self.getvalue()

    def getvalue(self) -> str:
        if self._frozen is not None:
            return self._frozen
        return self._stream.getvalue().decode("utf-8", errors="replace")


@pytest.fixture
def write_store():
    """Write a backing file the way Dictionary persists it."""

    def _write(path: Path, records: dict) -> Path:
        lines = [json.dumps([k, v], ensure_ascii=False, separators=(",", ":")) for k, v in records.items()]
        path.write_text("\n".join(lines), encoding="utf-8")
        return path

    return _write
