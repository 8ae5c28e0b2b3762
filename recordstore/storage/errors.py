from pathlib import Path
from typing import Optional


class RecordStoreError(Exception):
    """Base class for record store failures."""


class DuplicateKeyError(RecordStoreError, KeyError):
    def __init__(self, key: str, path: Optional[Path] = None):
        self.key = key
        self.path = path
        super().__init__(f"Key '{key}' already exists")

    def __str__(self):
        return self.args[0]


class KeyNotFoundError(RecordStoreError, KeyError):
    def __init__(self, key: str, path: Optional[Path] = None):
        self.key = key
        self.path = path
        super().__init__(f"Key '{key}' does not exist")

    def __str__(self):
        return self.args[0]


class DuplicateNameError(RecordStoreError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Dictionary '{name}' already exists")


class InvalidNameError(RecordStoreError, ValueError):
    pass


class CorruptRecordError(RecordStoreError, ValueError):
    """A backing file line could not be parsed as a ``[key, value]`` record."""

    def __init__(self, path: Path, line_no: int, reason: str):
        self.path = path
        self.line_no = line_no
        super().__init__(f"{path}:{line_no}: {reason}")
