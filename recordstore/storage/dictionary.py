import json
import logging
import os
import tempfile
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Generic, List, Optional, TypeVar

from ..utils.fs_utils import read_file_or_none
from .errors import CorruptRecordError, DuplicateKeyError, KeyNotFoundError

log = logging.getLogger(__name__)

STORE_EXT = ".jsonl"

T = TypeVar("T")


def store_file_name(name: str) -> str:
    return f"{name}{STORE_EXT}"


def encode_record(key: str, value: Any) -> str:
    return json.dumps([key, value], ensure_ascii=False, separators=(",", ":"))


def decode_record(line: str, path: Path, line_no: int):
    try:
        entry = json.loads(line)
    except json.JSONDecodeError as e:
        raise CorruptRecordError(path, line_no, f"invalid JSON ({e.msg})") from e
    if not isinstance(entry, list) or len(entry) != 2:
        raise CorruptRecordError(path, line_no, "expected a [key, value] array")
    key, value = entry
    if not isinstance(key, str) or not key:
        raise CorruptRecordError(path, line_no, "record key must be a non-empty string")
    return key, value


class Dictionary(Generic[T]):
    """
    A string-keyed mapping mirrored to ``<parent>/<name>.jsonl``.

    The in-memory data is authoritative once ``init()`` ran; every successful
    mutation rewrites the whole file, one ``[key, value]`` JSON array per line.
    """

    def __init__(self, parent: Path, name: str):
        self.path = (Path(parent) / store_file_name(name)).absolute()
        self.data: Dict[str, T] = {}
        self._lock = threading.RLock()

    def __repr__(self):
        return f"<Dictionary {self.name!r} records={len(self.data)} path={str(self.path)!r}>"

    def __len__(self):
        return len(self.data)

    def __contains__(self, key):
        return key in self.data

    @property
    def name(self) -> str:
        return self.path.name[: -len(STORE_EXT)]

    def init(self) -> "Dictionary[T]":
        self._load()
        return self

    def _load(self):
        content = read_file_or_none(self.path)
        if not content:
            log.debug("No records at %s, starting empty", self.path)
            return
        loaded: Dict[str, T] = {}
        for line_no, line in enumerate(content.split("\n"), start=1):
            if not line.strip():
                continue
            key, value = decode_record(line, self.path, line_no)
            loaded[key] = value
        with self._lock:
            self.data = loaded
        log.debug("Loaded %d records from %s", len(loaded), self.path)

    def _save(self):
        content = "\n".join(encode_record(k, v) for k, v in self.data.items())
        # Write beside the target, then swap it in.
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        log.debug("Wrote %d records to %s", len(self.data), self.path)

    def add(self, key: str, value: T):
        if not isinstance(key, str) or not key:
            raise ValueError("key must be a non-empty string")
        with self._lock:
            if key in self.data:
                raise DuplicateKeyError(key, self.path)
            encode_record(key, value)
            self.data[key] = value
            self._save()

    def get(self, key: str, default: Optional[T] = None) -> Optional[T]:
        return self.data.get(key, default)

    def update(self, key: str, value: T):
        with self._lock:
            if key not in self.data:
                raise KeyNotFoundError(key, self.path)
            encode_record(key, value)
            self.data[key] = value
            self._save()

    def delete(self, key: str) -> bool:
        with self._lock:
            if key not in self.data:
                return False
            del self.data[key]
            self._save()
            return True

    def get_all(self) -> Dict[str, T]:
        return dict(self.data)

    def keys(self) -> List[str]:
        return list(self.data)

    def modified_at(self) -> Optional[datetime]:
        try:
            return datetime.fromtimestamp(self.path.stat().st_mtime)
        except FileNotFoundError:
            return None

    def touch(self):
        """Materialize the backing file if it does not exist yet."""
        with self._lock:
            if not self.path.exists():
                self._save()
