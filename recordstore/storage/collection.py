import logging
import threading
from pathlib import Path
from typing import Dict, Generic, List, Optional

from ..utils.fs_utils import is_file_in_path
from .dictionary import STORE_EXT, Dictionary, T
from .errors import DuplicateNameError, InvalidNameError

log = logging.getLogger(__name__)


def validate_store_name(name, parent: Optional[Path] = None) -> str:
    """Return the stripped name, or raise InvalidNameError if it is not a safe file stem."""
    name = str(name or "").strip()
    if not name:
        raise InvalidNameError("Name cannot be empty")
    if name in {".", ".."} or "/" in name or "\\" in name:
        raise InvalidNameError(f"Invalid dictionary name: {name!r}")
    if parent is not None and not is_file_in_path(parent, Path(parent) / f"{name}{STORE_EXT}"):
        raise InvalidNameError(f"Invalid dictionary name: {name!r}")
    return name


class DictionaryCollection(Generic[T]):
    """A directory of named Dictionary stores, one ``<name>.jsonl`` file each."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.dictionaries: Dict[str, Dictionary[T]] = {}
        self._lock = threading.RLock()

    def __len__(self):
        return len(self.dictionaries)

    def __contains__(self, name):
        return name in self.dictionaries

    def init(self) -> "DictionaryCollection[T]":
        if not self.path.exists():
            self.path.mkdir(parents=True, exist_ok=True)
            log.info("Created dictionary directory %s", self.path)
            return self
        for p in sorted(self.path.iterdir()):
            if p.suffix != STORE_EXT or not p.is_file():
                continue
            dictionary = Dictionary(self.path, p.stem).init()
            self.dictionaries[p.stem] = dictionary
        log.debug("Discovered %d dictionaries in %s", len(self.dictionaries), self.path)
        return self

    def create_dictionary(self, name: str) -> Dictionary[T]:
        with self._lock:
            if name in self.dictionaries:
                raise DuplicateNameError(name)
            dictionary = Dictionary(self.path, name).init()
            dictionary.touch()
            self.dictionaries[name] = dictionary
        log.info("Created dictionary %r at %s", name, dictionary.path)
        return dictionary

    add_dictionary = create_dictionary

    def get_dictionary(self, name: str) -> Optional[Dictionary[T]]:
        return self.dictionaries.get(name)

    def delete_dictionary(self, name: str) -> bool:
        with self._lock:
            dictionary = self.dictionaries.get(name)
            if dictionary is None:
                return False
            dictionary.path.unlink(missing_ok=True)
            del self.dictionaries[name]
        log.info("Deleted dictionary %r", name)
        return True

    def get_all_dictionaries(self) -> Dict[str, Dictionary[T]]:
        return dict(self.dictionaries)

    def names(self) -> List[str]:
        return list(self.dictionaries)
