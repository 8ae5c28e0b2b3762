import os
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


def read_file_or_none(path: PathLike) -> Optional[str]:
    """Return the file's text, or None when it does not exist. Other errors propagate."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return None


def is_file_in_path(parent: PathLike, file: PathLike) -> bool:
    parent = Path(parent).resolve()
    file = Path(file).resolve()
    return file != parent and parent in file.parents


def render_path(path: PathLike) -> str:
    # ~/data/stores instead of /home/me/data/stores
    p = str(path)
    home = os.path.expanduser("~")
    if home and home != "~" and (p == home or p.startswith(home + os.sep)):
        return "~" + p[len(home):]
    return p
