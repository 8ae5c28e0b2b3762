"""
Error dumps for long-running interactive sessions.

An ``ErrorMonitor`` collects context entries while work is in progress. When a
monitored method fails, the entries are written as JSONL next to the failing
module (or into ``dump_dir``) and a ``MonitoredError`` pointing at the dump is
raised in place of the original exception.
"""
import functools
import inspect
import json
import time
import traceback
from pathlib import Path
from typing import Any, List, Optional


class MonitoredError(RuntimeError):
    def __init__(self, message: str, dump_path: Path):
        self.dump_path = dump_path
        super().__init__(message)

    def __str__(self):
        msg = self.args[0]
        if self.__cause__ is not None:
            msg = f"{msg}\n  [caused by] {type(self.__cause__).__name__}: {self.__cause__}"
        return msg


def file_path_from_traceback(error: BaseException) -> Optional[str]:
    frames = traceback.extract_tb(error.__traceback__) if error.__traceback__ else []
    if not frames:
        return None
    return frames[-1].filename or None


class ErrorMonitor:
    def __init__(self, dump_dir: Optional[Path] = None):
        self.dump_dir = Path(dump_dir) if dump_dir else None
        self.contexts: List[Any] = []

    def add_context(self, context: Any):
        self.contexts.append(context)

    def dump_to_file(self, path: Path):
        content = "\n".join(json.dumps(c, ensure_ascii=False, default=str) for c in self.contexts)
        Path(path).write_text(content, encoding="utf-8")

    def _dump_dir_for(self, error: BaseException) -> Path:
        if self.dump_dir:
            return self.dump_dir
        src = file_path_from_traceback(error)
        if src and Path(src).is_file():
            return Path(src).parent
        return Path.cwd()

    def handle_error(self, error: BaseException):
        dump_dir = self._dump_dir_for(error)
        dump_dir.mkdir(parents=True, exist_ok=True)
        dump_path = dump_dir / f"error_dump_{int(time.time() * 1000)}.jsonl"
        self.dump_to_file(dump_path)
        raise MonitoredError(
            f"ErrorMonitor failure detected. Verbose dump at: {dump_path}", dump_path
        ) from error


def error_monitored(field: str = "monitor"):
    """Route exceptions of the decorated method through ``self.<field>``'s ErrorMonitor."""

    def _monitor_of(self) -> ErrorMonitor:
        monitor = getattr(self, field, None)
        if monitor is None:
            raise AttributeError(
                f"Field `{field}` must be defined on classes of methods decorated with @error_monitored"
            )
        return monitor

    def decorator(fn):
        if inspect.iscoroutinefunction(fn):
            @functools.wraps(fn)
            async def async_wrapper(self, *args, **kwargs):
                monitor = _monitor_of(self)
                try:
                    return await fn(self, *args, **kwargs)
                except Exception as e:
                    monitor.handle_error(e)

            return async_wrapper

        @functools.wraps(fn)
        def wrapper(self, *args, **kwargs):
            monitor = _monitor_of(self)
            try:
                return fn(self, *args, **kwargs)
            except Exception as e:
                monitor.handle_error(e)

        return wrapper

    return decorator
