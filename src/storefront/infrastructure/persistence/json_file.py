"""File helpers shared by the JSON stores.

Several CLI processes may touch the same data directory. Read-modify-write
cycles run under an exclusive ``flock`` on a sidecar lock file, and every
write goes to a temp file that is then renamed over the target, so readers
never see a half-written document.
"""

from __future__ import annotations

import fcntl
import json
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any


def lock_path_for(path: Path) -> Path:
    return path.with_name(f".{path.name}.lock")


@contextmanager
def file_lock(path: Path) -> Iterator[None]:
    """Hold an exclusive lock for ``path`` across processes and threads."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(lock_path_for(path), "w") as lock_file:
        fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding="utf-8"))


def write_json_atomic(path: Path, data: Any) -> None:
    fd, temp_path = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.stem}_", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
            f.write("\n")
        os.replace(temp_path, path)
    except BaseException:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def ensure_json_file(path: Path, empty: Any) -> None:
    """Create ``path`` holding ``empty`` unless it already exists."""
    if path.exists():
        return
    with file_lock(path):
        if not path.exists():
            write_json_atomic(path, empty)
