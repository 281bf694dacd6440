"""File system persistence for configuration resources.

Writes go to a sibling temp file that is then renamed over the target,
so readers never observe a partially written file. File systems with
coarse timestamp resolution can leave two quick writes with the same
mtime; write_bytes() bumps the mtime forward when that happens so every
write is observable through modified_at_ticks().
"""

import os
import tempfile
import threading
from pathlib import Path

from mediaconf.persistence.adapter import UNIX_EPOCH_TICKS

_NS_PER_TICK = 100


class FileResourcePersistence:
    """ResourcePersistence backed by plain files."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def write_bytes(self, path: Path, data: bytes) -> None:
        """Atomically replace path with data and advance its mtime."""
        path.parent.mkdir(parents=True, exist_ok=True)

        with self._lock:
            previous_ns = path.stat().st_mtime_ns if path.exists() else None

            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise

            if previous_ns is not None:
                current_ns = path.stat().st_mtime_ns
                if current_ns // _NS_PER_TICK <= previous_ns // _NS_PER_TICK:
                    bumped = (previous_ns // _NS_PER_TICK + 1) * _NS_PER_TICK
                    os.utime(path, ns=(bumped, bumped))

    def modified_at_ticks(self, path: Path) -> int:
        """Last write time of path in ticks.

        Raises:
            FileNotFoundError: If path does not exist
        """
        return path.stat().st_mtime_ns // _NS_PER_TICK + UNIX_EPOCH_TICKS
