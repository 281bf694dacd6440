"""ResourcePersistence Protocol - byte storage used by the configuration store."""

from pathlib import Path
from typing import Protocol, runtime_checkable

# .NET-style ticks: 100 ns intervals since 0001-01-01T00:00:00Z.
TICKS_PER_SECOND = 10_000_000
UNIX_EPOCH_TICKS = 621_355_968_000_000_000


@runtime_checkable
class ResourcePersistence(Protocol):
    """Interface all configuration persistence backends must implement.

    Implementations must be read-after-write consistent: once write_bytes()
    returns, read_bytes() sees the new content and modified_at_ticks()
    returns a value strictly greater than any value reported before the
    write.
    """

    def exists(self, path: Path) -> bool: ...

    def read_bytes(self, path: Path) -> bytes: ...

    def write_bytes(self, path: Path, data: bytes) -> None: ...

    def modified_at_ticks(self, path: Path) -> int: ...
