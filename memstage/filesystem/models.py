"""
Data structures shared by the buffered file and the registry
"""

from enum import Enum
from typing import NamedTuple, Optional
from dataclasses import dataclass


class FileMode(Enum):
    """Access mode of a buffered file, fixed when it is opened"""
    READ = 'read'
    WRITE = 'write'
    APPEND = 'append'

    @property
    def readable(self) -> bool:
        return self in (FileMode.READ, FileMode.APPEND)

    @property
    def writable(self) -> bool:
        return self in (FileMode.WRITE, FileMode.APPEND)


class LoadStatus(Enum):
    """How the initial content of a buffered file was obtained"""
    LOADED = 'loaded'      # read from storage
    MISSING = 'missing'    # nothing on disk, buffer starts empty
    FAILED = 'failed'      # file present but unreadable, buffer starts empty
    SKIPPED = 'skipped'    # write mode never loads


@dataclass(frozen=True)
class SaveResult:
    """Outcome of persisting a buffer to storage"""
    path: str
    ok: bool
    bytes_written: int = 0
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class RemoveResult:
    """Outcome of removing a registry entry and its on-disk file"""
    path: str
    removed: bool
    deleted: bool = False
    error: Optional[str] = None


class FileEntry(NamedTuple):
    """Registry listing entry, unpacks as (path, size)"""
    path: str
    size: int
