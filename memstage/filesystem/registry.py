"""
File registry - keyed collection of live buffered files
"""

import logging
from typing import Dict, Iterator, List, Optional

from ..core.environment import EnvironmentResolver
from ..exceptions import FileNotFound
from .buffered import BufferedFile
from .models import FileEntry, FileMode, RemoveResult
from .storage import HostStorage

logger = logging.getLogger('memstage.registry')


class FileRegistry:
    """Maps resolved paths to buffered files.

    Every path argument goes through ``${VAR}`` expansion before it is used
    as a key, so ``"${ROOT}/a.bin"`` and ``"/data/a.bin"`` name the same
    entry when ROOT is ``/data``. There is at most one buffer per resolved
    path; selecting a path again replaces its buffer and any unsaved content
    in it is lost.

    The registry does no locking. Callers sharing one registry across
    threads must serialize access themselves.
    """

    def __init__(self, env: Optional[EnvironmentResolver] = None,
                 storage: Optional[HostStorage] = None,
                 max_total_bytes: Optional[int] = None):
        self.env = env or EnvironmentResolver()
        self.storage = storage or HostStorage()
        self.max_total_bytes = max_total_bytes
        self._files: Dict[str, BufferedFile] = {}

    def select(self, path: str, mode: FileMode) -> BufferedFile:
        """Open a fresh buffer for path and register it, replacing any previous one"""
        resolved = self.env.resolve(path)
        self._discard(resolved)

        buf = BufferedFile.open(resolved, mode, self.storage)
        self._files[resolved] = buf
        logger.debug(f"Selected {resolved} in {mode.value} mode ({buf.load_status.value})")
        self._check_capacity()
        return buf

    def get(self, path: str) -> BufferedFile:
        """Return the live buffer for path, raising FileNotFound if none is selected"""
        resolved = self.env.resolve(path)
        try:
            return self._files[resolved]
        except KeyError:
            raise FileNotFound(resolved) from None

    def load(self, source_path: str, path: str, mode: FileMode = FileMode.READ) -> BufferedFile:
        """Register a buffer for path filled from source_path.

        LoadError propagates and leaves the registry unchanged.
        """
        resolved = self.env.resolve(path)
        buf = BufferedFile(resolved, mode, self.storage)
        buf.load(self.env.resolve(source_path), resolved)
        if mode is FileMode.APPEND:
            buf.seek(buf.size)

        self._discard(resolved)
        self._files[resolved] = buf
        self._check_capacity()
        return buf

    def remove(self, path: str) -> RemoveResult:
        """Drop the entry for path and delete the file at that path on disk.

        Nothing happens when no entry is registered. A failed deletion is
        reported in the result, not raised.
        """
        resolved = self.env.resolve(path)
        if self._files.pop(resolved, None) is None:
            return RemoveResult(path=resolved, removed=False)

        try:
            deleted = self.storage.delete_file(resolved)
        except OSError as e:
            logger.warning(f"Removed {resolved} from registry but could not delete it on disk: {e}")
            return RemoveResult(path=resolved, removed=True, deleted=False, error=str(e))

        logger.info(f"Removed {resolved}")
        return RemoveResult(path=resolved, removed=True, deleted=deleted)

    def list(self) -> List[FileEntry]:
        """List (path, size) for every entry, in no guaranteed order"""
        return [FileEntry(path, buf.size) for path, buf in self._files.items()]

    def exists(self, path: str) -> bool:
        return self.env.resolve(path) in self._files

    def total_bytes(self) -> int:
        return sum(buf.size for buf in self._files.values())

    def dirty_files(self) -> List[str]:
        """Paths whose buffers hold unsaved writes"""
        return [path for path, buf in self._files.items() if buf.dirty]

    def check_capacity(self) -> bool:
        """True when total buffered bytes are within max_total_bytes"""
        if self.max_total_bytes is None:
            return True
        return self.total_bytes() <= self.max_total_bytes

    def clear(self) -> None:
        """Drop every entry without touching disk"""
        self._files.clear()

    def _discard(self, resolved: str):
        previous = self._files.get(resolved)
        if previous is not None and previous.dirty:
            logger.debug(f"Discarding unsaved buffer for {resolved} ({previous.size} bytes)")

    def _check_capacity(self):
        if not self.check_capacity():
            logger.warning(
                f"Buffered content ({self.total_bytes()} bytes) exceeds "
                f"max_total_bytes ({self.max_total_bytes})"
            )

    def __contains__(self, path: str) -> bool:
        return self.exists(path)

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._files))
