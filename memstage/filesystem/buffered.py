"""
Buffered file - in-memory byte buffer standing in for a file on disk
"""

import os
import logging
from typing import Optional

from ..exceptions import LoadError
from .models import FileMode, LoadStatus, SaveResult
from .storage import HostStorage

logger = logging.getLogger('memstage.buffered')


class BufferedFile:
    """Cursor-addressable byte buffer held in memory until saved.

    The mode is fixed at construction: reads are only served in READ and
    APPEND mode, writes are only accepted in WRITE and APPEND mode. A call
    outside its mode transfers nothing and leaves the buffer untouched.

    Not thread-safe.
    """

    def __init__(self, path: str, mode: FileMode, storage: Optional[HostStorage] = None):
        self._path = path
        self._mode = mode
        self._storage = storage or HostStorage()
        self._data = bytearray()
        self._cursor = 0
        self.load_status = LoadStatus.SKIPPED
        self.load_error: Optional[str] = None
        self.dirty = False

    @classmethod
    def open(cls, path: str, mode: FileMode, storage: Optional[HostStorage] = None) -> 'BufferedFile':
        """Open a buffer for path.

        READ and APPEND load the current file content; a missing or unreadable
        file leaves the buffer empty and is recorded in ``load_status``.
        APPEND starts with the cursor at the end. WRITE always starts empty.
        """
        buf = cls(path, mode, storage)
        if mode.readable:
            buf._initial_load()
            if mode is FileMode.APPEND:
                buf._cursor = len(buf._data)
        return buf

    def _initial_load(self):
        try:
            self._data = bytearray(self._storage.read_file(self._path))
            self.load_status = LoadStatus.LOADED
        except FileNotFoundError:
            self.load_status = LoadStatus.MISSING
            logger.debug(f"No file on disk for {self._path}, starting empty")
        except OSError as e:
            self.load_status = LoadStatus.FAILED
            self.load_error = str(e)
            logger.warning(f"Could not read {self._path}, starting empty: {e}")

    @property
    def path(self) -> str:
        return self._path

    @property
    def mode(self) -> FileMode:
        return self._mode

    @property
    def size(self) -> int:
        return len(self._data)

    def get_path(self) -> str:
        return self._path

    def get_size(self) -> int:
        return len(self._data)

    def getvalue(self) -> bytes:
        """Snapshot of the whole buffer"""
        return bytes(self._data)

    def read(self, max_bytes: int = -1) -> bytes:
        """Read up to max_bytes from the cursor and advance it.

        A negative max_bytes reads to the end of the buffer.
        """
        if not self._mode.readable:
            return b''
        if self._cursor >= len(self._data):
            return b''

        if max_bytes < 0:
            end = len(self._data)
        else:
            end = min(self._cursor + max_bytes, len(self._data))

        chunk = bytes(self._data[self._cursor:end])
        self._cursor = end
        return chunk

    def write(self, data: bytes) -> int:
        """Write data at the cursor and advance it.

        Writing past the end zero-fills the gap between the old end and the
        cursor. Returns the number of bytes written.
        """
        if not self._mode.writable:
            return 0

        end = self._cursor + len(data)
        if end > len(self._data):
            self._data.extend(b'\0' * (end - len(self._data)))

        self._data[self._cursor:end] = data
        self._cursor = end
        if data:
            self.dirty = True
        return len(data)

    def seek(self, offset: int) -> int:
        """Move the cursor; positions past the end are allowed"""
        if offset < 0:
            raise ValueError(f"negative seek position {offset}")
        self._cursor = offset
        return self._cursor

    def tell(self) -> int:
        return self._cursor

    def save_path(self, destination_dir: Optional[str] = None) -> str:
        """Location save() writes to"""
        if destination_dir is None:
            return self._path
        return os.path.join(destination_dir, os.path.basename(self._path))

    def save(self, destination_dir: Optional[str] = None) -> SaveResult:
        """Write the whole buffer to storage.

        The file is written under destination_dir using the base name of this
        buffer's path, or to the path itself when no directory is given. The
        directory is not created. Failures are returned, never raised.
        """
        if destination_dir is not None and not os.path.basename(self._path):
            error = f"path has no file name: {self._path}"
            logger.warning(f"Cannot save buffer: {error}")
            return SaveResult(path=self._path, ok=False, error=error)

        target = self.save_path(destination_dir)
        try:
            written = self._storage.write_file(target, bytes(self._data))
        except OSError as e:
            logger.warning(f"Failed to save {self._path} to {target}: {e}")
            return SaveResult(path=target, ok=False, error=str(e))

        self.dirty = False
        logger.info(f"Saved {self._path} to {target} ({written} bytes)")
        return SaveResult(path=target, ok=True, bytes_written=written)

    def load(self, source_path: str, new_path: str) -> int:
        """Replace the buffer with the content of source_path.

        The cursor goes back to 0 and the buffer is relabelled to new_path.
        Raises LoadError when the source cannot be read; the buffer is left
        as it was.
        """
        try:
            data = self._storage.read_file(source_path)
        except OSError as e:
            logger.error(f"Error loading {source_path}: {e}")
            raise LoadError(source_path, e.strerror or str(e)) from e

        self._data = bytearray(data)
        self._cursor = 0
        self._path = new_path
        self.load_status = LoadStatus.LOADED
        self.load_error = None
        self.dirty = False
        logger.debug(f"Loaded {source_path} as {new_path} ({len(data)} bytes)")
        return len(data)

    def __repr__(self) -> str:
        return (f"BufferedFile(path={self._path!r}, mode={self._mode.value}, "
                f"size={len(self._data)}, cursor={self._cursor})")
