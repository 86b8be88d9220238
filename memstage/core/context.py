"""
Staging context - owns the environment, the registry and their lifecycle
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import psutil

from ..filesystem.buffered import BufferedFile
from ..filesystem.models import FileEntry, FileMode, RemoveResult
from ..filesystem.registry import FileRegistry
from ..filesystem.storage import HostStorage
from .config import MemStageConfig
from .environment import EnvironmentResolver

logger = logging.getLogger('memstage.context')


class MemStage:
    """One independent staging area.

    Create one per application (or per test), pass it to whatever needs
    buffered files, and close it when done. Closing drops every buffer;
    content that was never saved is lost and reported in the log.

    Nothing here is locked implicitly. Threads sharing a context should wrap
    their work in ``with stage.locked():``.
    """

    def __init__(self, config: Optional[MemStageConfig] = None,
                 storage: Optional[HostStorage] = None):
        self.config = config or MemStageConfig()
        self.storage = storage or HostStorage()
        self.env = EnvironmentResolver(self.config.env)
        self.registry = FileRegistry(self.env, self.storage, self.config.max_total_bytes)
        self.lock = threading.RLock()
        self.closed = False

    @contextmanager
    def locked(self):
        """Hold the context lock for the duration of the block"""
        with self.lock:
            yield self

    # Environment

    def set_env(self, name: str, value: str) -> None:
        self.env.set_var(name, value)

    def get_env(self, name: str) -> str:
        return self.env.get_var(name)

    def resolve(self, path: str) -> str:
        return self.env.resolve(path)

    # Buffered files

    def select_file(self, path: str, mode: FileMode) -> BufferedFile:
        return self.registry.select(path, mode)

    def get_file(self, path: str) -> BufferedFile:
        return self.registry.get(path)

    def load_file(self, source_path: str, path: str, mode: FileMode = FileMode.READ) -> BufferedFile:
        return self.registry.load(source_path, path, mode)

    def remove_file(self, path: str) -> RemoveResult:
        return self.registry.remove(path)

    def list_files(self) -> List[FileEntry]:
        return self.registry.list()

    # Directories

    def create_directory(self, path: str) -> bool:
        return self.storage.create_directory(self.resolve(path))

    def list_directory(self, path: str) -> List[str]:
        return self.storage.list_directory(self.resolve(path))

    def remove_directory(self, path: str) -> bool:
        return self.storage.remove_directory(self.resolve(path))

    def stats(self) -> Dict[str, Any]:
        """Registry usage alongside host memory availability"""
        memory = psutil.virtual_memory()
        return {
            'files': len(self.registry),
            'total_bytes': self.registry.total_bytes(),
            'dirty_files': len(self.registry.dirty_files()),
            'max_total_bytes': self.config.max_total_bytes,
            'host_available_bytes': memory.available,
        }

    def close(self) -> None:
        """Drop every buffer, warning about unsaved ones"""
        if self.closed:
            return
        for path in self.registry.dirty_files():
            logger.warning(f"Discarding unsaved buffer: {path}")
        self.registry.clear()
        self.closed = True

    def __enter__(self) -> 'MemStage':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
