"""
memstage - in-memory staging for file content

Files are selected by path into memory, read and written through a cursor,
and only reach the disk when saved explicitly.

Example Usage:

    from memstage import MemStage, FileMode

    with MemStage() as stage:
        stage.set_env("OUT", "/tmp/out")
        stage.select_file("${OUT}/example.bin", FileMode.WRITE)

        f = stage.get_file("/tmp/out/example.bin")
        f.write(b"\\x01\\x02\\x03")
        result = f.save("/tmp/out")
        if not result:
            print(result.error)
"""

from .core.context import MemStage
from .core.config import MemStageConfig, load_config
from .core.environment import EnvironmentResolver
from .core.logging_setup import setup_logging
from .filesystem import (
    BufferedFile,
    FileEntry,
    FileMode,
    FileRegistry,
    HostStorage,
    LoadStatus,
    RemoveResult,
    SaveResult,
)
from .exceptions import (
    MemStageError,
    FileSystemError,
    FileNotFound,
    LoadError,
    DirectoryError,
    ConfigError,
)

__version__ = "1.0.0"

__all__ = [
    'MemStage', 'MemStageConfig', 'load_config', 'EnvironmentResolver', 'setup_logging',
    'BufferedFile', 'FileEntry', 'FileMode', 'FileRegistry', 'HostStorage',
    'LoadStatus', 'RemoveResult', 'SaveResult',
    'MemStageError', 'FileSystemError', 'FileNotFound', 'LoadError',
    'DirectoryError', 'ConfigError',
]
