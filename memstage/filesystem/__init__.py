"""
Buffered files, the registry that holds them, and host storage access
"""

from .models import FileMode, LoadStatus, SaveResult, RemoveResult, FileEntry
from .storage import HostStorage
from .buffered import BufferedFile
from .registry import FileRegistry

__all__ = [
    'FileMode', 'LoadStatus', 'SaveResult', 'RemoveResult', 'FileEntry',
    'HostStorage', 'BufferedFile', 'FileRegistry',
]
