class MemStageError(Exception):
    """Base exception for memstage"""
    pass

class FileSystemError(MemStageError):
    """Base exception for filesystem operations"""

    def __init__(self, message: str, path: str = None):
        super().__init__(message)
        self.path = path

class FileNotFound(FileSystemError):
    """Raised when no buffered file is registered under a path"""

    def __init__(self, path: str):
        super().__init__(f"No buffered file selected for: {path}", path)

class LoadError(FileSystemError):
    """Raised when a file cannot be read from storage into a buffer"""

    def __init__(self, path: str, reason: str = None):
        message = f"Failed to load file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, path)
        self.reason = reason

class DirectoryError(FileSystemError):
    """Raised when a directory operation fails on the host filesystem"""
    pass

class ConfigError(MemStageError):
    """Raised when configuration cannot be read or is invalid"""
    pass
