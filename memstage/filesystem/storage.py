"""
Host filesystem access: whole-file binary I/O and directory pass-throughs
"""

import os
import shutil
import logging
from typing import List

from ..exceptions import DirectoryError

logger = logging.getLogger('memstage.storage')


class HostStorage:
    """Durable storage backed by the host filesystem.

    File reads and writes always move the whole content at once. The file
    handle is scoped to each call.
    """

    def read_file(self, path: str) -> bytes:
        """Read the entire file; OSError propagates to the caller"""
        with open(path, 'rb') as f:
            data = f.read()
        logger.debug(f"Read {len(data)} bytes from {path}")
        return data

    def write_file(self, path: str, data: bytes) -> int:
        """Write data to path, truncating or creating it; OSError propagates"""
        with open(path, 'wb') as f:
            f.write(data)
        logger.debug(f"Wrote {len(data)} bytes to {path}")
        return len(data)

    def delete_file(self, path: str) -> bool:
        """Delete a file, returns False when there was nothing to delete"""
        try:
            os.remove(path)
        except FileNotFoundError:
            return False
        logger.debug(f"Deleted {path}")
        return True

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def create_directory(self, path: str) -> bool:
        """Create a directory and its parents.

        Returns True when a new directory was made, False when it already
        existed.
        """
        if os.path.isdir(path):
            return False
        try:
            os.makedirs(path)
        except OSError as e:
            logger.error(f"Error creating directory {path}: {e}")
            raise DirectoryError(f"Failed to create directory: {str(e)}", path) from e
        logger.info(f"Created directory: {path}")
        return True

    def list_directory(self, path: str) -> List[str]:
        """List the entries of a directory as paths joined onto it"""
        try:
            names = sorted(os.listdir(path))
        except OSError as e:
            logger.error(f"Error listing directory {path}: {e}")
            raise DirectoryError(f"Failed to list directory: {str(e)}", path) from e
        return [os.path.join(path, name) for name in names]

    def remove_directory(self, path: str) -> bool:
        """Remove a directory and everything under it.

        Returns False when nothing existed at path.
        """
        if not os.path.lexists(path):
            return False
        try:
            if os.path.isdir(path) and not os.path.islink(path):
                shutil.rmtree(path)
            else:
                os.remove(path)
        except OSError as e:
            logger.error(f"Error removing directory {path}: {e}")
            raise DirectoryError(f"Failed to remove directory: {str(e)}", path) from e
        logger.info(f"Removed directory: {path}")
        return True
