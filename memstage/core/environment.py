"""
Environment variable expansion for staged file paths
"""

import os
import logging
from typing import Dict, Optional

logger = logging.getLogger('memstage.environment')

TOKEN_START = '${'
TOKEN_END = '}'


class EnvironmentResolver:
    """Expands ${NAME} tokens using overrides first, then the process environment.

    Overrides live only in this object; ``os.environ`` is never modified.
    """

    def __init__(self, overrides: Optional[Dict[str, str]] = None):
        self._overrides: Dict[str, str] = dict(overrides or {})

    def set_var(self, name: str, value: str) -> None:
        """Set an override variable"""
        self._overrides[name] = value
        logger.debug(f"Set override {name}={value}")

    def unset_var(self, name: str) -> None:
        """Remove an override variable"""
        self._overrides.pop(name, None)

    def get_var(self, name: str) -> str:
        """Get a variable value, empty string when it is not defined anywhere"""
        if name in self._overrides:
            return self._overrides[name]
        return os.environ.get(name, '')

    @property
    def overrides(self) -> Dict[str, str]:
        return dict(self._overrides)

    def resolve(self, path: str) -> str:
        """Replace every ${NAME} token in path.

        Scanning stops at the first ``${`` with no closing brace; the rest of
        the string is kept verbatim. Substituted values are not expanded again.
        """
        parts = []
        pos = 0

        while True:
            start = path.find(TOKEN_START, pos)
            if start == -1:
                break

            end = path.find(TOKEN_END, start + len(TOKEN_START))
            if end == -1:
                break

            name = path[start + len(TOKEN_START):end]
            parts.append(path[pos:start])
            parts.append(self.get_var(name))
            pos = end + len(TOKEN_END)

        parts.append(path[pos:])
        resolved = ''.join(parts)

        if resolved != path:
            logger.debug(f"Resolved path '{path}' to '{resolved}'")
        return resolved
