"""File-backed persistence for the bearer token."""

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

TOKEN_KEY = "bearerToken"


class TokenStore:
    """
    Persists a single bearer token in a JSON file.

    Parameters
    ----------
    path : Path
        Location of the token file

    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> str | None:
        """
        Read the persisted token.

        Returns
        -------
        str | None
            Stored token, or None if absent or unreadable

        """
        if not self.path.exists():
            return None

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable token file %s: %s", self.path, e)
            return None

        token = data.get(TOKEN_KEY) if isinstance(data, dict) else None
        return token if isinstance(token, str) and token else None

    def save(self, token: str) -> None:
        """
        Persist a token, replacing any previous one.

        Parameters
        ----------
        token : str
            Bearer token

        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        # Creation mode does not apply to a file that already exists
        os.fchmod(fd, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump({TOKEN_KEY: token}, f)
        logger.debug("Saved token to %s", self.path)

    def clear(self) -> bool:
        """
        Remove the persisted token.

        Returns
        -------
        bool
            True if a token file was removed

        """
        if not self.path.exists():
            return False
        self.path.unlink()
        return True
