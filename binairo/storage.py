"""Save, list and load grid snapshots on disk."""

from __future__ import annotations
import json
import os
import time
from typing import List, Optional

from .core.board import BinairoBoard
from .logging_utils import get_logger

logger = get_logger(__name__)

FILE_PREFIX = "binairo_"
FILE_SUFFIX = ".json"


class GameStore:
    """
    Directory of saved grids.

    Each snapshot is a small JSON file holding the grid size and its
    compact string form. The file name is the snapshot identifier.
    """

    def __init__(self, directory: str = "saves"):
        """
        Args:
            directory: Folder holding the snapshots. Created on first save.
        """
        self.directory = directory

    def save(self, board: BinairoBoard) -> str:
        """
        Write a snapshot of the board.

        Returns:
            The identifier to pass to ``load``.
        """
        os.makedirs(self.directory, exist_ok=True)

        stamp = time.strftime("%Y%m%d_%H%M%S")
        base = f"{FILE_PREFIX}{board.size}x{board.size}_{stamp}"
        identifier = base + FILE_SUFFIX
        n = 1
        while os.path.exists(self._path(identifier)):
            identifier = f"{base}_{n}{FILE_SUFFIX}"
            n += 1

        data = {
            "size": board.size,
            "grid": board.to_string(),
            "saved_at": stamp,
        }
        with open(self._path(identifier), "w") as f:
            json.dump(data, f, indent=2)

        logger.info("Saved %dx%d grid as %s", board.size, board.size, identifier)
        return identifier

    def list(self) -> List[str]:
        """Identifiers of all saved snapshots, oldest first."""
        if not os.path.isdir(self.directory):
            return []
        return sorted(
            name for name in os.listdir(self.directory)
            if name.startswith(FILE_PREFIX) and name.endswith(FILE_SUFFIX)
        )

    def load(self, identifier: str) -> Optional[BinairoBoard]:
        """
        Read a snapshot back.

        Returns:
            The saved board, or None if the file is missing or malformed.
        """
        path = self._path(identifier)
        try:
            with open(path, "r") as f:
                data = json.load(f)
            return BinairoBoard.from_string(data["grid"], size=int(data["size"]))
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Could not load %s: %s", path, e)
            return None

    def _path(self, identifier: str) -> str:
        # Identifiers are plain file names; drop any directory part
        return os.path.join(self.directory, os.path.basename(identifier))
