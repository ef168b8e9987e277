"""File-level actions applied when syncing a local tree with a blueprint."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from .exceptions import UserError

logger = logging.getLogger("mirrorpick")


class Action(Protocol):
    """A single change to the local tree."""

    def describe(self) -> str: ...

    def target(self) -> Path: ...

    def apply(self) -> None: ...


class RemoveFileAction:
    """Remove a file that is no longer part of the blueprint."""

    def __init__(self, path: Path | str):
        self._path = Path(path).absolute()
        if self._path.exists() and not self._path.is_file():
            raise UserError(f"{self._path} is not a file")

    def target(self) -> Path:
        return self._path

    def describe(self) -> str:
        return f"Remove file {self._path}"

    def apply(self) -> None:
        logger.debug("%s", self.describe())
        self._path.unlink(missing_ok=True)

    def __repr__(self) -> str:
        return f"RemoveFileAction({str(self._path)!r})"

    def __str__(self) -> str:
        return self.describe()
