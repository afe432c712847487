"""Abstract access to the upload files orders were read from."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from ordertrack.domain.model.order import Order


class SourceFileRepository(ABC):

    @abstractmethod
    def find(self, order: Order) -> Path | None:
        """Return the upload file that produced *order*, or None if unknown."""

    @abstractmethod
    def delete(self, path: Path) -> bool:
        """Delete *path*. Return True if a file was removed."""
