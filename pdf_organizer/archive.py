"""In-memory zip archive writer."""

from __future__ import annotations

import io
import zipfile
from typing import List


class ArchiveWriter:
    """Collects named entries and serializes them as one zip archive."""

    def __init__(self) -> None:
        self._buffer = io.BytesIO()
        self._zip = zipfile.ZipFile(self._buffer, "w", compression=zipfile.ZIP_DEFLATED)
        self._closed = False

    def folder(self, name: str) -> "ArchiveFolder":
        name = name.strip("/")
        self._zip.writestr(zipfile.ZipInfo(f"{name}/"), b"")
        return ArchiveFolder(self, name)

    def add(self, name: str, data: bytes) -> None:
        if self._closed:
            raise ValueError("Archive has already been serialized")
        self._zip.writestr(name, data)

    def names(self) -> List[str]:
        return self._zip.namelist()

    def to_bytes(self) -> bytes:
        if not self._closed:
            self._zip.close()
            self._closed = True
        return self._buffer.getvalue()


class ArchiveFolder:
    """Entries added through a folder are prefixed with its path."""

    def __init__(self, archive: ArchiveWriter, name: str) -> None:
        self.archive = archive
        self.name = name

    def add(self, name: str, data: bytes) -> None:
        self.archive.add(f"{self.name}/{name}", data)


__all__ = ["ArchiveWriter", "ArchiveFolder"]
