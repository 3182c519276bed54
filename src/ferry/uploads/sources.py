"""Readable sources of upload data."""

from abc import ABC, abstractmethod
from pathlib import Path

import aiofiles
import aiofiles.os

from ..domain.exceptions import UploadError
from ..domain.uploads import ByteRange


class BaseUploadSource(ABC):
    """A named, fixed-size blob that can be read one byte range at a time."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def size(self) -> int:
        pass

    @abstractmethod
    async def read(self, byte_range: ByteRange) -> bytes:
        """Return exactly ``byte_range.length`` bytes starting at its offset."""
        pass


class BytesSource(BaseUploadSource):
    """In-memory source, handy for generated content and tests."""

    def __init__(self, name: str, data: bytes) -> None:
        self._name = name
        self._data = data

    @property
    def name(self) -> str:
        return self._name

    @property
    def size(self) -> int:
        return len(self._data)

    async def read(self, byte_range: ByteRange) -> bytes:
        return self._data[byte_range.offset : byte_range.end]


class FileSource(BaseUploadSource):
    """Source backed by a file on disk.

    Each read opens the file, seeks and reads one range so that only a single
    chunk is ever held in memory. Reads go through aiofiles to keep the event
    loop free.
    """

    def __init__(self, path: Path, size: int, name: str | None = None) -> None:
        self.path = path
        self._size = size
        self._name = name or path.name

    @classmethod
    async def from_path(cls, path: Path | str, name: str | None = None) -> "FileSource":
        """Create a source for ``path``, reading its size from disk."""
        path = Path(path)
        size = await aiofiles.os.path.getsize(path)
        return cls(path, size, name=name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def size(self) -> int:
        return self._size

    async def read(self, byte_range: ByteRange) -> bytes:
        async with aiofiles.open(self.path, "rb") as file_handle:
            await file_handle.seek(byte_range.offset)
            data = await file_handle.read(byte_range.length)

        if len(data) != byte_range.length:
            raise UploadError(
                f"Short read from {self.path}: expected {byte_range.length} bytes "
                f"at offset {byte_range.offset}, got {len(data)}"
            )
        return data
