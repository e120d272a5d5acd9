"""Tools for chunk-based file copy operations."""

import os
from typing import BinaryIO, Iterator

from treecopy.types import PathType


class ChunkedFileCopier:
    """Iterator-based chunked binary reader used to stream a file's content.

    This class provides a memory-efficient way to move file content: the source is
    read in fixed-size chunks so that memory use stays constant regardless of file
    size. Iterating yields the chunks; copy_to() writes them to another binary file.

    Args:
        file_obj: An opened binary file object to read from.
        chunk_size: Size of chunks to read in bytes. Must be at least 4096 bytes.
            Defaults to 65536 (64 KB).

    Raises:
        ValueError: If chunk_size is less than 4096 bytes.

    Example:
        >>> import io
        >>> source = io.BytesIO(b"x" * 10000)
        >>> target = io.BytesIO()
        >>> ChunkedFileCopier(source, chunk_size=4096).copy_to(target)
        10000
        >>> len(target.getvalue())
        10000
    """

    MINIMUM_CHUNK_SIZE = 4096  # 4 KB

    def __init__(self, file_obj: BinaryIO, chunk_size: int = 65536) -> None:
        """Initialize the chunked copier with a file object and chunk size."""

        if chunk_size < self.MINIMUM_CHUNK_SIZE:
            raise ValueError(f"chunk_size must be at least {self.MINIMUM_CHUNK_SIZE} bytes, " f"got {chunk_size}")

        self._file: BinaryIO = file_obj
        self._chunk_size: int = chunk_size

    def __iter__(self) -> Iterator[bytes]:
        """Return self as iterator."""
        return self

    def __next__(self) -> bytes:
        """Get the next chunk of content.

        Returns:
            Up to chunk_size bytes of file content.

        Raises:
            StopIteration: When the end of the file is reached.
        """
        chunk: bytes = self._file.read(self._chunk_size)
        if not chunk:
            raise StopIteration
        return chunk

    def copy_to(self, target: BinaryIO) -> int:
        """Write the remaining content to target.

        Args:
            target: An opened binary file object to write to.

        Returns:
            The number of bytes written.
        """
        written = 0
        for chunk in self:
            target.write(chunk)
            written += len(chunk)
        return written


def copy_file_contents(source: PathType, destination: PathType, chunk_size: int = 65536) -> int:
    """Copy the bytes of one file to another path.

    The destination is created or truncated. Only content is copied: permissions,
    timestamps and other metadata are left at their defaults.

    Args:
        source: Path of the file to read.
        destination: Path of the file to write. Its parent directory must exist.
        chunk_size: Size of chunks to copy in bytes.

    Returns:
        The number of bytes written.

    Raises:
        OSError: If the source cannot be read or the destination cannot be written.
    """
    with open(os.fspath(source), "rb") as src, open(os.fspath(destination), "wb") as dst:
        return ChunkedFileCopier(src, chunk_size=chunk_size).copy_to(dst)
