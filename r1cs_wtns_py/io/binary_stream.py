"""
Little-endian binary stream used by the R1CS and WTNS codecs.

Both container formats are read and written as a full in-memory document, so
the stream always wraps a seekable buffer. Reads are strict: asking for more
bytes than remain raises TruncatedInputError instead of returning short data.
"""

import struct
from io import BytesIO
from typing import BinaryIO, List, Optional, Union

from ..errors import TruncatedInputError


Source = Union[bytes, bytearray, memoryview, BinaryIO]


class BinaryStream:
    """
    Binary stream reader/writer over an in-memory buffer.

    Attributes:
        position: Current offset in the buffer
        length: Total number of bytes in the buffer
    """

    def __init__(self, data: Optional[Source] = None):
        """
        Initialize a BinaryStream.

        Args:
            data: Raw bytes, a BytesIO, or any binary file-like object.
                  Non-seekable streams are drained into memory first.
                  None creates an empty stream for writing.
        """
        if data is None:
            self._stream = BytesIO()
        elif isinstance(data, (bytes, bytearray, memoryview)):
            self._stream = BytesIO(bytes(data))
        elif hasattr(data, 'seekable') and data.seekable():
            self._stream = data
        else:
            self._stream = BytesIO(data.read())

    # ========== Position and Length ==========

    @property
    def position(self) -> int:
        """Get current stream position."""
        return self._stream.tell()

    @position.setter
    def position(self, value: int) -> None:
        """Set stream position."""
        self._stream.seek(value)

    @property
    def length(self) -> int:
        """Get stream length."""
        current = self._stream.tell()
        self._stream.seek(0, 2)
        length = self._stream.tell()
        self._stream.seek(current)
        return length

    @property
    def remaining(self) -> int:
        """Number of bytes left between the current position and the end."""
        return max(self.length - self.position, 0)

    # ========== Primitive Readers ==========

    def read_bytes(self, count: int) -> bytes:
        """
        Read exactly `count` raw bytes.

        Raises:
            TruncatedInputError: If fewer than `count` bytes remain
        """
        offset = self.position
        data = self._stream.read(count)
        if len(data) < count:
            raise TruncatedInputError(
                f"Truncated input: needed {count} bytes at offset {offset}, got {len(data)}"
            )
        return data

    def skip(self, count: int) -> None:
        """
        Advance past `count` bytes without reading them.

        Raises:
            TruncatedInputError: If fewer than `count` bytes remain
        """
        remaining = self.remaining
        if count > remaining:
            raise TruncatedInputError(
                f"Truncated input: cannot skip {count} bytes at offset {self.position}, "
                f"only {remaining} left"
            )
        self.position = self.position + count

    def read_uint32(self) -> int:
        """Read an unsigned 32-bit integer."""
        return struct.unpack('<I', self.read_bytes(4))[0]

    def read_uint64(self) -> int:
        """Read an unsigned 64-bit integer."""
        return struct.unpack('<Q', self.read_bytes(8))[0]

    def read_uint64_array(self, count: int) -> List[int]:
        """Read an array of uint64 values."""
        if count <= 0:
            return []
        data = self.read_bytes(count * 8)
        return list(struct.unpack(f'<{count}Q', data))

    # ========== Write Methods ==========

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes."""
        self._stream.write(data)

    def write_uint32(self, value: int) -> None:
        """Write an unsigned 32-bit integer."""
        self.write_bytes(struct.pack('<I', value))

    def write_uint64(self, value: int) -> None:
        """Write an unsigned 64-bit integer."""
        self.write_bytes(struct.pack('<Q', value))

    def write_uint64_array(self, values: List[int]) -> None:
        """Write an array of uint64 values."""
        if values:
            self.write_bytes(struct.pack(f'<{len(values)}Q', *values))

    # ========== Utility Methods ==========

    def get_data(self) -> bytes:
        """Get the underlying data."""
        current = self.position
        self.position = 0
        data = self._stream.read()
        self.position = current
        return data

    def dispose(self) -> None:
        """Close the stream."""
        self._stream.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.dispose()
