"""
Section scanner shared by the R1CS and WTNS containers.

A section record is a 4-byte little-endian type tag, an 8-byte little-endian
content length, then exactly that many content bytes. Tags a document kind
does not recognize are skipped so that optional sections can be added to the
format without breaking older readers.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Type, TypeVar

from .binary_stream import BinaryStream
from ..errors import TruncatedInputError, UnexpectedSectionError


# Tag (4 bytes) + content length (8 bytes)
SECTION_HEADER_SIZE = 12

S = TypeVar('S', bound='SectionType')


class SectionType(IntEnum):
    """
    Base for per-document section tag enums.

    Subclasses list their known tags plus an UNKNOWN member.
    """

    @classmethod
    def from_tag(cls: Type[S], tag: int) -> S:
        """Map a raw tag to a member, or UNKNOWN when the tag is not known."""
        member = cls._value2member_map_.get(tag)
        if member is None:
            return cls.UNKNOWN
        return member


@dataclass
class SectionHeader:
    """A decoded section record header."""
    type: SectionType
    size: int = 0
    offset: int = 0  # Stream offset where the section content starts


def read_section_header(stream: BinaryStream, section_types: Type[S]) -> SectionHeader:
    """
    Read the next recognized section header, skipping unknown sections.

    Args:
        stream: Stream positioned at a section record
        section_types: SectionType subclass for the document kind

    Returns:
        The header of the first section with a recognized tag; the stream is
        left at the start of its content.

    Raises:
        TruncatedInputError: If the stream ends inside a section header, or an
            unknown section declares more content than remains
    """
    while True:
        tag = stream.read_uint32()
        size = stream.read_uint64()
        section_type = section_types.from_tag(tag)

        if section_type != section_types.UNKNOWN:
            return SectionHeader(type=section_type, size=size, offset=stream.position)

        if size > stream.remaining:
            raise TruncatedInputError(
                f"Truncated input: unknown section 0x{tag:08X} declares {size} bytes "
                f"but only {stream.remaining} remain"
            )
        stream.skip(size)


def expect_section(stream: BinaryStream, section_types: Type[S], expected: S) -> SectionHeader:
    """Read the next recognized section header and require it to be `expected`."""
    section = read_section_header(stream, section_types)
    if section.type != expected:
        raise UnexpectedSectionError(
            f"Expected {expected.name} section, found {section.type.name} "
            f"at offset {section.offset - SECTION_HEADER_SIZE}"
        )
    return section


def write_section_header(stream: BinaryStream, section_type: SectionType, size: int) -> None:
    """Emit a section tag followed by its precomputed content length."""
    stream.write_uint32(int(section_type))
    stream.write_uint64(size)
