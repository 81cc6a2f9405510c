"""
IO module for binary stream handling and section framing.
"""

from .binary_stream import BinaryStream
from .sections import (
    SECTION_HEADER_SIZE, SectionType, SectionHeader,
    read_section_header, expect_section, write_section_header,
)

__all__ = [
    'BinaryStream', 'SECTION_HEADER_SIZE', 'SectionType', 'SectionHeader',
    'read_section_header', 'expect_section', 'write_section_header',
]
