"""
r1cs-wtns
Binary codec for R1CS constraint system and WTNS witness files.

Both containers share one design: a 4-byte magic, a version, a section
count, then typed length-prefixed sections whose field elements all have the
same fixed byte width.
"""

__version__ = "0.1.0"

from .config import Config
from .errors import (
    FormatError, BadMagicError, UnsupportedVersionError, FieldWidthMismatchError,
    SectionSizeMismatchError, TruncatedInputError, TooManySectionsError,
    UnexpectedSectionError, CountMismatchError,
)
from .formats.field_element import FieldElement
from .formats.r1cs_structures import R1csFile, R1csHeader, Constraint, Term
from .formats.wtns_structures import WtnsFile, WtnsHeader
from .formats.r1cs import read_r1cs, write_r1cs
from .formats.wtns import read_wtns, write_wtns

__all__ = [
    'Config', 'FieldElement',
    'R1csFile', 'R1csHeader', 'Constraint', 'Term', 'read_r1cs', 'write_r1cs',
    'WtnsFile', 'WtnsHeader', 'read_wtns', 'write_wtns',
    'FormatError', 'BadMagicError', 'UnsupportedVersionError', 'FieldWidthMismatchError',
    'SectionSizeMismatchError', 'TruncatedInputError', 'TooManySectionsError',
    'UnexpectedSectionError', 'CountMismatchError', '__version__',
]
