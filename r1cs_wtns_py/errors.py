"""
Exceptions raised while decoding R1CS and WTNS containers.

Every parse failure is a FormatError (itself a ValueError), so callers can
catch the whole family at once or pick out a specific mismatch.
"""


class FormatError(ValueError):
    """Raised when a container does not match the expected binary layout."""
    pass


class BadMagicError(FormatError):
    """Raised when the 4-byte file tag is not the expected literal."""
    pass


class UnsupportedVersionError(FormatError):
    """Raised when the container version is not supported."""
    pass


class FieldWidthMismatchError(FormatError):
    """Raised when a field element width differs from the expected width."""
    pass


class SectionSizeMismatchError(FormatError):
    """Raised when a section's declared byte length is not the expected one."""
    pass


class TruncatedInputError(FormatError):
    """Raised when the input ends before the required bytes are available."""
    pass


class TooManySectionsError(FormatError):
    """Raised when a WTNS file declares more sections than supported."""
    pass


class UnexpectedSectionError(FormatError):
    """Raised when a known section shows up where a different one is required."""
    pass


class CountMismatchError(FormatError):
    """Raised when a header counter disagrees with the number of items it counts."""
    pass
