"""
R1CS format structure definitions.

Layout (all integers little-endian):
    "r1cs" | version (u32) | section count (u32) | Header | Constraints | WireMap
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

from ..errors import FieldWidthMismatchError, CountMismatchError
from ..io.sections import SectionType
from .field_element import FieldElement, DEFAULT_FIELD_SIZE


# R1CS Magic and version
R1CS_MAGIC = b"r1cs"
R1CS_VERSION = 1

# Written section count; not checked on read
R1CS_SECTION_COUNT = 3


class R1csSectionType(SectionType):
    """R1CS section IDs."""
    HEADER = 1
    CONSTRAINT = 2
    WIRE2LABELID_MAP = 3
    UNKNOWN = 0xFFFFFFFF


def r1cs_header_size(field_size: int) -> int:
    """field_size, five u32 counters and n_labels (u64) around the prime."""
    return 6 * 4 + 8 + field_size


@dataclass
class R1csHeader:
    """R1CS header section."""
    prime: FieldElement
    n_wires: int = 0
    n_pub_out: int = 0
    n_pub_in: int = 0
    n_prvt_in: int = 0
    n_labels: int = 0
    n_constraints: int = 0


@dataclass(frozen=True)
class Term:
    """One (wire, coefficient) pair of a linear combination."""
    wire_id: int
    coefficient: FieldElement


# Ordered so that duplicates and wire order survive a round trip
LinearCombination = List[Term]


@dataclass
class Constraint:
    """
    A rank-1 constraint A * w . B * w = C * w.

    Each combination is an ordered list of terms exactly as stored on disk.
    """
    a: LinearCombination = field(default_factory=list)
    b: LinearCombination = field(default_factory=list)
    c: LinearCombination = field(default_factory=list)

    @property
    def combinations(self) -> Tuple[LinearCombination, LinearCombination, LinearCombination]:
        return self.a, self.b, self.c

    def size(self) -> int:
        """Serialized byte length: a u32 count per combination plus its terms."""
        total = 3 * 4
        for combination in self.combinations:
            total += len(combination) * 4
            total += sum(len(term.coefficient) for term in combination)
        return total

    def coefficients(self) -> Iterator[FieldElement]:
        for combination in self.combinations:
            for term in combination:
                yield term.coefficient


@dataclass
class R1csFile:
    """
    A parsed R1CS document.

    Attributes:
        header: Field prime and wire/constraint counters
        constraints: Constraints in file order
        wire_map: Label id of each wire, in wire order
        field_size: Byte width shared by every field element

    Raises:
        FieldWidthMismatchError: If the prime or any coefficient is not
            `field_size` bytes long
        CountMismatchError: If `header.n_constraints` differs from the
            number of constraints
    """
    header: R1csHeader
    constraints: List[Constraint] = field(default_factory=list)
    wire_map: List[int] = field(default_factory=list)
    field_size: int = DEFAULT_FIELD_SIZE

    def __post_init__(self):
        if len(self.header.prime) != self.field_size:
            raise FieldWidthMismatchError(
                f"Prime is {len(self.header.prime)} bytes, expected {self.field_size}"
            )
        for index, constraint in enumerate(self.constraints):
            for coefficient in constraint.coefficients():
                if len(coefficient) != self.field_size:
                    raise FieldWidthMismatchError(
                        f"Constraint {index} has a {len(coefficient)}-byte coefficient, "
                        f"expected {self.field_size}"
                    )
        # The wire map is sized by its own section, so only constraints are counted
        if len(self.constraints) != self.header.n_constraints:
            raise CountMismatchError(
                f"Header declares {self.header.n_constraints} constraints, "
                f"got {len(self.constraints)}"
            )

    @classmethod
    def read(cls, source, field_size: int) -> 'R1csFile':
        """Parse an R1CS document from bytes or a binary stream."""
        from .r1cs import read_r1cs
        return read_r1cs(source, field_size)

    @classmethod
    def from_bytes(cls, data: bytes, field_size: int) -> 'R1csFile':
        return cls.read(data, field_size)

    @classmethod
    def load(cls, path, field_size: int) -> 'R1csFile':
        """Parse an R1CS document from a file on disk."""
        with open(path, 'rb') as f:
            return cls.read(f, field_size)

    def to_bytes(self) -> bytes:
        from .r1cs import write_r1cs
        return write_r1cs(self)

    def write(self, stream) -> None:
        """Serialize into a writable binary stream."""
        stream.write(self.to_bytes())

    def save(self, path) -> None:
        with open(path, 'wb') as f:
            self.write(f)
