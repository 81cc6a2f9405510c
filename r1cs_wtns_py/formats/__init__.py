"""
Container format codecs.

Supports:
- R1CS (rank-1 constraint systems) - version 1
- WTNS (witness assignments) - versions up to 2
"""

from .field_element import FieldElement, BN254_PRIME, DEFAULT_FIELD_SIZE
from .r1cs import R1csReader, R1csWriter, read_r1cs, write_r1cs
from .wtns import WtnsReader, WtnsWriter, read_wtns, write_wtns
from .r1cs_structures import *
from .wtns_structures import *

__all__ = [
    'FieldElement', 'BN254_PRIME', 'DEFAULT_FIELD_SIZE',
    'R1csReader', 'R1csWriter', 'read_r1cs', 'write_r1cs',
    'WtnsReader', 'WtnsWriter', 'read_wtns', 'write_wtns',
    'R1csFile', 'R1csHeader', 'Constraint', 'Term', 'R1CS_MAGIC',
    'WtnsFile', 'WtnsHeader', 'WTNS_MAGIC',
]
