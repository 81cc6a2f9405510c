"""
Configuration handling for the r1cs-wtns tools.

The codec itself takes every parameter explicitly; this configuration only
feeds the command-line tool and the HTTP service.
"""

from dataclasses import dataclass, fields as dataclass_fields
from typing import Optional
import json
from pathlib import Path


@dataclass
class Config:
    """Configuration options for the r1cs-wtns tools."""

    # Field element width (bytes) expected in input files
    field_size: int = 32

    # Version recorded in newly built witness files
    wtns_version: int = 2

    # JSON export options
    json_indent: int = 1
    number_format: str = "dec"  # "dec" or "hex"
    export_constraints: bool = True
    export_wire_map: bool = True

    # Re-serialize and byte-compare after parsing in `info`
    verify_round_trip: bool = False

    @classmethod
    def load(cls, path: Optional[Path] = None) -> 'Config':
        """Load configuration from a JSON file."""
        if path is None:
            path = Path(__file__).parent / 'config.json'

        if not path.exists():
            return cls()

        with open(path, 'r') as f:
            data = json.load(f)

        # Convert camelCase to snake_case
        converted = {}
        for key, value in data.items():
            snake_key = ''.join(
                f'_{c.lower()}' if c.isupper() else c
                for c in key
            ).lstrip('_')
            converted[snake_key] = value

        # Filter to only include valid fields
        valid_fields = {f.name for f in dataclass_fields(cls)}
        filtered = {k: v for k, v in converted.items() if k in valid_fields}

        return cls(**filtered)

    def save(self, path: Path) -> None:
        """Save configuration to a JSON file."""
        # Convert snake_case to camelCase for compatibility
        data = {}
        for key, value in self.__dict__.items():
            camel_key = ''.join(
                word.capitalize() if i > 0 else word
                for i, word in enumerate(key.split('_'))
            )
            data[camel_key] = value

        with open(path, 'w') as f:
            json.dump(data, f, indent=2)
