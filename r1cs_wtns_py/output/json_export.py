"""
JSON views of R1CS and WTNS documents.

The layouts follow the `r1cs export json` / `wtns export json` output of
snarkjs so the exported files can be diffed against that tooling.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union
import json

from ..config import Config
from ..formats.field_element import FieldElement
from ..formats.r1cs_structures import R1csFile, LinearCombination
from ..formats.wtns_structures import WtnsFile


def render_element(element: FieldElement, number_format: str = "dec") -> str:
    """Render a field element as a decimal or 0x-prefixed hex string."""
    value = element.to_int()
    if number_format == "hex":
        return hex(value)
    return str(value)


def _render_combination(combination: LinearCombination, number_format: str) -> Dict[str, str]:
    # Later terms overwrite earlier ones with the same wire id
    return {
        str(term.wire_id): render_element(term.coefficient, number_format)
        for term in combination
    }


def _indent(config: Config) -> Optional[int]:
    return config.json_indent if config.json_indent > 0 else None


@dataclass
class R1csJson:
    """
    snarkjs-style JSON structure for an R1CS document.

    Constraints are rendered as [A, B, C] objects keyed by wire id.
    """
    n8: int = 0
    prime: str = ""
    nVars: int = 0
    nOutputs: int = 0
    nPubInputs: int = 0
    nPrvInputs: int = 0
    nLabels: int = 0
    nConstraints: int = 0
    constraints: Optional[List[List[Dict[str, str]]]] = None
    map: Optional[List[int]] = None

    @classmethod
    def from_file(cls, r1cs: R1csFile, config: Optional[Config] = None) -> 'R1csJson':
        config = config or Config()
        header = r1cs.header
        fmt = config.number_format

        view = cls(
            n8=r1cs.field_size,
            prime=render_element(header.prime, fmt),
            nVars=header.n_wires,
            nOutputs=header.n_pub_out,
            nPubInputs=header.n_pub_in,
            nPrvInputs=header.n_prvt_in,
            nLabels=header.n_labels,
            nConstraints=header.n_constraints,
        )
        if config.export_constraints:
            view.constraints = [
                [_render_combination(comb, fmt) for comb in constraint.combinations]
                for constraint in r1cs.constraints
            ]
        if config.export_wire_map:
            view.map = list(r1cs.wire_map)
        return view

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "n8": self.n8,
            "prime": self.prime,
            "nVars": self.nVars,
            "nOutputs": self.nOutputs,
            "nPubInputs": self.nPubInputs,
            "nPrvInputs": self.nPrvInputs,
            "nLabels": self.nLabels,
            "nConstraints": self.nConstraints,
        }
        if self.constraints is not None:
            data["constraints"] = self.constraints
        if self.map is not None:
            data["map"] = self.map
        return data

    def to_json(self, indent: Optional[int] = 1) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


@dataclass
class WtnsJson:
    """snarkjs-style JSON structure for a witness: a flat list of values."""
    values: List[str] = field(default_factory=list)

    @classmethod
    def from_file(cls, wtns: WtnsFile, config: Optional[Config] = None) -> 'WtnsJson':
        config = config or Config()
        return cls(values=[render_element(v, config.number_format) for v in wtns.witness])

    def to_dict(self) -> List[str]:
        return list(self.values)

    def to_json(self, indent: Optional[int] = 1) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


def export_document(document: Union[R1csFile, WtnsFile], config: Optional[Config] = None):
    """Build the JSON view matching the document kind."""
    if isinstance(document, R1csFile):
        return R1csJson.from_file(document, config)
    if isinstance(document, WtnsFile):
        return WtnsJson.from_file(document, config)
    raise TypeError(f"Cannot export {type(document).__name__}")


def dump_json(view: Union[R1csJson, WtnsJson], path: str, config: Optional[Config] = None) -> None:
    """Save a JSON view to file."""
    config = config or Config()
    with open(path, 'w', encoding='utf-8') as f:
        f.write(view.to_json(indent=_indent(config)))


def _parse_value(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Unsupported witness value type: {type(value).__name__}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        s = value.strip()
        return int(s, 16) if s.startswith(("0x", "0X")) else int(s)
    raise ValueError(f"Unsupported witness value type: {type(value).__name__}")


def load_witness_values(obj: Any, field_size: int) -> List[FieldElement]:
    """
    Convert witness JSON into field elements.

    Accepts:
        - snarkjs: ["1", "..."]
        - objects with a "values", "witness" or "data" list

    Entries may be ints, decimal strings or 0x-prefixed hex strings. Values
    are encoded as-is; no reduction modulo the prime is performed.

    Raises:
        ValueError: If the JSON has no list of values or a value is invalid
    """
    values = None
    if isinstance(obj, list):
        values = obj
    elif isinstance(obj, dict):
        for key in ("values", "witness", "data"):
            if key in obj:
                values = obj[key]
                break

    if not isinstance(values, list):
        raise ValueError("Witness JSON does not contain an array")

    return [FieldElement.from_int(_parse_value(v), field_size) for v in values]
