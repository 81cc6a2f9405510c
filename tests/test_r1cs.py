from io import BytesIO

import pytest

from r1cs_wtns_py import (
    R1csFile, R1csHeader, Constraint, Term, FieldElement, read_r1cs, write_r1cs,
    BadMagicError, UnsupportedVersionError, FieldWidthMismatchError,
    TruncatedInputError, UnexpectedSectionError, CountMismatchError, FormatError,
)
from r1cs_wtns_py.formats.r1cs import R1csReader

from builders import (
    FS, PRIME, SIMPLE_WIRE_MAP, fe, section, r1cs_bytes, r1cs_header_body,
    constraints_body, wire_map_body, simple_r1cs_sections,
)


def test_parse_simple_circuit(simple_r1cs_data):
    r1cs = read_r1cs(simple_r1cs_data, FS)

    header = r1cs.header
    assert header.prime == FieldElement(PRIME)
    assert header.n_wires == 7
    assert header.n_pub_out == 1
    assert header.n_pub_in == 2
    assert header.n_prvt_in == 3
    assert header.n_labels == 0x03e8
    assert header.n_constraints == 3

    assert len(r1cs.constraints) == 3
    assert len(r1cs.constraints[0].a) == 2
    assert r1cs.constraints[0].a[0].wire_id == 5
    assert r1cs.constraints[0].a[0].coefficient == FieldElement(fe(3))
    assert r1cs.constraints[2].b[0].wire_id == 0
    assert r1cs.constraints[2].b[0].coefficient.data == bytes([6]) + bytes(31)
    assert len(r1cs.constraints[1].c) == 0

    assert len(r1cs.wire_map) == 7
    assert r1cs.wire_map[1] == 3


def test_count_invariants(simple_r1cs_data):
    r1cs = R1csFile.from_bytes(simple_r1cs_data, FS)
    assert len(r1cs.constraints) == r1cs.header.n_constraints
    assert len(r1cs.wire_map) == r1cs.header.n_wires


def test_round_trip_is_byte_exact(simple_r1cs_data):
    r1cs = read_r1cs(simple_r1cs_data, FS)
    serialized = write_r1cs(r1cs)
    assert len(serialized) == len(simple_r1cs_data)
    assert serialized == simple_r1cs_data


def test_read_from_stream_and_path(simple_r1cs_data, r1cs_path):
    from_stream = R1csFile.read(BytesIO(simple_r1cs_data), FS)
    from_path = R1csFile.load(r1cs_path, FS)
    assert from_stream == from_path


def test_save_and_write(tmp_path, simple_r1cs_data):
    r1cs = read_r1cs(simple_r1cs_data, FS)
    path = tmp_path / "out.r1cs"
    r1cs.save(path)
    assert path.read_bytes() == simple_r1cs_data

    sink = BytesIO()
    r1cs.write(sink)
    assert sink.getvalue() == simple_r1cs_data


def test_duplicate_wire_ids_survive_round_trip():
    constraints = [([(2, 1), (2, 5), (1, 9)], [], [(0, 1)])]
    data = r1cs_bytes([
        section(1, r1cs_header_body(n_constraints=1)),
        section(2, constraints_body(constraints)),
        section(3, wire_map_body()),
    ])
    r1cs = read_r1cs(data, FS)
    assert [t.wire_id for t in r1cs.constraints[0].a] == [2, 2, 1]
    assert write_r1cs(r1cs) == data


def test_unknown_sections_are_skipped(simple_r1cs_data):
    header, constraints, wire_map = simple_r1cs_sections()
    injected = r1cs_bytes([
        section(0x1000, b"\xaa" * 17),
        header,
        section(7, b""),
        constraints,
        section(0xABCDEF, b"custom payload"),
        wire_map,
    ], num_sections=6)
    assert read_r1cs(injected, FS) == read_r1cs(simple_r1cs_data, FS)


def test_section_count_is_not_enforced(simple_r1cs_data):
    data = r1cs_bytes(num_sections=42)
    assert read_r1cs(data, FS) == read_r1cs(simple_r1cs_data, FS)


def test_constraint_section_length_is_ignored():
    header, _, wire_map = simple_r1cs_sections()
    data = r1cs_bytes([header, section(2, constraints_body(), size=0), wire_map])
    assert len(read_r1cs(data, FS).constraints) == 3


def test_wire_map_length_comes_from_section_size():
    labels = list(range(10))
    data = r1cs_bytes([
        section(1, r1cs_header_body(n_wires=7)),
        section(2, constraints_body()),
        section(3, wire_map_body(labels)),
    ])
    assert read_r1cs(data, FS).wire_map == labels


def test_bad_magic():
    with pytest.raises(BadMagicError):
        read_r1cs(r1cs_bytes(magic=b"r1cz"), FS)


@pytest.mark.parametrize("version", [0, 2, 0xFFFFFFFF])
def test_unsupported_version(version):
    with pytest.raises(UnsupportedVersionError):
        read_r1cs(r1cs_bytes(version=version), FS)


def test_field_width_mismatch(simple_r1cs_data):
    with pytest.raises(FieldWidthMismatchError):
        read_r1cs(simple_r1cs_data, 48)


def test_declared_field_size_must_match():
    _, constraints, wire_map = simple_r1cs_sections()
    data = r1cs_bytes([section(1, r1cs_header_body(field_size=8)), constraints, wire_map])
    with pytest.raises(FieldWidthMismatchError, match="8-byte"):
        read_r1cs(data, FS)


@pytest.mark.parametrize("cut", [3, 10, 50, 200, 1])
def test_truncated_input(simple_r1cs_data, cut):
    with pytest.raises(TruncatedInputError):
        read_r1cs(simple_r1cs_data[:-cut], FS)


def test_empty_input_is_truncated():
    with pytest.raises(TruncatedInputError):
        read_r1cs(b"", FS)


def test_sections_out_of_order():
    header, constraints, wire_map = simple_r1cs_sections()
    with pytest.raises(UnexpectedSectionError):
        read_r1cs(r1cs_bytes([constraints, header, wire_map]), FS)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        read_r1cs(b"nope", FS)
    assert issubclass(BadMagicError, FormatError)


def test_construct_with_wrong_prime_width_fails():
    with pytest.raises(FieldWidthMismatchError):
        R1csFile(header=R1csHeader(prime=FieldElement(PRIME[:16])), field_size=FS)


def test_construct_with_wrong_coefficient_width_fails():
    constraint = Constraint(a=[Term(0, FieldElement(b"\x01"))])
    with pytest.raises(FieldWidthMismatchError, match="Constraint 0"):
        R1csFile(header=R1csHeader(prime=FieldElement(PRIME), n_constraints=1), constraints=[constraint])


def test_construct_with_wrong_constraint_count_fails():
    with pytest.raises(CountMismatchError, match="2 constraints, got 0"):
        R1csFile(header=R1csHeader(prime=FieldElement(PRIME), n_constraints=2), constraints=[])

    with pytest.raises(CountMismatchError):
        R1csFile(header=R1csHeader(prime=FieldElement(PRIME)), constraints=[Constraint()])


def test_wire_map_length_is_not_tied_to_header():
    r1cs = R1csFile(header=R1csHeader(prime=FieldElement(PRIME), n_wires=7), wire_map=[0, 1])
    assert read_r1cs(r1cs.to_bytes(), FS) == r1cs


@pytest.mark.parametrize("field_size", [0, -1])
def test_non_positive_field_size_rejected(simple_r1cs_data, field_size):
    with pytest.raises(FieldWidthMismatchError, match="must be positive"):
        read_r1cs(simple_r1cs_data, field_size)


def test_write_built_document_sizes():
    one = FieldElement.from_int(1, 8)
    r1cs = R1csFile(
        header=R1csHeader(prime=FieldElement.from_int(97, 8), n_wires=2, n_constraints=1),
        constraints=[Constraint(a=[Term(1, one)], b=[Term(0, one), Term(1, one)])],
        wire_map=[0, 1],
        field_size=8,
    )
    data = r1cs.to_bytes()

    # magic + version + count + 3 section headers + bodies
    header_size = 6 * 4 + 8 + 8
    constraint_size = 3 * 4 + 3 * (4 + 8)
    assert len(data) == 12 + 3 * 12 + header_size + constraint_size + 2 * 8
    assert R1csReader(data, 8).num_sections == 3
    assert read_r1cs(data, 8) == r1cs


def test_constraint_size():
    one = FieldElement.from_int(1, FS)
    constraint = Constraint(a=[Term(1, one), Term(2, one)], c=[Term(3, one)])
    assert constraint.size() == 3 * 4 + 3 * (4 + FS)
    assert Constraint().size() == 12


def test_wire_map_labels_are_u64():
    labels = [0, 2**64 - 1, 2**40]
    data = r1cs_bytes([
        section(1, r1cs_header_body(n_wires=3, n_constraints=0)),
        section(2, b""),
        section(3, wire_map_body(labels)),
    ])
    r1cs = read_r1cs(data, FS)
    assert r1cs.wire_map == labels
    assert r1cs.constraints == []
    assert write_r1cs(r1cs) == data


def test_simple_wire_map(simple_r1cs_data):
    assert read_r1cs(simple_r1cs_data, FS).wire_map == SIMPLE_WIRE_MAP
