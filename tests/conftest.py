import pytest

from builders import r1cs_bytes, wtns_bytes


@pytest.fixture
def simple_r1cs_data():
    return r1cs_bytes()


@pytest.fixture
def simple_wtns_data():
    return wtns_bytes()


@pytest.fixture
def r1cs_path(tmp_path, simple_r1cs_data):
    path = tmp_path / "simple_circuit.r1cs"
    path.write_bytes(simple_r1cs_data)
    return path


@pytest.fixture
def wtns_path(tmp_path, simple_wtns_data):
    path = tmp_path / "witness.wtns"
    path.write_bytes(simple_wtns_data)
    return path
