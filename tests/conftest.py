import pytest

from charges_fields import ChargeConfiguration, FieldMath, PointCharge


@pytest.fixture
def dipole():
    """+1 at (-1, 0), -1 at (1, 0)."""
    board = ChargeConfiguration()
    board.add(PointCharge(+1, (-1.0, 0.0)))
    board.add(PointCharge(-1, (1.0, 0.0)))
    return board


@pytest.fixture
def dipole_field(dipole):
    return FieldMath(dipole)
