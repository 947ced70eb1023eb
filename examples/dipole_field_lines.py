import logging

from charges_fields import ChargeConfiguration, FieldMath, FieldLineService
from charges_fields.logging_config import setup_logging

setup_logging(logging.DEBUG)

board = ChargeConfiguration()
board.add_positive((-1.0, 0.0))
board.add_negative((1.0, 0.0))

fm = FieldMath(board)
service = FieldLineService(fm)

for curve in service.trace_from_charges(n_per_charge=12):
    end = curve.end
    print(f"{len(curve):5d} pts  {curve.reason.value:16s} end=({end[0]:+.3f}, {end[1]:+.3f})  arrows={len(curve.arrows)}")
