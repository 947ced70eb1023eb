from charges_fields import (
    ChargeConfiguration,
    ElectricPotentialSensor,
    EquipotentialLineService,
    FieldMath,
)

board = ChargeConfiguration()
board.add_positive((-1.0, 0.0))
board.add_negative((1.0, 0.0))
board.add_positive((0.0, 1.5))
fm = FieldMath(board)

service = EquipotentialLineService(fm)
sensor = ElectricPotentialSensor((-1.5, 0.0))

# Drop the crosshair at a few places and keep the lines through it
for p in [(-1.5, 0.0), (0.0, 0.5), (1.4, -0.3), (0.0, 3.0)]:
    sensor.move_to(p)
    v = sensor.update(fm)
    curve = sensor.trace_equipotential(service)
    print(f"V={v:+.4f} at {p}: {len(curve)} pts, closed={curve.closed}, reason={curve.reason.value}")

# Moving a charge invalidates every kept line
board.move(1, (-1.0, -0.5))
for curve in service.retrace():
    print("retraced", len(curve), curve.reason.value)
