import numpy as np

from charges_fields import ChargeConfiguration, ChargeTracker, FieldMath, FieldLineService
from charges_fields.renderer import DebugRenderer

board = ChargeConfiguration()
plus = board.add_positive((-1.0, 0.0))
minus = board.add_negative((1.0, 0.0))

tracker = ChargeTracker(board)
renderer = DebugRenderer()
service = FieldLineService(FieldMath(board))

renderer.render_frame(tracker, service.trace_from_charges(4))

# Drag the positive charge in small increments; one frame per few moves
for frame in range(5):
    for _ in range(3):
        board.move(plus.id, plus.position + np.array([0.05, 0.1]))
    renderer.render_frame(tracker, service.trace_from_charges(4))

extra = board.add_positive((0.0, 2.0))
board.move(extra.id, (0.5, 2.0))
board.remove(minus.id)
renderer.render_frame(tracker)
