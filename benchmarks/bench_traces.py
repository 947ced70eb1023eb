"""
Microbenchmark: time per traced curve vs number of charges.
Run:
  python benchmarks/bench_traces.py
"""
import time
import numpy as np
from charges_fields import ChargeConfiguration, FieldMath, FieldLineService, EquipotentialLineService, PointCharge
from charges_fields.profiler import Profiler

def run(n: int, lines_per_charge: int = 8):
    prof = Profiler()
    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)

    board = ChargeConfiguration()
    for i in range(n):
        sign = 1 if i % 2 == 0 else -1
        board.add(PointCharge(sign, rng.uniform(-3.0, 3.0, size=2)))
    fm = FieldMath(board)

    field_lines = FieldLineService(fm, profiler=prof)
    equipotentials = EquipotentialLineService(fm, profiler=prof)

    t0 = time.perf_counter()
    curves = field_lines.trace_from_charges(lines_per_charge)
    for seed in rng.uniform(-3.0, 3.0, size=(lines_per_charge, 2)):
        equipotentials.trace(seed)
    t1 = time.perf_counter()

    points = sum(len(c) for c in curves)
    return t1 - t0, points, prof.stats.summary()

if __name__ == "__main__":
    for n in [2, 4, 8, 16, 32]:
        total, points, summary = run(n)
        print(f"N={n:3d}  total={1e3*total:9.2f} ms  field-line points={points}")
        for k in ["field_line", "equipotential"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
