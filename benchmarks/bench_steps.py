"""
Microbenchmark: time per frame vs number of entities.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from kinematics_sim.orchestrator import MotionOrchestrator
from kinematics_sim.profiler import Profiler
from kinematics_sim.types import MotionType

def run(n: int, frames: int = 300, drag: str = "none"):
    prof = Profiler()
    sim = MotionOrchestrator(profiler=prof)

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)
    modes = list(MotionType)

    for k in range(n):
        x = 0.5 * (k % 20) + 0.01 * float(rng.normal())
        y = 5.0 + 10.0 * float(rng.random())
        sim.spawn(
            (x, y, 0.0),
            motion_type=modes[k % len(modes)],
            velocity_mag=5.0 + float(rng.random()),
            direction_angle=360.0 * float(rng.random()),
            vertical_angle=45.0,
            drag_mode=drag,
            launch=True,
        )

    # warmup
    for _ in range(30):
        sim.update(1 / 60)

    t0 = time.perf_counter()
    for _ in range(frames):
        sim.update(1 / 60)
    t1 = time.perf_counter()

    per_frame = (t1 - t0) / frames
    return per_frame, prof.stats.summary()

if __name__ == "__main__":
    for drag in ["none", "quadratic"]:
        for n in [10, 50, 100, 250, 500]:
            per_frame, summary = run(n, drag=drag)
            print(f"drag={drag:9s} N={n:4d}  frame={1e3*per_frame:8.3f} ms  frames/s={1/per_frame:8.1f}")
            if "update" in summary:
                print(" ", "update", summary["update"])
        print()
