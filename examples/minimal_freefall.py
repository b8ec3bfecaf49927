# examples/minimal_freefall.py
from kinematics_sim.orchestrator import MotionOrchestrator

sim = MotionOrchestrator()
ball = sim.spawn((0.0, 10.0, 0.0), motion_type="freefall", bounce_enabled=False, launch=True)

dt = 1 / 240
while sim.time < 1.0:
    sim.update(dt)

print("t:", ball.elapsed_time)
print("pos:", ball.position)
print("vel:", ball.velocity)
print("time to impact:", ball.stats.time_to_impact)
