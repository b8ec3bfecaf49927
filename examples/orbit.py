import numpy as np
from kinematics_sim.orchestrator import MotionOrchestrator

sim = MotionOrchestrator()
sat = sim.spawn((0.0, 2.0, 0.0), motion_type="circular", circular_radius=3.0, angular_velocity=2.0, launch=True)

period = 2 * np.pi / sat.orbit.angular_velocity
steps = 360
for _ in range(steps):
    sim.update(period / steps)

print("centre:", sat.orbit_center, "position:", sat.position)
print("speed:", sat.stats.speed, "centripetal:", sat.stats.centripetal_accel)
