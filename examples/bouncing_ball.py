import logging

from kinematics_sim.orchestrator import MotionOrchestrator
from kinematics_sim.recorder import MotionRecorder

logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

sim = MotionOrchestrator()
ball = sim.spawn((0.0, 5.0, 0.0), motion_type="freefall", restitution=0.7, launch=True)
rec = MotionRecorder()
rec.attach(ball)

dt = 1 / 120
while ball.status == "active" and sim.time < 15.0:
    sim.update(dt)
    rec.push_sample()

print("settled after", round(sim.time, 3), "s at", ball.position)
print("height range:", rec.bounds("position"))
