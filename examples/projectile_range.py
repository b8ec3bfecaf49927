from kinematics_sim.orchestrator import ProjectileOrchestrator
from kinematics_sim.renderer import DebugRenderer

sim = ProjectileOrchestrator()
renderer = DebugRenderer(verbose=False)

for angle in (15.0, 30.0, 45.0, 60.0, 75.0):
    p = sim.spawn((0.0, 0.0, 0.0), direction=(1.0, 0.0, 0.0), velocity=20.0, angle=angle)
    s = p.compute_stats()
    print(f"θ={angle:4.1f}°  R={s.range:6.2f} m  H={s.max_height:5.2f} m  T={s.flight_time:4.2f} s")
    p.launch()

frame = 0
while sim.count:
    sim.update(1 / 60)
    frame += 1
    if frame % 30 == 0:
        renderer.render(sim)
