from beam_statics.domain.beam import BeamConfig
from beam_statics.domain.loads import PointLoad, UniformLoad, VaryingLoad, AppliedMoment, Torque
from beam_statics.domain.supports import Support
from beam_statics.engine.analysis import analyze


beam = BeamConfig(
    length=6.0,
    E=200e9,
    G=77e9,
    I=8.0e-5,
    J=1.2e-6,
    depth=0.3,
    supports=[
        Support(id="A", kind="fixed", position=0.0),
    ],
    loads=[
        PointLoad(id="P1", position=6.0, magnitude=5000.0),          # down+
        UniformLoad(id="q1", position=0.0, end_position=3.0, magnitude=2000.0),
        VaryingLoad(id="q2", position=3.0, end_position=6.0, magnitude=0.0, end_magnitude=1500.0),
        AppliedMoment(id="M1", position=4.0, magnitude=1000.0),     # antihorario+
        Torque(id="T1", position=6.0, magnitude=300.0),
    ],
)

res = analyze(beam)
print("clasificación =", res.classification)
for sid, r in res.reactions.items():
    print(f"  {sid}: Fy = {r.Fy:.2f} N, Mz = {r.Mz}")
print("|V|max [N]   =", res.max_shear)
print("|M|max [N·m] =", res.max_moment)
print("σmax [Pa]    =", res.max_stress)
print("|y|max [m]   =", res.max_deflection)
print("|φ|max [rad] =", res.max_angle_of_twist)
print(res.shear_inference.summary)
print(res.moment_inference.summary)
print(res.deflection_inference.summary)
print("\n".join(res.notes))
