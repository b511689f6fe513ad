"""
Pytest fixtures for flight simulation tests.
"""
import pytest

import matplotlib

matplotlib.use("Agg")


@pytest.fixture
def default_design():
    """Built-in reference design (40 mm, cone nose, Estes C6)."""
    from airframe import RocketDesign

    return RocketDesign.default()


@pytest.fixture
def alpha_design():
    """Estes Alpha III style design."""
    from airframe import RocketDesign

    return RocketDesign.estes_alpha()


@pytest.fixture
def c6_motor():
    from motor_catalog import get_motor

    return get_motor("estes-c6")


@pytest.fixture
def c6_params(c6_motor):
    """Light rocket (0.1 kg dry) on an Estes C6, 40 mm body."""
    import numpy as np
    from flight_integrator import SimulationParams

    return SimulationParams(
        reference_area=np.pi * 0.02**2,
        dry_mass=0.1,
        motor=c6_motor,
    )


@pytest.fixture
def c6_trajectory(c6_params):
    """Full run of the light C6 rocket at 60 Hz."""
    from trajectory_runner import run

    return run(c6_params)


@pytest.fixture
def design_file(tmp_path, default_design):
    """Default design written to a temporary YAML file."""
    path = tmp_path / "design.yaml"
    default_design.save_yaml(path)
    return path


@pytest.fixture
def unknown_motor_design_file(tmp_path, default_design):
    """Design file naming a motor that is not in the catalog."""
    path = tmp_path / "unknown_motor.yaml"
    default_design.with_updates(motor_id="acme-z99").save_yaml(path)
    return path


@pytest.fixture
def config_file(tmp_path, design_file):
    """Flight config pointing at the temporary design file."""
    config_content = f"""
design_file: {design_file}
simulation:
  dt: 0.02
  max_time: 60.0
  trail_capacity: 50
stability:
  min_stable_calibers: 1.0
logging:
  level: WARNING
"""
    path = tmp_path / "flight.yaml"
    path.write_text(config_content)
    return path
