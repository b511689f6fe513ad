"""
Rocket Airframe Module

Provides the rocket design value types and the static stability models:
Barrowman center of pressure, point-mass center of gravity and the
stability margin in calibers.

Example usage:
    from airframe import RocketDesign, center_of_pressure

    # Load from a YAML design file
    design = RocketDesign.load("my_rocket.yaml")

    # Or use the reference design
    design = RocketDesign.default()

    print(f"CP: {center_of_pressure(design.geometry) * 1000:.1f} mm from nose")
"""

from .airframe import RocketDesign
from .components import (
    MassComponent,
    NoseShape,
    RocketGeometry,
)
from .barrowman import (
    NormalForceTerm,
    center_of_pressure,
    center_of_pressure_from_terms,
    fin_terms,
    nose_terms,
    reference_area,
)
from .mass_model import (
    NOSE_DENSITY,
    build_mass_components,
    center_of_gravity,
    estimate_nose_mass,
    nose_mass,
    total_mass,
)
from .stability import (
    DEFAULT_MIN_STABLE_CALIBERS,
    is_stable,
    stability_margin_calibers,
)

__all__ = [
    "RocketDesign",
    "RocketGeometry",
    "NoseShape",
    "MassComponent",
    "NormalForceTerm",
    "center_of_pressure",
    "center_of_pressure_from_terms",
    "fin_terms",
    "nose_terms",
    "reference_area",
    "NOSE_DENSITY",
    "build_mass_components",
    "center_of_gravity",
    "estimate_nose_mass",
    "nose_mass",
    "total_mass",
    "DEFAULT_MIN_STABLE_CALIBERS",
    "is_stable",
    "stability_margin_calibers",
]
