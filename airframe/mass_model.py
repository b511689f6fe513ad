"""
Center of gravity from a list of point masses.

Component positions are the center of each part, measured from the nose
tip. The list is built fresh for each computation and never stored.
"""
import logging
from typing import Iterable, List

import numpy as np

from .airframe import RocketDesign
from .components import MassComponent, RocketGeometry

logger = logging.getLogger(__name__)

# Typical for plastic/balsa nose cones
NOSE_DENSITY = 500.0  # kg/m^3


def estimate_nose_mass(geometry: RocketGeometry, density: float = NOSE_DENSITY) -> float:
    """Mass of a solid cone with the nose length and body diameter (kg)"""
    return (1 / 3) * np.pi * geometry.body_radius**2 * geometry.nose_length * density


def nose_mass(design: RocketDesign) -> float:
    """User supplied nose mass, or the solid cone estimate"""
    if design.nose_mass is not None:
        return design.nose_mass
    return float(estimate_nose_mass(design.geometry))


def build_mass_components(design: RocketDesign, motor_mass: float) -> List[MassComponent]:
    """
    Build point masses for the design.

    Args:
        design: Rocket design
        motor_mass: Loaded motor mass, propellant + casing (kg)

    Returns:
        Nose, body, fins, payload (only if it has mass) and motor
    """
    g = design.geometry

    components = [
        # Solid cone CG is 3/4 of the length from the apex
        MassComponent(0.75 * g.nose_length, nose_mass(design), "nose"),
        MassComponent(g.nose_length + g.body_length / 2, design.body_mass, "body"),
        # Planform centroid approximation
        MassComponent(
            g.fin_root_leading_edge + (g.fin_root_chord + g.fin_tip_chord) / 4,
            design.fin_mass,
            "fins",
        ),
    ]

    if design.payload_mass > 0:
        components.append(MassComponent(design.payload_position, design.payload_mass, "payload"))

    components.append(MassComponent(design.motor_position, motor_mass, "motor"))

    return components


def total_mass(components: Iterable[MassComponent]) -> float:
    return sum(c.mass for c in components)


def center_of_gravity(components: Iterable[MassComponent]) -> float:
    """CG = sum(m_i * x_i) / sum(m_i) from nose tip (m); 0 if there is no mass"""
    sum_mx = 0.0
    sum_m = 0.0
    for c in components:
        sum_mx += c.mass * c.position
        sum_m += c.mass

    if sum_m <= 0:
        logger.debug("No mass in component list, CG defaults to 0")
        return 0.0
    return sum_mx / sum_m
