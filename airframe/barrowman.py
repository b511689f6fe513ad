"""
Barrowman center of pressure calculation.

Subsonic, small angle of attack. All distances are measured from the
nose tip. The body tube carries no normal force at zero angle of attack
in the Barrowman method, so only the nose and fin terms are summed.

Reference:
    James S. Barrowman, "The Practical Calculation of the Aerodynamic
    Characteristics of Slender Finned Vehicles", 1967.
"""
from typing import Iterable, NamedTuple

import numpy as np

from .components import NoseShape, RocketGeometry


NOSE_NORMAL_FORCE_COEFF = 2.0

# Pressure center of the nose as a fraction of nose length
_NOSE_CP_FRACTION = {
    NoseShape.CONE: 2.0 / 3.0,
    NoseShape.OGIVE: 0.466,
}


class NormalForceTerm(NamedTuple):
    """Normal force coefficient slope and where it acts (m from nose tip)"""
    cn: float
    x: float


def nose_terms(nose_length: float, shape: NoseShape) -> NormalForceTerm:
    """(CN)N = 2; XN = 2/3 LN for a cone, 0.466 LN for an ogive"""
    return NormalForceTerm(NOSE_NORMAL_FORCE_COEFF, _NOSE_CP_FRACTION[shape] * nose_length)


def fin_terms(geometry: RocketGeometry) -> NormalForceTerm:
    """
    Normal force term of a trapezoidal fin set.

    K_FB = 1 + R/(S+R)  (fin-body interference)
    (CN)F = K_FB * 4N(S/d)^2 / (1 + sqrt(1 + (2LF/(CR+CT))^2))
    LF = sqrt(S^2 + (XR + (CT-CR)/2)^2)  (mid-chord line length)
    XF = XB + XR/3 * (CR+2CT)/(CR+CT) + 1/6 * (CR^2+CT^2+CR*CT)/(CR+CT)

    Fins without chord, or on a body without diameter, contribute no
    normal force.
    """
    d = geometry.body_diameter
    R = geometry.body_radius
    S = geometry.fin_semispan
    CR = geometry.fin_root_chord
    CT = geometry.fin_tip_chord
    XR = geometry.fin_sweep
    XB = geometry.fin_root_leading_edge
    N = geometry.num_fins

    chord_sum = CR + CT
    if chord_sum <= 0 or d <= 0:
        return NormalForceTerm(0.0, XB)

    K_FB = 1 + R / (S + R)
    mid_chord_offset = XR + (CT - CR) / 2
    LF = np.sqrt(S**2 + mid_chord_offset**2)
    denom = 1 + np.sqrt(1 + (2 * LF / chord_sum) ** 2)
    CN_F = K_FB * (4 * N * (S / d) ** 2) / denom

    XF = (
        XB
        + (XR / 3) * (CR + 2 * CT) / chord_sum
        + (1 / 6) * (CR**2 + CT**2 + CR * CT) / chord_sum
    )

    return NormalForceTerm(float(CN_F), float(XF))


def center_of_pressure_from_terms(terms: Iterable[NormalForceTerm]) -> float:
    """CP = sum(CN_i * X_i) / sum(CN_i); 0 when the total coefficient is not positive"""
    terms = list(terms)
    total_cn = sum(t.cn for t in terms)
    if total_cn <= 0:
        return 0.0
    return sum(t.cn * t.x for t in terms) / total_cn


def center_of_pressure(geometry: RocketGeometry) -> float:
    """CP distance from nose tip (m)"""
    return center_of_pressure_from_terms([
        nose_terms(geometry.nose_length, geometry.nose_shape),
        fin_terms(geometry),
    ])


def reference_area(geometry: RocketGeometry) -> float:
    """Body cross-section (m^2), used for drag and stability"""
    return np.pi * geometry.body_radius**2
