"""
Drag coefficient vs Mach number and drag force.

Subsonic: constant ~0.35. Transonic (0.8-1.2): linear rise toward 1.0
with a sinusoidal spike on top, modelling the transonic drag rise.
Supersonic: ~0.6, slowly decreasing, floored two Mach numbers above the
band.
"""

import numpy as np

SUBSONIC_CD = 0.35
TRANSONIC_START = 0.8
TRANSONIC_END = 1.2
TRANSONIC_TARGET_CD = 1.0
TRANSONIC_SPIKE = 0.3
SUPERSONIC_CD = 0.6
SUPERSONIC_SLOPE = 0.02  # Cd drop per unit Mach above the band
SUPERSONIC_MACH_SPAN = 2.0  # Cd stops decreasing past this many Mach above the band


def drag_coefficient(mach):
    """Drag coefficient for a Mach number (float or array)"""
    m = np.asarray(mach, dtype=float)

    t = (m - TRANSONIC_START) / (TRANSONIC_END - TRANSONIC_START)
    transonic = (
        SUBSONIC_CD
        + t * (TRANSONIC_TARGET_CD - SUBSONIC_CD)
        + TRANSONIC_SPIKE * np.sin(np.pi * t)
    )
    supersonic = SUPERSONIC_CD - SUPERSONIC_SLOPE * np.minimum(
        m - TRANSONIC_END, SUPERSONIC_MACH_SPAN
    )

    cd = np.where(
        m < TRANSONIC_START,
        SUBSONIC_CD,
        np.where(m <= TRANSONIC_END, transonic, supersonic),
    )

    if np.ndim(mach) == 0:
        return float(cd)
    return cd


def drag_force_magnitude(air_density, speed, cd, reference_area):
    """
    Drag force (N): F = 0.5 * rho * v^2 * Cd * A

    Magnitude only; the caller applies the direction (opposing velocity).
    """
    return 0.5 * air_density * speed * speed * cd * reference_area
