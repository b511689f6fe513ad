"""
Atmospheric model for flight simulation.

ISA-like temperature profile (linear lapse to the tropopause, constant
above) with an exponential density approximation. Pressure is derived
from the ideal gas law with the same density and temperature so the
three stay consistent.

All functions are pure and accept either a float altitude or a numpy
array of altitudes (m). Altitudes below sea level are clamped to 0.

Usage:
    from atmosphere import density, mach_number

    rho = density(1500.0)
    mach = mach_number(250.0, 1500.0)
"""

import numpy as np

R_AIR = 287.05  # J/(kg*K)
GAMMA_AIR = 1.4
T0 = 288.15  # K at sea level
RHO0 = 1.225  # kg/m^3 at sea level
LAPSE_RATE = 0.0065  # K/m up to the tropopause
TROPOPAUSE_ALTITUDE = 11000.0  # m
T_TROPOPAUSE = 216.65  # K
DENSITY_SCALE_HEIGHT = 7400.0  # m

# Sea-level pressure (Pa), reference for the thrust altitude correction
SEA_LEVEL_PRESSURE = 101325.0


def _as_output(value, altitude):
    """Return a float for scalar input, an array for array input"""
    if np.ndim(altitude) == 0:
        return float(value)
    return value


def _clamp(altitude):
    return np.maximum(np.asarray(altitude, dtype=float), 0.0)


def temperature(altitude):
    """Temperature (K). Linear lapse to 11 km, then constant."""
    h = _clamp(altitude)
    T = np.where(h <= TROPOPAUSE_ALTITUDE, T0 - LAPSE_RATE * h, T_TROPOPAUSE)
    return _as_output(T, altitude)


def density(altitude):
    """Density (kg/m^3): rho0 * exp(-h / 7400)"""
    h = _clamp(altitude)
    return _as_output(RHO0 * np.exp(-h / DENSITY_SCALE_HEIGHT), altitude)


def pressure(altitude):
    """Pressure (Pa) as rho * R * T from the density and temperature above"""
    return _as_output(
        np.asarray(density(altitude)) * R_AIR * np.asarray(temperature(altitude)),
        altitude,
    )


def speed_of_sound(altitude):
    """Speed of sound (m/s): a = sqrt(gamma * R * T)"""
    T = np.asarray(temperature(altitude))
    return _as_output(np.sqrt(GAMMA_AIR * R_AIR * T), altitude)


def mach_number(velocity, altitude):
    """Mach number for a speed (m/s) at altitude; 0 where a <= 0"""
    a = np.asarray(speed_of_sound(altitude))
    v = np.asarray(velocity, dtype=float)
    safe_a = np.where(a > 0, a, 1.0)
    mach = np.where(a > 0, v / safe_a, 0.0)
    if np.ndim(velocity) == 0 and np.ndim(altitude) == 0:
        return float(mach)
    return mach
