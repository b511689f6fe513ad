"""
Static stability margin.

Caliber = body diameter. The margin is (CP - CG) / diameter; a rocket
is passively stable when the CP sits at least one caliber behind the CG.
"""

DEFAULT_MIN_STABLE_CALIBERS = 1.0


def stability_margin_calibers(cp_from_nose: float, cg_from_nose: float, diameter: float) -> float:
    """Stability margin in calibers; 0 for a body without diameter"""
    if diameter <= 0:
        return 0.0
    return (cp_from_nose - cg_from_nose) / diameter


def is_stable(calibers: float, min_calibers: float = DEFAULT_MIN_STABLE_CALIBERS) -> bool:
    return calibers >= min_calibers
