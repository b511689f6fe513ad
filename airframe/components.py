"""
Rocket geometry definitions for stability and flight modeling.

The geometry is a single immutable value describing the external shape
of a single-stage rocket: nose cone, cylindrical body tube and one
trapezoidal fin set. Mass bookkeeping uses lightweight MassComponent
tuples built fresh for each CG computation.

All dimensions are in SI units (meters, kilograms), measured from the
nose tip.
"""
from dataclasses import dataclass, replace, fields
from enum import Enum
from typing import NamedTuple


class NoseShape(Enum):
    """Nose cone shape types supported by the Barrowman nose terms"""
    CONE = "cone"
    OGIVE = "ogive"


class MassComponent(NamedTuple):
    """Point mass along the rocket axis."""
    position: float  # Distance from nose tip (m)
    mass: float  # kg
    name: str = ""


@dataclass(frozen=True)
class RocketGeometry:
    """
    External geometry of the rocket.

    Attributes:
        nose_length: Nose cone length (m)
        nose_shape: NoseShape.CONE or NoseShape.OGIVE
        body_diameter: Body tube outer diameter (m), also the caliber
        body_length: Body tube length (m)
        fin_root_leading_edge: Fin root leading edge from nose tip (m)
        fin_root_chord: Fin root chord (m)
        fin_tip_chord: Fin tip chord (m)
        fin_semispan: Fin span from body surface to tip (m)
        fin_sweep: Leading edge sweep length (m)
        num_fins: Number of fins in the set
    """

    nose_length: float = 0.1
    nose_shape: NoseShape = NoseShape.CONE
    body_diameter: float = 0.04
    body_length: float = 0.35
    fin_root_leading_edge: float = 0.4
    fin_root_chord: float = 0.08
    fin_tip_chord: float = 0.04
    fin_semispan: float = 0.04
    fin_sweep: float = 0.02
    num_fins: int = 3

    def __post_init__(self):
        if not isinstance(self.nose_shape, NoseShape):
            # Accept the plain string form used in YAML files
            try:
                object.__setattr__(self, "nose_shape", NoseShape(self.nose_shape))
            except ValueError:
                raise ValueError(
                    f"Unsupported nose shape: {self.nose_shape!r}. "
                    f"Available: {[s.value for s in NoseShape]}"
                )

        for f in fields(self):
            if f.name == "nose_shape":
                continue
            value = getattr(self, f.name)
            if value < 0:
                raise ValueError(f"{f.name} must be >= 0, got {value}")

    @property
    def body_radius(self) -> float:
        return self.body_diameter / 2

    @property
    def total_length(self) -> float:
        """Nose tip to aft end of the body tube (m)"""
        return self.nose_length + self.body_length

    def with_fins_clamped(self, margin: float = 0.01) -> "RocketGeometry":
        """
        Return a copy with the fin leading edge moved inside the body tube.

        The models assume the fin root sits on the body tube; this is the
        clamp a design editor applies after every geometry change.
        """
        lower = self.nose_length + margin
        upper = self.nose_length + self.body_length - margin
        leading_edge = max(lower, min(self.fin_root_leading_edge, upper))
        if leading_edge == self.fin_root_leading_edge:
            return self
        return replace(self, fin_root_leading_edge=leading_edge)
