"""
RocketDesign - Complete rocket definition for a flight run.

Bundles the external geometry with the mass inputs and the motor
selection. A design is immutable; editing a design means creating a new
one (see with_updates), and any change triggers a new analysis/run.
"""

from dataclasses import dataclass, field, replace, asdict
from typing import Optional, Dict, Any
from pathlib import Path
import yaml

from .components import RocketGeometry, NoseShape


_REQUIRED_FIELDS = (
    "body_mass",
    "fin_mass",
    "payload_mass",
    "payload_position",
    "motor_id",
    "motor_position",
)


@dataclass(frozen=True)
class RocketDesign:
    """
    Rocket geometry plus mass distribution and motor choice.

    Attributes:
        geometry: External shape of the rocket
        body_mass: Body tube mass (kg)
        fin_mass: Total mass of all fins (kg)
        payload_mass: Payload mass (kg), ignored for CG when zero
        payload_position: Payload position from nose tip (m)
        motor_id: Motor catalog identifier, e.g. "estes-c6"
        motor_position: Motor center position from nose tip (m)
        nose_mass: Nose cone mass (kg); estimated from the geometry if None
        name: Descriptive name
    """

    geometry: RocketGeometry = field(default_factory=RocketGeometry)
    body_mass: float = 0.03
    fin_mass: float = 0.01
    payload_mass: float = 0.02
    payload_position: float = 0.15
    motor_id: str = "estes-c6"
    motor_position: float = 0.42
    nose_mass: Optional[float] = None
    name: str = "Unnamed Rocket"

    def __post_init__(self):
        if not isinstance(self.geometry, RocketGeometry):
            raise TypeError(
                f"geometry must be a RocketGeometry, got {type(self.geometry).__name__}"
            )
        if not isinstance(self.motor_id, str):
            raise TypeError(f"motor_id must be a string, got {self.motor_id!r}")

        for name in ("body_mass", "fin_mass", "payload_mass"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.nose_mass is not None and self.nose_mass < 0:
            raise ValueError(f"nose_mass must be >= 0, got {self.nose_mass}")

    def with_updates(self, **changes) -> "RocketDesign":
        """
        Create a new design with some fields changed.

        A "geometry" entry may be a dict of geometry fields to change.
        """
        geometry_changes = changes.pop("geometry", None)
        if isinstance(geometry_changes, dict):
            changes["geometry"] = replace(self.geometry, **geometry_changes)
        elif geometry_changes is not None:
            changes["geometry"] = geometry_changes
        return replace(self, **changes)

    def summary(self) -> str:
        """Return a human-readable summary of the design"""
        g = self.geometry
        lines = [
            f"Design: {self.name}",
            f"  Length: {g.total_length*1000:.1f} mm",
            f"  Diameter: {g.body_diameter*1000:.1f} mm",
            f"  Nose: {g.nose_shape.value}, {g.nose_length*1000:.1f} mm",
            f"  Fins: {g.num_fins}x, semispan={g.fin_semispan*1000:.1f}mm",
            f"  Motor: {self.motor_id} at {self.motor_position*1000:.1f} mm",
        ]
        if self.payload_mass > 0:
            lines.append(
                f"  Payload: {self.payload_mass*1000:.1f} g at "
                f"{self.payload_position*1000:.1f} mm"
            )
        return "\n".join(lines)

    # Serialization methods

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization"""
        data = asdict(self)
        data["geometry"]["nose_shape"] = self.geometry.nose_shape.value
        if self.nose_mass is None:
            data.pop("nose_mass")
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RocketDesign":
        """
        Create a design from a dictionary.

        Raises:
            ValueError: If the structure is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Design data must be a mapping, got {type(data).__name__}")

        data = dict(data)  # Copy to avoid mutation
        geometry_data = data.pop("geometry", None)
        if not isinstance(geometry_data, dict):
            raise ValueError("Design is missing the 'geometry' section")

        missing = [name for name in _REQUIRED_FIELDS if name not in data]
        if missing:
            raise ValueError(f"Design is missing required fields: {missing}")

        try:
            geometry = RocketGeometry(**geometry_data)
            return cls(geometry=geometry, **data)
        except TypeError as e:
            raise ValueError(f"Malformed design: {e}") from e

    def save_yaml(self, path: str):
        """Save design to YAML file"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def load_yaml(cls, path: str) -> "RocketDesign":
        """Load design from YAML file"""
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data)

    @classmethod
    def load(cls, path: str) -> "RocketDesign":
        """
        Load design from file (auto-detect format).

        Args:
            path: Path to a .yaml/.yml design file

        Returns:
            RocketDesign instance
        """
        path = Path(path)

        if path.suffix.lower() in (".yaml", ".yml"):
            return cls.load_yaml(str(path))
        else:
            raise ValueError(f"Unsupported design file format: {path.suffix}")

    # Factory methods for common rockets

    @classmethod
    def default(cls) -> "RocketDesign":
        """
        Reference design: 40 mm, three swept fins, cone nose, Estes C6.

        Roughly 45 cm long and stable by a little under two calibers.
        """
        return cls(
            name="Default C6 Rocket",
            geometry=RocketGeometry(
                nose_length=0.1,
                nose_shape=NoseShape.CONE,
                body_diameter=0.04,
                body_length=0.35,
                fin_root_leading_edge=0.4,
                fin_root_chord=0.08,
                fin_tip_chord=0.04,
                fin_semispan=0.04,
                fin_sweep=0.02,
                num_fins=3,
            ),
            body_mass=0.03,
            fin_mass=0.01,
            payload_mass=0.02,
            payload_position=0.15,
            motor_id="estes-c6",
            motor_position=0.42,
        )

    @classmethod
    def estes_alpha(cls) -> "RocketDesign":
        """
        Estes Alpha III style rocket.

        Classic beginner rocket designed for Estes C6 motors.
        Approximately 31cm long, 24mm diameter.
        """
        return cls(
            name="Estes Alpha III",
            geometry=RocketGeometry(
                nose_length=0.07,
                nose_shape=NoseShape.OGIVE,
                body_diameter=0.024,
                body_length=0.24,
                fin_root_leading_edge=0.26,
                fin_root_chord=0.05,
                fin_tip_chord=0.025,
                fin_semispan=0.04,
                fin_sweep=0.025,
                num_fins=4,
            ),
            body_mass=0.012,
            fin_mass=0.006,
            nose_mass=0.008,
            payload_mass=0.0,
            payload_position=0.0,
            motor_id="estes-c6",
            motor_position=0.275,
        )
