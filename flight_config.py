#!/usr/bin/env python3
"""
Flight Simulation Configuration System

Parametrizes the run settings (timestep, limits, recovery behavior),
the stability criterion and logging, avoiding magic numbers in scripts.

Usage:
    from flight_config import FlightConfig, load_config

    # Load from YAML file
    config = load_config("configs/default_flight.yaml")

    # Or create programmatically
    config = FlightConfig.for_default_design()
"""

import logging
import yaml
from dataclasses import dataclass, field, asdict, fields
from typing import Dict, Any, Optional, List
from pathlib import Path

from trajectory_runner import DEFAULT_MAX_TIME, default_max_iterations
from flight_integrator import DEFAULT_DT, DEFAULT_TRAIL_CAPACITY, G
from airframe import DEFAULT_MIN_STABLE_CALIBERS, RocketDesign

logger = logging.getLogger(__name__)


@dataclass
class SimulationSettings:
    """Trajectory run parameters"""

    dt: float = DEFAULT_DT  # Time step (seconds) - 60Hz
    max_time: float = DEFAULT_MAX_TIME  # Time ceiling (seconds)
    max_iterations: Optional[int] = None  # Runaway guard (None = derived from max_time/dt)

    # Motor and recovery
    ignition_time: float = 0.0  # seconds after t=0
    deploy_at_apogee: bool = True  # Recovery device fires at apogee

    # Bounded per-state trail for playback
    trail_capacity: int = DEFAULT_TRAIL_CAPACITY

    @property
    def iteration_cap(self) -> int:
        if self.max_iterations is not None:
            return self.max_iterations
        return default_max_iterations(self.max_time, self.dt)


@dataclass
class StabilityConfig:
    """Static stability criterion"""

    min_stable_calibers: float = DEFAULT_MIN_STABLE_CALIBERS


@dataclass
class LoggingConfig:
    """Logging settings"""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(config: Optional[LoggingConfig] = None):
    """Configure the root logger from a LoggingConfig (scripts only)"""
    config = config or LoggingConfig()
    level = logging.getLevelName(config.level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown logging level: {config.level}")
    logging.basicConfig(level=level, format=config.format)
    logging.getLogger().setLevel(level)


def _filter_fields(cls, data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Drop unknown keys so older/newer config files still load"""
    if not data:
        return {}
    valid = {f.name for f in fields(cls)}
    unknown = set(data) - valid
    if unknown:
        logger.warning(f"Ignoring unknown {cls.__name__} keys: {sorted(unknown)}")
    return {k: v for k, v in data.items() if k in valid}


@dataclass
class FlightConfig:
    """Complete flight run configuration"""

    # Path to a YAML design file; None = RocketDesign.default()
    design_file: Optional[str] = None

    simulation: SimulationSettings = field(default_factory=SimulationSettings)
    stability: StabilityConfig = field(default_factory=StabilityConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return asdict(self)

    def save(self, path: str):
        """Save configuration to YAML file"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    @classmethod
    def load(cls, path: str) -> "FlightConfig":
        """Load configuration from YAML file"""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

        return cls(
            design_file=data.get("design_file"),
            simulation=SimulationSettings(**_filter_fields(SimulationSettings, data.get("simulation"))),
            stability=StabilityConfig(**_filter_fields(StabilityConfig, data.get("stability"))),
            logging=LoggingConfig(**_filter_fields(LoggingConfig, data.get("logging"))),
        )

    def resolve_design(self) -> RocketDesign:
        """
        Load and return the RocketDesign from design_file.

        Returns:
            RocketDesign instance (the default design if no file is set)
        """
        if not self.design_file:
            return RocketDesign.default()
        return RocketDesign.load(self.design_file)

    @classmethod
    def for_default_design(cls) -> "FlightConfig":
        """Default design, 60 Hz, two minute ceiling"""
        return cls()

    @classmethod
    def for_quick_look(cls, design_path: Optional[str] = None) -> "FlightConfig":
        """
        Coarse settings for fast what-if runs.

        Args:
            design_path: Path to design file (default: built-in design)
        """
        return cls(
            design_file=design_path,
            simulation=SimulationSettings(dt=1 / 20, max_time=60.0, trail_capacity=100),
        )

    def validate(self) -> List[str]:
        """Validate configuration and return list of warnings/errors"""
        from flight_analysis import StabilityAnalysis, UnknownMotor, analyze, build_simulation_params

        issues = []
        sim = self.simulation

        if sim.dt <= 0:
            issues.append(f"CRITICAL: simulation.dt={sim.dt} must be positive")
            return issues
        if sim.max_time <= 0:
            issues.append(f"CRITICAL: simulation.max_time={sim.max_time} must be positive")
        if sim.trail_capacity < 1:
            issues.append(f"CRITICAL: simulation.trail_capacity={sim.trail_capacity} must be >= 1")
            return issues
        if sim.dt > 0.1:
            issues.append(f"WARNING: simulation.dt={sim.dt}s is coarse (recommend <= 0.02)")

        # Try to load design and validate
        try:
            design = self.resolve_design()
        except (OSError, ValueError, TypeError) as e:
            issues.append(f"CRITICAL: Failed to load design: {e}")
            return issues

        params = build_simulation_params(design, sim)
        if isinstance(params, UnknownMotor):
            issues.append(f"CRITICAL: {params.message}")
            return issues

        # Check thrust-to-weight ratio
        motor = params.motor
        twr = motor.average_thrust / (params.wet_mass * G)
        if twr < 1.0:
            issues.append(f"CRITICAL: TWR={twr:.2f} < 1.0 - rocket cannot fly!")
        elif twr < 3.0:
            issues.append(f"WARNING: TWR={twr:.2f} is marginal (recommend > 3.0)")

        g = design.geometry
        if not (g.nose_length < g.fin_root_leading_edge < g.total_length):
            issues.append(
                f"WARNING: fin_root_leading_edge={g.fin_root_leading_edge} m is outside "
                f"the body tube [{g.nose_length}, {g.total_length}]"
            )

        result = analyze(design, self.stability.min_stable_calibers)
        if isinstance(result, StabilityAnalysis) and not result.is_stable:
            issues.append(
                f"WARNING: stability margin {result.stability_margin_calibers:.2f} cal "
                f"< {self.stability.min_stable_calibers} cal - design is unstable"
            )

        return issues


def load_config(path: str) -> FlightConfig:
    """Convenience function to load configuration"""
    return FlightConfig.load(path)


def create_default_configs():
    """Create default configuration and design files"""

    configs_dir = Path("configs")
    configs_dir.mkdir(exist_ok=True)

    RocketDesign.default().save_yaml(configs_dir / "designs" / "default_c6.yaml")
    RocketDesign.estes_alpha().save_yaml(configs_dir / "designs" / "estes_alpha.yaml")

    FlightConfig(design_file="configs/designs/default_c6.yaml").save(
        configs_dir / "default_flight.yaml"
    )
    FlightConfig.for_quick_look("configs/designs/estes_alpha.yaml").save(
        configs_dir / "quick_look.yaml"
    )

    print(f"Created configuration files in {configs_dir}/")


if __name__ == "__main__":
    create_default_configs()

    config = FlightConfig.for_default_design()
    issues = config.validate()

    print("\nConfiguration validation:")
    if issues:
        for issue in issues:
            print(f"  {issue}")
    else:
        print("  All checks passed")
