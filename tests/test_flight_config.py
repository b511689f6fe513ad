"""
Tests for flight_config.py - configuration loading and validation.
"""
import logging

import pytest
import yaml


class TestSimulationSettings:
    """Tests for SimulationSettings class."""

    def test_default_values(self):
        from flight_config import SimulationSettings

        settings = SimulationSettings()

        assert settings.dt == pytest.approx(1 / 60)
        assert settings.max_time == 120.0
        assert settings.max_iterations is None
        assert settings.ignition_time == 0.0
        assert settings.deploy_at_apogee is True
        assert settings.trail_capacity == 500

    def test_derived_iteration_cap(self):
        from flight_config import SimulationSettings

        assert SimulationSettings(dt=0.5, max_time=10.0).iteration_cap == 30

    def test_explicit_iteration_cap(self):
        from flight_config import SimulationSettings

        assert SimulationSettings(max_iterations=42).iteration_cap == 42


class TestFlightConfig:
    """Tests for FlightConfig save/load."""

    def test_defaults(self):
        from flight_config import FlightConfig

        config = FlightConfig()

        assert config.design_file is None
        assert config.stability.min_stable_calibers == 1.0
        assert config.logging.level == "INFO"

    def test_resolve_default_design(self):
        from airframe import RocketDesign
        from flight_config import FlightConfig

        assert FlightConfig().resolve_design() == RocketDesign.default()

    def test_load(self, config_file, default_design):
        from flight_config import load_config

        config = load_config(str(config_file))

        assert config.simulation.dt == 0.02
        assert config.simulation.max_time == 60.0
        assert config.simulation.trail_capacity == 50
        assert config.simulation.ignition_time == 0.0
        assert config.logging.level == "WARNING"
        assert config.resolve_design() == default_design

    def test_save_load_round_trip(self, tmp_path):
        from flight_config import FlightConfig, SimulationSettings

        config = FlightConfig(
            design_file="configs/designs/estes_alpha.yaml",
            simulation=SimulationSettings(dt=0.01, max_iterations=5000, deploy_at_apogee=False),
        )
        path = tmp_path / "nested" / "config.yaml"
        config.save(str(path))

        assert FlightConfig.load(str(path)) == config

    def test_unknown_keys_ignored(self, tmp_path, caplog):
        from flight_config import FlightConfig

        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump({"simulation": {"dt": 0.01, "warp_factor": 9}}))

        with caplog.at_level(logging.WARNING, logger="flight_config"):
            config = FlightConfig.load(str(path))

        assert config.simulation.dt == 0.01
        assert "warp_factor" in caplog.text

    def test_empty_file_gives_defaults(self, tmp_path):
        from flight_config import FlightConfig

        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert FlightConfig.load(str(path)) == FlightConfig()

    def test_non_mapping_raises(self, tmp_path):
        from flight_config import FlightConfig

        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")

        with pytest.raises(ValueError, match="mapping"):
            FlightConfig.load(str(path))

    def test_quick_look(self):
        from flight_config import FlightConfig

        config = FlightConfig.for_quick_look("my_rocket.yaml")

        assert config.design_file == "my_rocket.yaml"
        assert config.simulation.dt == pytest.approx(0.05)
        assert config.simulation.max_time == 60.0

    def test_shipped_config(self):
        from pathlib import Path
        from flight_config import load_config

        config = load_config(str(Path(__file__).parent.parent / "configs" / "default_flight.yaml"))

        assert config.design_file == "configs/designs/default_c6.yaml"
        assert config.simulation.dt == pytest.approx(1 / 60)


class TestValidate:
    """Tests for FlightConfig.validate."""

    def test_default_config_passes(self):
        from flight_config import FlightConfig

        assert FlightConfig().validate() == []

    def test_bad_dt(self):
        from flight_config import FlightConfig, SimulationSettings

        issues = FlightConfig(simulation=SimulationSettings(dt=0.0)).validate()
        assert any("CRITICAL" in i and "dt" in i for i in issues)

    def test_coarse_dt_warning(self):
        from flight_config import FlightConfig, SimulationSettings

        issues = FlightConfig(simulation=SimulationSettings(dt=0.2)).validate()
        assert any("WARNING" in i and "coarse" in i for i in issues)

    def test_missing_design_file(self, tmp_path):
        from flight_config import FlightConfig

        issues = FlightConfig(design_file=str(tmp_path / "missing.yaml")).validate()
        assert any("Failed to load design" in i for i in issues)

    def test_unknown_motor(self, unknown_motor_design_file):
        from flight_config import FlightConfig

        issues = FlightConfig(design_file=str(unknown_motor_design_file)).validate()
        assert any("CRITICAL" in i and "acme-z99" in i for i in issues)

    def test_low_thrust_to_weight(self, tmp_path, default_design):
        from flight_config import FlightConfig

        path = tmp_path / "heavy.yaml"
        default_design.with_updates(payload_mass=1.0).save_yaml(path)

        issues = FlightConfig(design_file=str(path)).validate()
        assert any("TWR" in i and "CRITICAL" in i for i in issues)

    def test_unstable_design(self, tmp_path, default_design):
        from flight_config import FlightConfig

        path = tmp_path / "unstable.yaml"
        default_design.with_updates(geometry={"fin_semispan": 0.005}).save_yaml(path)

        issues = FlightConfig(design_file=str(path)).validate()
        assert any("unstable" in i for i in issues)

    def test_fins_off_body(self, tmp_path, default_design):
        from flight_config import FlightConfig

        path = tmp_path / "fins.yaml"
        default_design.with_updates(geometry={"fin_root_leading_edge": 0.6}).save_yaml(path)

        issues = FlightConfig(design_file=str(path)).validate()
        assert any("fin_root_leading_edge" in i for i in issues)


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_sets_root_level(self):
        from flight_config import LoggingConfig, configure_logging

        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging(LoggingConfig(level="debug"))
            assert root.level == logging.DEBUG
        finally:
            root.setLevel(previous)

    def test_unknown_level(self):
        from flight_config import LoggingConfig, configure_logging

        with pytest.raises(ValueError, match="VERBOSE"):
            configure_logging(LoggingConfig(level="VERBOSE"))
