"""
Tests for airframe/mass_model.py - point masses and center of gravity.
"""
import itertools

import pytest


class TestNoseMass:
    """Tests for the nose mass estimate."""

    def test_solid_cone_estimate(self, default_design):
        from airframe import estimate_nose_mass

        assert estimate_nose_mass(default_design.geometry) == pytest.approx(0.020944, rel=1e-4)

    def test_user_mass_wins(self, alpha_design):
        from airframe import nose_mass

        assert nose_mass(alpha_design) == 0.008

    def test_estimate_used_when_unset(self, default_design):
        from airframe import nose_mass, estimate_nose_mass

        assert nose_mass(default_design) == pytest.approx(estimate_nose_mass(default_design.geometry))


class TestMassComponents:
    """Tests for building the component list."""

    def test_default_components(self, default_design):
        from airframe import build_mass_components

        components = build_mass_components(default_design, 0.036)
        by_name = {c.name: c for c in components}

        assert [c.name for c in components] == ["nose", "body", "fins", "payload", "motor"]
        assert by_name["nose"].position == pytest.approx(0.075)
        assert by_name["body"].position == pytest.approx(0.275)
        assert by_name["fins"].position == pytest.approx(0.43)
        assert by_name["payload"].position == 0.15
        assert by_name["motor"].position == 0.42
        assert by_name["motor"].mass == 0.036

    def test_massless_payload_skipped(self, alpha_design):
        from airframe import build_mass_components

        names = [c.name for c in build_mass_components(alpha_design, 0.036)]
        assert "payload" not in names

    def test_total_mass(self, default_design):
        from airframe import build_mass_components, total_mass

        components = build_mass_components(default_design, 0.036)
        assert total_mass(components) == pytest.approx(0.116944, rel=1e-4)


class TestCenterOfGravity:
    """Tests for the mass-weighted CG."""

    def test_single_component(self):
        from airframe import MassComponent, center_of_gravity

        assert center_of_gravity([MassComponent(0.3, 0.05)]) == 0.3

    def test_two_equal_masses(self):
        from airframe import MassComponent, center_of_gravity

        cg = center_of_gravity([MassComponent(0.1, 1.0), MassComponent(0.5, 1.0)])
        assert cg == pytest.approx(0.3)

    def test_empty_list(self):
        from airframe import center_of_gravity

        assert center_of_gravity([]) == 0.0

    def test_zero_mass(self):
        from airframe import MassComponent, center_of_gravity

        assert center_of_gravity([MassComponent(0.2, 0.0), MassComponent(0.4, 0.0)]) == 0.0

    def test_order_independent(self, default_design):
        from airframe import build_mass_components, center_of_gravity

        components = build_mass_components(default_design, 0.036)
        expected = center_of_gravity(components)

        for perm in itertools.permutations(components):
            assert center_of_gravity(perm) == pytest.approx(expected, rel=1e-12)

    def test_default_design(self, default_design):
        from airframe import build_mass_components, center_of_gravity

        cg = center_of_gravity(build_mass_components(default_design, 0.036))
        assert cg == pytest.approx(0.27569, rel=1e-4)

    def test_heavier_nose_moves_cg_forward(self, default_design):
        from airframe import build_mass_components, center_of_gravity

        base = center_of_gravity(build_mass_components(default_design, 0.036))
        heavy = center_of_gravity(
            build_mass_components(default_design.with_updates(nose_mass=0.05), 0.036)
        )
        assert heavy < base

    def test_accepts_generator(self):
        from airframe import MassComponent, center_of_gravity

        cg = center_of_gravity(MassComponent(x, 1.0) for x in (0.1, 0.2, 0.3))
        assert cg == pytest.approx(0.2)
