"""
Tests for drag_model.py - Cd(Mach) regimes and drag force.
"""
import numpy as np
import pytest


class TestDragCoefficient:
    """Tests for the subsonic/transonic/supersonic drag curve."""

    def test_subsonic_constant(self):
        from drag_model import drag_coefficient

        for mach in (0.0, 0.3, 0.5, 0.79):
            assert drag_coefficient(mach) == 0.35

    def test_continuous_entering_transonic(self):
        from drag_model import drag_coefficient

        below = drag_coefficient(0.8 - 1e-9)
        above = drag_coefficient(0.8 + 1e-9)
        assert above == pytest.approx(below, abs=1e-6)

    def test_transonic_spike(self):
        """Mid band: linear rise (0.675) plus full sine spike (0.3)."""
        from drag_model import drag_coefficient

        assert drag_coefficient(1.0) == pytest.approx(0.975)

    def test_transonic_peaks_inside_band(self):
        from drag_model import drag_coefficient

        band = drag_coefficient(np.linspace(0.8, 1.2, 81))
        assert band.max() > drag_coefficient(0.79)
        assert band.max() > drag_coefficient(1.5)

    def test_top_of_band_reaches_target(self):
        from drag_model import drag_coefficient

        assert drag_coefficient(1.2) == pytest.approx(1.0)

    def test_supersonic_branch_starts_at_0_6(self):
        """Just past the band the curve restarts from the supersonic value."""
        from drag_model import drag_coefficient

        assert drag_coefficient(1.2 + 1e-9) == pytest.approx(0.6, abs=1e-6)

    def test_supersonic_decreasing(self):
        from drag_model import drag_coefficient

        assert drag_coefficient(1.5) == pytest.approx(0.594)
        assert drag_coefficient(2.2) == pytest.approx(0.58)
        assert drag_coefficient(2.2) < drag_coefficient(1.5)

    def test_supersonic_floor(self):
        from drag_model import drag_coefficient

        assert drag_coefficient(3.2) == pytest.approx(0.56)
        assert drag_coefficient(5.0) == pytest.approx(0.56)
        assert drag_coefficient(10.0) == pytest.approx(0.56)

    def test_scalar_returns_float(self):
        from drag_model import drag_coefficient

        assert isinstance(drag_coefficient(0.5), float)
        assert isinstance(drag_coefficient(1.0), float)

    def test_array_input(self):
        from drag_model import drag_coefficient

        cd = drag_coefficient(np.array([0.5, 1.0, 2.0]))
        assert cd.shape == (3,)
        assert cd[0] == 0.35
        assert cd[1] == pytest.approx(0.975)
        assert cd[2] == pytest.approx(0.584)


class TestDragForce:
    """Tests for F = 1/2 rho v^2 Cd A."""

    def test_known_value(self):
        from drag_model import drag_force_magnitude

        assert drag_force_magnitude(1.225, 10.0, 0.35, 0.01) == pytest.approx(0.214375)

    def test_zero_speed(self):
        from drag_model import drag_force_magnitude

        assert drag_force_magnitude(1.225, 0.0, 0.35, 0.01) == 0.0

    def test_quadratic_in_speed(self):
        from drag_model import drag_force_magnitude

        f1 = drag_force_magnitude(1.0, 20.0, 0.4, 0.002)
        f2 = drag_force_magnitude(1.0, 40.0, 0.4, 0.002)
        assert f2 == pytest.approx(4 * f1)
