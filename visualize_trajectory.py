#!/usr/bin/env python3
"""
Trajectory Visualization Script

Plots altitude, velocity, forces and Mach/drag coefficient for a flight,
with the flight phases shaded, and thrust curves for catalog motors.

Usage:
    python visualize_trajectory.py
    python visualize_trajectory.py --design configs/designs/estes_alpha.yaml --save flight.png
    python visualize_trajectory.py --motor estes-d12 --no-show --save d12.png
"""

import argparse

import numpy as np
import matplotlib.pyplot as plt

from airframe import RocketDesign
from flight_analysis import UnknownMotor, run_trajectory
from flight_integrator import FlightPhase
from motor_catalog import MotorSpec, get_motor, available_motor_ids
from trajectory_runner import Trajectory

PHASE_COLORS = {
    FlightPhase.PRE: "lightgray",
    FlightPhase.BURN: "orange",
    FlightPhase.COAST: "skyblue",
    FlightPhase.APOGEE: "red",
    FlightPhase.RECOVERY: "lightgreen",
}


def _shade_phases(ax, times, phases):
    """Shade contiguous phase segments on an axis"""
    start = 0
    for i in range(1, len(phases) + 1):
        if i == len(phases) or phases[i] is not phases[start]:
            end = times[min(i, len(times) - 1)]
            ax.axvspan(times[start], end, color=PHASE_COLORS[phases[start]], alpha=0.15, lw=0)
            start = i


def plot_trajectory(trajectory: Trajectory, save_path: str = None, show: bool = True,
                    title: str = "Flight Profile"):
    """
    Create flight profile visualization.

    Args:
        trajectory: Result of run_trajectory()
        save_path: Optional path to save figure
        show: Whether to display the plot
        title: Figure title
    """
    states = trajectory.states
    t = np.array([s.time for s in states])
    phases = [s.phase for s in states]
    summary = trajectory.summary()

    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(title, fontsize=16, fontweight='bold')

    # 1. Altitude
    ax1 = axes[0, 0]
    ax1.plot(t, [s.altitude for s in states], 'b-', linewidth=2, label='Altitude')
    ax1.axhline(summary.apogee, color='r', linestyle='--',
                label=f'Apogee: {summary.apogee:.1f} m')
    ax1.set_xlabel('Time (s)')
    ax1.set_ylabel('Altitude (m)')
    ax1.set_title('Altitude')

    # 2. Velocity and acceleration
    ax2 = axes[0, 1]
    ax2.plot(t, [s.velocity for s in states], 'g-', linewidth=2, label='Velocity (m/s)')
    ax2.plot(t, [s.acceleration for s in states], color='purple', linewidth=1,
             alpha=0.7, label='Acceleration (m/s²)')
    ax2.axhline(0, color='gray', linewidth=0.8)
    ax2.set_xlabel('Time (s)')
    ax2.set_title('Velocity & Acceleration')

    # 3. Forces
    ax3 = axes[1, 0]
    ax3.plot(t, [s.thrust for s in states], 'orange', linewidth=2, label='Thrust')
    ax3.plot(t, [s.drag for s in states], 'r-', linewidth=2, label='Drag')
    ax3.axvline(summary.max_q_time, color='gray', linestyle=':',
                label=f'Max-Q: {summary.max_q:.0f} Pa')
    ax3.set_xlabel('Time (s)')
    ax3.set_ylabel('Force (N)')
    ax3.set_title('Forces')

    # 4. Mach and drag coefficient
    ax4 = axes[1, 1]
    ax4.plot(t, [s.mach for s in states], 'k-', linewidth=2, label='Mach')
    ax4b = ax4.twinx()
    ax4b.plot(t, [s.drag_coefficient for s in states], 'c--', linewidth=1.5, label='Cd')
    ax4b.set_ylabel('Drag coefficient')
    ax4.set_xlabel('Time (s)')
    ax4.set_ylabel('Mach')
    ax4.set_title('Mach & Drag Coefficient')

    for ax in axes.flat:
        _shade_phases(ax, t, phases)
        ax.grid(True, alpha=0.3)
        ax.set_xlim(0, t[-1] if t[-1] > 0 else 1)
        ax.legend(loc='upper right')

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved flight profile to: {save_path}")

    if show:
        plt.show()

    return fig


def plot_thrust_curve(motor: MotorSpec, save_path: str = None, show: bool = True):
    """
    Plot a motor's thrust curve with its documented and integrated impulse.

    Args:
        motor: MotorSpec from the catalog
        save_path: Optional path to save figure
        show: Whether to display the plot
    """
    fig, ax = plt.subplots(figsize=(8, 5))

    t = np.linspace(0, max(motor.burn_time, 1e-3) * 1.1, 500)
    thrust = [motor.thrust_at(ti) for ti in t]

    ax.plot(t, thrust, 'b-', linewidth=2, label='Thrust')
    ax.fill_between(t, thrust, alpha=0.3)
    ax.axhline(motor.average_thrust, color='r', linestyle='--',
               label=f'Average: {motor.average_thrust:.1f} N')
    ax.axvline(motor.burn_time, color='gray', linestyle='--', alpha=0.5,
               label=f'Burnout: {motor.burn_time:.2f} s')
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Thrust (N)')
    ax.set_title(
        f'{motor.name} ({motor.impulse_class}): {motor.total_impulse:.1f} N·s rated, '
        f'{motor.curve_impulse():.1f} N·s curve'
    )
    ax.legend(loc='upper right')
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved thrust curve to: {save_path}")

    if show:
        plt.show()

    return fig


def main():
    parser = argparse.ArgumentParser(
        description="Visualize rocket flight profiles and motor thrust curves",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Fly the default design
    python visualize_trajectory.py

    # Fly a design file and save the figure
    python visualize_trajectory.py --design my_rocket.yaml --save flight.png

    # Plot a motor thrust curve
    python visualize_trajectory.py --motor estes-c6
        """
    )

    parser.add_argument('--design', type=str, help='Design YAML file (default: built-in design)')
    parser.add_argument('--motor', type=str,
                        help=f'Plot a motor thrust curve ({", ".join(available_motor_ids())})')
    parser.add_argument('--save', type=str, help='Save figure to file')
    parser.add_argument('--no-show', action='store_true',
                        help='Do not display plot (useful for scripting)')

    args = parser.parse_args()

    if args.motor:
        motor = get_motor(args.motor)
        if motor is None:
            parser.error(f"Unknown motor: {args.motor}. Available: {list(available_motor_ids())}")
        plot_thrust_curve(motor, save_path=args.save, show=not args.no_show)
        return

    design = RocketDesign.load(args.design) if args.design else RocketDesign.default()
    result = run_trajectory(design)
    if isinstance(result, UnknownMotor):
        parser.error(result.message)
    plot_trajectory(result, save_path=args.save, show=not args.no_show, title=design.name)


if __name__ == "__main__":
    main()
