#!/usr/bin/env python3
"""
Flight Simulation Script

Analyzes a rocket design's static stability, flies it from the pad to
recovery and prints a flight summary. Optionally exports the trajectory
and plots it.

Usage:
    python simulate_flight.py
    python simulate_flight.py --design configs/designs/estes_alpha.yaml --motor estes-d12
    python simulate_flight.py --config configs/default_flight.yaml --csv flight.csv
    python simulate_flight.py --list-motors
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from flight_analysis import UnknownMotor, analyze, run_trajectory
from flight_config import FlightConfig, configure_logging, load_config
from motor_catalog import MOTOR_CATALOG

logger = logging.getLogger(__name__)


def print_motor_table():
    """Print the motor catalog"""
    print(f"{'ID':<12} {'Name':<12} {'Class':<6} {'Impulse':>10} {'Burn':>7} "
          f"{'Peak':>7} {'Prop':>8} {'Case':>8}")
    for motor in MOTOR_CATALOG.values():
        print(f"{motor.motor_id:<12} {motor.name:<12} {motor.impulse_class:<6} "
              f"{motor.total_impulse:>8.1f}Ns {motor.burn_time:>6.2f}s "
              f"{motor.peak_thrust:>6.1f}N {motor.propellant_mass*1000:>6.1f}g "
              f"{motor.dry_mass*1000:>6.1f}g")


def print_stability(report):
    print("\nStatic stability:")
    print(f"  CG: {report.center_of_gravity*1000:.1f} mm from nose")
    print(f"  CP: {report.center_of_pressure*1000:.1f} mm from nose")
    print(f"  Margin: {report.stability_margin_calibers:.2f} cal "
          f"({'stable' if report.is_stable else 'UNSTABLE'})")


def print_flight_summary(trajectory):
    summary = trajectory.summary()
    print("\nFlight summary:")
    print(f"  Apogee: {summary.apogee:.1f} m")
    if summary.time_to_apogee is not None:
        print(f"  Time to apogee: {summary.time_to_apogee:.2f} s")
    if summary.burnout_time is not None:
        print(f"  Burnout: {summary.burnout_time:.2f} s")
    print(f"  Max velocity: {summary.max_velocity:.1f} m/s (Mach {summary.max_mach:.3f})")
    print(f"  Max acceleration: {summary.max_acceleration:.1f} m/s²")
    print(f"  Max-Q: {summary.max_q:.0f} Pa at {summary.max_q_time:.2f} s")
    print(f"  Ended: {trajectory.termination.value} at {summary.flight_time:.2f} s "
          f"({len(trajectory.states)} samples)")


def export_trajectory(trajectory, csv_path: str = None, json_path: str = None):
    """Write the trajectory as CSV (states) and/or JSON (states + telemetry)"""
    if csv_path:
        Path(csv_path).parent.mkdir(parents=True, exist_ok=True)
        trajectory.to_dataframe().to_csv(csv_path, index=False)
        print(f"Saved trajectory CSV to: {csv_path}")

    if json_path:
        Path(json_path).parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "termination": trajectory.termination.value,
            "states": [s.to_dict(include_trail=False) for s in trajectory.states],
            "telemetry": [p._asdict() for p in trajectory.telemetry],
        }
        with open(json_path, "w") as f:
            json.dump(payload, f, indent=2)
        print(f"Saved trajectory JSON to: {json_path}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Analyze and fly a rocket design",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Fly the built-in design
    python simulate_flight.py

    # Fly a design with a different motor and export the trajectory
    python simulate_flight.py --design my_rocket.yaml --motor estes-d12 --csv flight.csv

    # Plot without opening a window
    python simulate_flight.py --plot --no-show --save flight.png
        """
    )

    parser.add_argument('--design', type=str, help='Design YAML file (overrides config)')
    parser.add_argument('--config', type=str, help='Flight config YAML file')
    parser.add_argument('--motor', type=str, help='Override the design motor')
    parser.add_argument('--list-motors', action='store_true', help='List catalog motors and exit')
    parser.add_argument('--csv', type=str, help='Export states to CSV')
    parser.add_argument('--json', type=str, help='Export states and telemetry to JSON')
    parser.add_argument('--plot', action='store_true', help='Plot the flight profile')
    parser.add_argument('--save', type=str, help='Save the plot to file')
    parser.add_argument('--no-show', action='store_true',
                        help='Do not display plot (useful for scripting)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')

    args = parser.parse_args(argv)

    if args.list_motors:
        print_motor_table()
        return 0

    config = load_config(args.config) if args.config else FlightConfig()
    if args.design:
        config.design_file = args.design
    if args.verbose:
        config.logging.level = "DEBUG"
    configure_logging(config.logging)

    design = config.resolve_design()
    clamped = design.geometry.with_fins_clamped()
    if clamped is not design.geometry:
        logger.warning(
            f"Fin leading edge {design.geometry.fin_root_leading_edge} m moved inside "
            f"the body tube to {clamped.fin_root_leading_edge:.3f} m"
        )
        design = design.with_updates(geometry=clamped)
    if args.motor:
        design = design.with_updates(motor_id=args.motor)

    print(design.summary())

    report = analyze(design, config.stability.min_stable_calibers)
    if isinstance(report, UnknownMotor):
        print(f"\n{report.message}")
        return 1
    print_stability(report)

    trajectory = run_trajectory(design, config.simulation)
    if isinstance(trajectory, UnknownMotor):
        print(f"\n{trajectory.message}")
        return 1
    print_flight_summary(trajectory)

    export_trajectory(trajectory, csv_path=args.csv, json_path=args.json)

    if args.plot or args.save:
        from visualize_trajectory import plot_trajectory
        plot_trajectory(trajectory, save_path=args.save, show=not args.no_show, title=design.name)

    return 0


if __name__ == "__main__":
    sys.exit(main())
