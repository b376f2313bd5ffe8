"""
Command-line interface for tacsub-sonar.

Provides two commands:
- tacsub-sonar-tables: compute the active and passive detection tables
- tacsub-alert-prob: compute the probability a ship is alerted
"""

import argparse
import logging
import sys
from typing import Dict, Any, List, Optional

from tacsub_sonar import __version__


def setup_logging(verbose: bool = False, stream=None) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(stream or sys.stdout)],
        force=True,
    )


# (flag, short flag, section, field, type, help)
TABLE_OPTIONS = [
    ("--nlmean", "-n", "common", "noise_mean", float, "Mean noise level (default: 72)"),
    ("--nlsd", "-s", "common", "noise_sd", float, "Noise level standard deviation (default: 10)"),
    ("--maxrange", "-R", "common", "max_range", float, "Maximum range tracked for calculations (default: 30)"),
    ("--rangeinc", "-r", "common", "range_increment", float, "Increments of range at which calculations are made (default: 4)"),
    ("--ddepthshallow", "-d", "common", "detector_depth_shallow", float, "Depth of the detector when at shallow depth (default: 200)"),
    ("--ddepthdeep", "-D", "common", "detector_depth_deep", float, "Depth of the detector when at deep depth (default: 1200)"),
    ("--minangle", "-a", "common", "min_angle", float, "Minimum angle considered for sound propagation (default: -10)"),
    ("--maxangle", "-A", "common", "max_angle", float, "Maximum angle considered for sound propagation (default: 10)"),
    ("--stepangle", "-t", "common", "angle_step", float, "Increments made to angle (default: 0.5)"),
    ("--emtdepthshallow", "-e", "common", "emitter_depth_shallow", float, "Emitter depth when shallow (default: 260)"),
    ("--emtdepthdeep", "-E", "common", "emitter_depth_deep", float, "Emitter depth when deep (default: 1210)"),
    ("--maxdepth", "-X", "common", "max_depth", float, "Maximum depth considered for ocean sound propagation (default: 18000)"),
    ("--freq", "-f", "common", "frequency", float, "Frequency of sound considered (default: 150)"),
    ("--svpstep", "-v", "common", "svp_step", float, "SVP increments for propagation (default: 1)"),
    ("--dtpassive", "-P", "passive", "detection_threshold", float, "Detection threshold for passive detection (default: 15)"),
    ("--dipassive", "-i", "passive", "di", float, "Directivity index for passive sonar; if not set, elements and spacing may be used for setting up a line array"),
    ("--elements", "-l", "passive", "elements", int, "Number of elements of line array sonar used for passive sonar"),
    ("--spacing", "-c", "passive", "spacing", float, "Spacing of elements of line array sonar used for passive sonar"),
    ("--slcreep", "-C", "passive", "sl_creep", float, "Source level at creep speed (default: 110)"),
    ("--slslow", "-S", "passive", "sl_slow", float, "Source level at slow speed (default: 120)"),
    ("--slfast", "-F", "passive", "sl_fast", float, "Source level at fast speed (default: 130)"),
    ("--slflank", "-L", "passive", "sl_flank", float, "Source level at flank speed (default: 140)"),
    ("--tssub", "-u", "active", "ts_sub", float, "Target strength of submarine target (default: 15)"),
    ("--tssurf", "-U", "active", "ts_surf", float, "Target strength of surface target (default: 25)"),
    ("--slactive", "-V", "active", "source_level", float, "Sound level of active sonar (default: 210)"),
    ("--dtactive", "-T", "active", "detection_threshold", float, "Detection threshold for active sonar (default: 50)"),
    ("--pistondiameter", "-o", "active", "piston_diameter", float, "Piston diameter for piston sonar, overridden by --diactive"),
    ("--diactive", "-I", "active", "di", float, "Directivity index of active sonar; if not set, piston sonar used"),
    ("--svpcsv", "-Y", "common", "svp_csv", str, "CSV file for SVP; if not set, default SVP used"),
]


def build_tables_parser() -> argparse.ArgumentParser:
    """Argument parser for the detection table command."""
    parser = argparse.ArgumentParser(
        prog="tacsub-sonar-tables",
        description="Sonar equation calculations for a tactical submarine game",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Default tables
    tacsub-sonar-tables active.csv passive.csv

    # Measured SVP and a custom line array
    tacsub-sonar-tables active.csv passive.csv --svpcsv svp.csv -l 64 -c 0.05

    # Parameters from a YAML file, one flag overridden
    tacsub-sonar-tables active.csv passive.csv --config sonar.yaml --nlmean 68
        """,
    )

    parser.add_argument(
        "activetablecsv",
        help="File where active sonar table is saved (a CSV)",
    )
    parser.add_argument(
        "passivetablecsv",
        help="File where passive sonar table is saved (a CSV)",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"tacsub-sonar {__version__}",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to JSON or YAML configuration file; flags override its values",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["csv", "json"],
        default="csv",
        help="Output format (default: csv)",
    )

    for flag, short, section, name, kind, text in TABLE_OPTIONS:
        parser.add_argument(flag, short, dest=f"{section}.{name}", type=kind,
                            default=None, help=text)

    return parser


def table_overrides(args: argparse.Namespace) -> Dict[str, Dict[str, Any]]:
    """Per-section configuration values given on the command line."""
    overrides: Dict[str, Dict[str, Any]] = {"common": {}, "passive": {}, "active": {}}
    for _, _, section, name, _, _ in TABLE_OPTIONS:
        value = getattr(args, f"{section}.{name}")
        if value is not None:
            overrides[section][name] = value
    return overrides


def run_tables(args: argparse.Namespace) -> int:
    """Compute both detection tables and write them out."""
    from tacsub_sonar.config import ConfigurationManager, SonarTableConfig
    from tacsub_sonar.detection import build_detection_tables
    from tacsub_sonar.utils.output import OutputFormatter

    manager = ConfigurationManager()
    config = manager.parse_config(args.config) if args.config else SonarTableConfig()
    config = config.with_overrides(table_overrides(args))

    loaded = manager.load_config(config)
    tables = build_detection_tables(loaded)

    formatter = OutputFormatter()
    metadata = {"passive_di": loaded.passive_di, "active_di": loaded.active_di,
                "svp": loaded.svp.name}
    formatter.save_all([
        (tables.active, args.activetablecsv, {"class": "active", **metadata}),
        (tables.passive, args.passivetablecsv, {"class": "passive", **metadata}),
    ], format=args.format)
    return 0


def tables_main(argv: Optional[List[str]] = None) -> int:
    """Detection table CLI entry point."""
    parser = build_tables_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        return run_tables(args)
    except Exception as e:
        logging.exception(f"Table computation failed: {e}")
        return 1


def build_alert_parser() -> argparse.ArgumentParser:
    """Argument parser for the alert probability command."""
    parser = argparse.ArgumentParser(
        prog="tacsub-alert-prob",
        description="Compute the probability a ship is alerted by the submarine",
    )
    parser.add_argument(
        "threshold",
        type=int,
        nargs="?",
        help="The threshold for detection",
    )
    parser.add_argument(
        "--submod",
        type=int,
        default=0,
        help="Modifier for the submarine (default: 0)",
    )
    parser.add_argument(
        "--dpmod",
        type=str,
        default="0,0",
        help="Modifiers for individual detection points, as a comma-separated list (default: 0,0)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    return parser


def alert_main(argv: Optional[List[str]] = None) -> int:
    """Alert probability CLI entry point."""
    from tacsub_sonar.detection.alert import alert_probability, parse_modifiers

    parser = build_alert_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, stream=sys.stderr)

    if args.threshold is None:
        parser.print_help()
        print("\n\nNot all needed inputs were given.")
        return 1

    try:
        point_modifiers = parse_modifiers(args.dpmod)
    except ValueError as e:
        parser.error(str(e))

    logging.debug(
        f"threshold={args.threshold} submod={args.submod} dpmod={point_modifiers}"
    )
    probability = alert_probability(args.threshold, args.submod, point_modifiers)
    print(f"{probability:.7g}")
    return 0


def main() -> int:
    """Main CLI entry point (detection tables)."""
    return tables_main()


if __name__ == "__main__":
    sys.exit(main())
