"""Command-line interface for the conformer double check."""

import argparse
import configparser
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ...config import DoubleCheckConfig
from ...core.domain.errors import DoubleCheckError, EnsembleParseError
from ...core.domain.implementations import POLICIES
from ...core.domain.models.structure import Structure
from ...core.services.double_check_service import DoubleCheckService
from ...core.services.report_service import format_report
from ...core.utils.logging_setup import setup_logging
from ...infrastructure.adapters.gaussian_adapter import GaussianAdapter
from ...infrastructure.adapters.xyz_adapter import read_ensemble, write_ensemble

logger = logging.getLogger(__name__)


def setup_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="kybnmr-double-check",
        description="Remove duplicate conformers by energy and geometry",
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        type=Path,
        help="XYZ ensemble file(s), or Gaussian .out files with --gaussian",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output XYZ file (default: <first input stem>_cluster.xyz)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Pipeline INI config. CLI flags override config values.",
    )
    parser.add_argument(
        "--stage",
        choices=["pre", "post"],
        default=None,
        help="Use the [optimized] preThreshold/postThreshold entry of --config",
    )
    parser.add_argument(
        "-e",
        "--energy-threshold",
        type=float,
        default=None,
        help="Energy window in kcal/mol (default 0.25)",
    )
    parser.add_argument(
        "-d",
        "--distance-threshold",
        type=float,
        default=None,
        help="Largest pair-distance deviation in Angstrom (default 0.1)",
    )
    parser.add_argument(
        "--policy",
        choices=sorted(POLICIES),
        default=None,
        help="Merge into the first or the closest matching representative",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Processes used to precompute fingerprints (default 1)",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        default=None,
        help="Show a progress bar",
    )
    parser.add_argument(
        "--gaussian",
        action="store_true",
        help="Read inputs as Gaussian output files, one structure each",
    )
    parser.add_argument(
        "--append",
        action="store_true",
        help="Append to the output file instead of overwriting it",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Also log to this file")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every merge decision"
    )
    return parser


def build_config(args: argparse.Namespace) -> DoubleCheckConfig:
    """Start from the config file, if any, then overlay CLI flags."""
    if args.config is not None:
        cfg = DoubleCheckConfig.from_config_file(args.config, stage=args.stage)
    else:
        cfg = DoubleCheckConfig()

    if args.energy_threshold is not None:
        cfg.energy_threshold = args.energy_threshold
    if args.distance_threshold is not None:
        cfg.distance_threshold = args.distance_threshold
    if args.policy is not None:
        cfg.policy = args.policy
    if args.workers is not None:
        cfg.max_workers = args.workers
    if args.progress is not None:
        cfg.show_progress = args.progress
    return cfg.validate()


def load_inputs(inputs: List[Path], gaussian: bool) -> List[Structure]:
    if gaussian:
        return GaussianAdapter().read_many(inputs)
    ensemble: List[Structure] = []
    for path in inputs:
        ensemble.extend(read_ensemble(path))
    return ensemble


def default_output(first_input: Path) -> Path:
    return first_input.with_name(f"{first_input.stem}_cluster.xyz")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the double check CLI."""
    parser = setup_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    if args.stage is not None and args.config is None:
        parser.error("--stage requires --config")

    try:
        cfg = build_config(args)
        ensemble = load_inputs(args.inputs, args.gaussian)
        service = DoubleCheckService(
            cfg.energy_threshold,
            cfg.distance_threshold,
            policy=cfg.policy,
            max_workers=cfg.max_workers,
            show_progress=cfg.show_progress,
        )
        representatives, report = service.run(ensemble)

        print(format_report(report))

        output = args.output or default_output(args.inputs[0])
        write_ensemble(representatives, output, append=args.append)
    except (DoubleCheckError, EnsembleParseError) as exc:
        logger.error("%s", exc)
        return 1
    except (ValueError, configparser.Error) as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1
    except OSError as exc:
        logger.error("I/O error: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
