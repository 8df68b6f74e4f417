#!/usr/bin/env python3
"""
stepvec - probe step-vector calculator for 3-axis motor stages

Unified CLI entry point:
    stepvec.py compute --rig rig.json --p1 0 0 40 --p2 0 0 10
    stepvec.py check   --job job.json
    stepvec.py viz     --rig rig.json --job job.json -o frame.html
"""
from __future__ import annotations

import sys
import argparse
import json
import logging
from typing import List, Optional, Tuple

from probe_frame.errors import AmbiguousRotationAxisError, ProbeFrameError, RigConfigError
from probe_frame.projector import compute_step_vectors
from probe_frame.rig_config import RigConfig, load_job, load_rig, rig_to_dict
from probe_frame.types import AxisMapping, Point3, StageLimits
from probe_frame.validation import validate_inputs

logger = logging.getLogger("stepvec")


def _resolve_inputs(args: argparse.Namespace) -> Tuple[Point3, Point3, RigConfig]:
    """
    Merge job file, rig file and explicit flags. Flags win over files, a rig
    file wins over a rig block embedded in the job file.
    """
    job = load_job(args.job) if args.job else None
    rig = load_rig(args.rig) if args.rig else (job.rig if job is not None else None)

    p1 = Point3(*args.p1) if args.p1 else (job.p1 if job is not None else None)
    p2 = Point3(*args.p2) if args.p2 else (job.p2 if job is not None else None)
    if p1 is None or p2 is None:
        raise RigConfigError("Both p1 and p2 are required (use --p1/--p2 or --job).")

    limits = StageLimits(*args.limits) if args.limits else (rig.limits if rig is not None else None)
    mapping = AxisMapping(*args.map) if args.map else (rig.mapping if rig is not None else None)
    if limits is None:
        raise RigConfigError("Stage limits are required (use --limits or --rig).")
    if mapping is None:
        raise RigConfigError("Axis mapping is required (use --map or --rig).")

    name = rig.name if rig is not None else "cli"
    return p1, p2, RigConfig(name=name, limits=limits, mapping=mapping)


def _print_failure(failure) -> None:
    print(f"❌ Input rejected ({len(failure)} issue(s)):")
    for msg in failure.messages():
        print(f"  - {msg}")


def cmd_compute(args: argparse.Namespace) -> int:
    """
    Compute and print the step vectors as JSON.

    Returns:
        0 on success, 1 if the inputs were rejected
    """
    p1, p2, rig = _resolve_inputs(args)
    result = compute_step_vectors(p1, p2, rig.mapping, rig.limits, strict=args.strict)
    if not result.ok:
        _print_failure(result.failure)
        return 1

    out = result.vectors.as_dict()
    rot = result.vectors.rotation
    out["rotation"] = {
        "axis": [float(v) for v in rot.motor_axis()],
        "angle_deg": rot.angle_deg,
        "ambiguous": rot.ambiguous,
    }
    out["rig"] = rig_to_dict(rig)
    print(json.dumps(out, indent=2))
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Run only the input validation and report every cause found."""
    p1, p2, rig = _resolve_inputs(args)
    failure = validate_inputs(p1, p2, rig.mapping, rig.limits)
    if failure:
        _print_failure(failure)
        return 1
    print("✅ Inputs are valid")
    return 0


def cmd_viz(args: argparse.Namespace) -> int:
    """Compute the step vectors and write a 3-D HTML preview."""
    from probe_frame.plotter import PlotConfig, StepVectorPlotter

    p1, p2, rig = _resolve_inputs(args)
    result = compute_step_vectors(p1, p2, rig.mapping, rig.limits, strict=args.strict)
    if not result.ok:
        _print_failure(result.failure)
        return 1

    cfg = PlotConfig(arrow_scale_mm=args.scale, title=f"Probe step vectors - {rig.name}")
    plotter = StepVectorPlotter(p1, p2, result.vectors, rig.limits, config=cfg)
    output = plotter.write_html(args.output)
    print(f"✅ Visualization saved to: {output}")
    return 0


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument('--rig', help='Rig JSON file (StageLimits + AxisMapping)')
    p.add_argument('--job', help='Job JSON file (P1, P2, optional Rig block)')
    p.add_argument('--p1', nargs=3, type=float, metavar=('X', 'Y', 'Z'),
                   help='Far point along the probe axis (mm)')
    p.add_argument('--p2', nargs=3, type=float, metavar=('X', 'Y', 'Z'),
                   help='Origin / near point (mm)')
    p.add_argument('--limits', nargs=3, type=float, metavar=('XLEN', 'YLEN', 'ZLEN'),
                   help='Symmetric stage travel per motor (mm)')
    p.add_argument('--map', nargs=3, type=int, metavar=('AX', 'LAT', 'ELEV'),
                   help='Nominal motor axis (1, 2, 3) for axial, lateral, elevation')
    p.add_argument('--strict', action='store_true',
                   help='Fail instead of using the 180 deg tie-break for an anti-parallel axis')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='stepvec',
        description='stepvec - probe step vectors for a 3-axis motor stage (no yaw correction)'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    compute_parser = subparsers.add_parser('compute', help='Compute step vectors (JSON to stdout)')
    _add_common(compute_parser)

    check_parser = subparsers.add_parser('check', help='Validate inputs only')
    _add_common(check_parser)

    viz_parser = subparsers.add_parser('viz', help='Write a 3-D HTML preview')
    _add_common(viz_parser)
    viz_parser.add_argument(
        '--output', '-o',
        default='stepvec_frame.html',
        help='Output file path (default: stepvec_frame.html)'
    )
    viz_parser.add_argument('--scale', type=float, default=None,
                            help='Arrow length in mm (default: 25%% of |p1 - p2|)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(levelname)s: %(message)s')

    if not args.command:
        parser.print_help()
        return 1

    handlers = {'compute': cmd_compute, 'check': cmd_check, 'viz': cmd_viz}
    try:
        return handlers[args.command](args)
    except AmbiguousRotationAxisError as e:
        # --strict rejects the measured geometry itself
        print(f"❌ Input rejected: {e}")
        return 1
    except ProbeFrameError as e:
        logger.error("%s", e)
        return 2


if __name__ == '__main__':
    sys.exit(main())
