#!/usr/bin/env python3
"""
Placement Engine CLI

Usage:
    carplacement validate star-decal 0.1 1.2 0
    carplacement validate star-decal 0.1 1.2 0 --normal 0 1 0 --json
    carplacement closest light-pod 0 0 0
    carplacement zones --category roof
    carplacement check
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from .config import load_or_create_config
from .loader import PlacementEngine, load_engine
from .zones.zone_data import Vector3

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="carplacement",
        description="Validate decorative component placement against car zones",
    )
    parser.add_argument("--config", type=Path, default=Path("configs/placement.yaml"),
                        help="Placement config (defaults used if missing)")
    parser.add_argument("--base-dir", type=Path, default=None,
                        help="Directory that relative manifest paths resolve against")
    parser.add_argument("--verbose", action="store_true", help="Show INFO logs")

    sub = parser.add_subparsers(dest="command", required=True)

    validate = sub.add_parser("validate", help="Validate a placement")
    validate.add_argument("asset_id")
    validate.add_argument("position", nargs=3, type=float, metavar=("X", "Y", "Z"))
    validate.add_argument("--normal", nargs=3, type=float, metavar=("NX", "NY", "NZ"))
    validate.add_argument("--json", action="store_true", help="Print result as JSON")

    closest = sub.add_parser("closest", help="Nearest valid zone for an asset")
    closest.add_argument("asset_id")
    closest.add_argument("position", nargs=3, type=float, metavar=("X", "Y", "Z"))

    zones = sub.add_parser("zones", help="List zones")
    zones.add_argument("--category", help="Only zones with this tag")

    sub.add_parser("check", help="Validate configuration and manifests")
    return parser


def _cmd_validate(engine: PlacementEngine, args: argparse.Namespace) -> int:
    asset = engine.assets.by_id(args.asset_id)
    if asset is None:
        print(f"Unknown asset: {args.asset_id}", file=sys.stderr)
        return EXIT_ERROR

    normal = Vector3.from_dict(args.normal) if args.normal else None
    result = engine.validator.validate(asset, Vector3.from_dict(args.position), normal)

    if args.json:
        print(json.dumps(result.to_dict()))
    else:
        status = "ACCEPTED" if result.accepted else "REJECTED"
        print(f"{status}: {result.message}")
        print(f"  distance: {result.distance:.3f}")
        if result.matched_zone_key:
            print(f"  zone: {result.matched_zone_key}")
        if result.suggested_zone_key:
            print(f"  suggested: {result.suggested_zone_key}")
    return EXIT_OK if result.accepted else EXIT_REJECTED


def _cmd_closest(engine: PlacementEngine, args: argparse.Namespace) -> int:
    asset = engine.assets.by_id(args.asset_id)
    if asset is None:
        print(f"Unknown asset: {args.asset_id}", file=sys.stderr)
        return EXIT_ERROR

    closest = engine.validator.closest_valid_zone(asset, Vector3.from_dict(args.position))
    if closest is None:
        print("No valid zones")
        return EXIT_REJECTED
    print(f"{closest.zone.key} ({closest.zone.display_name}) {closest.distance:.3f}")
    return EXIT_OK


def _cmd_zones(engine: PlacementEngine, args: argparse.Namespace) -> int:
    zones = engine.zones.by_category(args.category) if args.category else engine.zones.all()
    for zone in zones:
        tags = ",".join(sorted(zone.category_tags))
        print(f"{zone.key:<22} {zone.shape.value:<9} {zone.display_name} [{tags}]")
    return EXIT_OK


def _cmd_check(engine: PlacementEngine, args: argparse.Namespace) -> int:
    stats = engine.get_statistics()
    print(f"Zones: {stats['zones']['total_zones']}  Assets: {stats['asset_count']}")
    if engine.issues:
        for issue in engine.issues:
            print(f"  - {issue}")
        return EXIT_REJECTED
    print("Configuration OK")
    return EXIT_OK


COMMANDS = {
    "validate": _cmd_validate,
    "closest": _cmd_closest,
    "zones": _cmd_zones,
    "check": _cmd_check,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = load_or_create_config(args.config)
    if not args.verbose:
        config.logging.console_level = "WARNING"
    if args.command == "check":
        # Report issues instead of refusing to load
        config.catalog.strict_validation = False

    try:
        engine = load_engine(config, base_dir=args.base_dir)
    except (FileNotFoundError, ValueError) as e:
        print(f"Failed to load placement engine: {e}", file=sys.stderr)
        return EXIT_ERROR

    return COMMANDS[args.command](engine, args)


if __name__ == "__main__":
    sys.exit(main())
