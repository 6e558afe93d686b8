"""Command line entrypoint for building color ramps."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from config import settings
from theme.color_ramps import (
    BG_RAMP_CONFIG,
    DEFAULT_SEED_COLORS,
    InvalidSeedColorError,
    RampBuilder,
    build_accent_ramp,
    build_bg_ramp,
    validate_ramp_contrast,
)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Build an accessible color ramp from a seed color")
    p.add_argument("seed", help="Seed color (hex or CSS functional notation)")
    p.add_argument(
        "--config", choices=("bg", "accent"), default="bg", help="Ramp configuration to use"
    )
    p.add_argument(
        "--bg-seed",
        default=DEFAULT_SEED_COLORS["bg"],
        help="Background seed the accent ramp is matched against",
    )
    p.add_argument(
        "--direction",
        choices=("lighter", "darker"),
        help="Force the ramp's main direction (accent ramps follow the background ramp)",
    )
    p.add_argument(
        "--no-rescale", action="store_true", help="Do not adjust the seed to fit contrast targets"
    )
    p.add_argument("--validate", action="store_true", help="Also report contrast combination failures")
    p.add_argument("--json", action="store_true", help="Output JSON")
    p.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    return p.parse_args(argv)


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = getattr(logging, settings.LOG_LEVEL, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)
    builder = RampBuilder()
    try:
        if args.config == "accent":
            bg_ramp = build_bg_ramp(args.bg_seed, builder=builder)
            result = build_accent_ramp(
                args.seed,
                bg_ramp,
                rescale_to_fit_contrast_targets=not args.no_rescale,
                builder=builder,
            )
        else:
            result = builder.build(
                args.seed,
                BG_RAMP_CONFIG,
                main_direction=args.direction,
                rescale_to_fit_contrast_targets=not args.no_rescale,
            )
    except InvalidSeedColorError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    failures = validate_ramp_contrast(result, caches=builder.caches) if args.validate else []
    if args.json:
        payload = result.as_dict()
        if args.validate:
            payload["failures"] = failures
        print(json.dumps(payload, indent=2))
    else:
        print(f"Ramp for {args.seed} ({args.config}, direction={result.direction}):")
        for role, entry in result.ramp.items():
            flag = " !" if entry.warning else ""
            print(f"  {role}: {entry.color}{flag}")
        for failure in failures:
            print(f"  {failure}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
