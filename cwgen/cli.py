"""Command-line entry point: headless frequency solving or the Qt panel."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from .config import GeneratorConfig
from .hw import ShadowTonePort, channel_from_int
from .models import FrequencySynthesisModel, MatchPolicy

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cwgen",
        description="Cosine wave generator control: f = f0 * step / (1 + divisor)",
    )
    parser.add_argument("-f", "--frequency", type=float, help="target frequency in Hz")
    parser.add_argument("--reference-frequency", type=float, help="measured f0 in Hz")
    parser.add_argument("--tolerance", type=int, help="allowed deviation in parts per thousand")
    parser.add_argument(
        "--policy",
        choices=[policy.value for policy in MatchPolicy],
        help="optimal: smallest divisor within tolerance; best: smallest error",
    )
    parser.add_argument("--channel", type=int, choices=[1, 2], help="output channel")
    parser.add_argument("--no-gui", action="store_true", help="solve and print without the Qt panel")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def config_from_args(args: argparse.Namespace) -> GeneratorConfig:
    """Environment defaults overridden by whatever was given on the command line."""
    config = GeneratorConfig.from_env()
    return GeneratorConfig(
        reference_frequency=(
            args.reference_frequency
            if args.reference_frequency is not None
            else config.reference_frequency
        ),
        tolerance=args.tolerance if args.tolerance is not None else config.tolerance,
        policy=MatchPolicy(args.policy) if args.policy else config.policy,
        channel=channel_from_int(args.channel) if args.channel else config.channel,
    )


def run_headless(
    config: GeneratorConfig,
    frequency: Optional[float] = None,
    out: Optional[TextIO] = None,
) -> int:
    """Solve one frequency against a shadow port and print the result.

    Returns:
        0 when the tolerance was met (or nothing was requested), 1 otherwise
    """
    if out is None:
        out = sys.stdout
    model = FrequencySynthesisModel(
        ShadowTonePort(), config.reference_frequency, config.tolerance
    )
    model.enable(config.channel)

    if frequency is None:
        print(model.describe(), file=out)
        return 0

    result = model.search_best_frequency(frequency, config.policy)
    print(" D  step      frequency        error", file=out)
    for candidate in result.candidates:
        marker = "*" if candidate.divisor == result.divisor else " "
        print(
            f"{marker}{candidate.divisor} {candidate.step:5d} "
            f"{candidate.frequency:14.5f} {candidate.error:12.5f}",
            file=out,
        )
    if not result.tolerance_met:
        print(
            f"Frequency within tolerance of {model.tolerance} ‰ cannot be set; "
            "best approximation used instead.",
            file=out,
        )
    print(model.describe(), file=out)
    return 0 if result.tolerance_met else 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    try:
        config = config_from_args(args)
    except ValueError as exc:
        logger.error(f"Invalid configuration: {exc}")
        return 2

    if args.no_gui:
        return run_headless(config, args.frequency)

    from .main import run

    return run(config=config, frequency=args.frequency)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
