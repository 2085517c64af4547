"""Entry point for ``python -m antsiege``.

Loads a YAML scenario, places its scripted opening deployments, and
plays turns headlessly until the queen falls, every bee is gone, or the
turn cap is reached.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from antsiege.simulation.config import ScenarioConfig
from antsiege.simulation.engine import Match

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)

logger = logging.getLogger("antsiege")


def build_match(config: ScenarioConfig) -> Match:
    """Create a match and apply the scenario's opening deployments.

    Rejected deployments or boosts are logged and skipped.
    """
    match = Match.from_config(config)
    for deployment in config.deployments:
        error = match.deploy(deployment.unit, deployment.at)
        if error is not None:
            logger.warning(
                "Invalid deployment of %s at %s: %s",
                deployment.unit,
                deployment.at,
                error,
            )
            continue
        if deployment.boost is not None:
            error = match.apply_boost(deployment.boost, deployment.at)
            if error is not None:
                logger.warning("Invalid boost at %s: %s", deployment.at, error)
    return match


def main() -> None:
    """Parse CLI args, build the match, play it out."""
    parser = argparse.ArgumentParser(
        prog="antsiege",
        description="Antsiege - ants versus bees tunnel defense",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML scenario file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--turns",
        type=int,
        default=None,
        help="Turn cap (default: max_turns from the scenario)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the scenario's RNG seed",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = ScenarioConfig.from_yaml(args.config)
    if args.seed is not None:
        config.seed = args.seed
    max_turns = args.turns if args.turns is not None else config.max_turns

    match = build_match(config)
    outcome = match.run(max_turns)

    if outcome is True:
        print(f"All bees are vanquished after {match.turn} turns. You win!")
    elif outcome is False:
        print(f"The ant queen has perished on turn {match.turn}.")
    else:
        print(
            f"No decision after {match.turn} turns: "
            f"{len(match.colony.all_attackers())} bees in the tunnels, "
            f"{match.spawner_pending_count} in the hive.",
        )


if __name__ == "__main__":
    main()
