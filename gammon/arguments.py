from __future__ import annotations

import argparse
from dataclasses import dataclass

PLAYER_KINDS = ("human", "random")


@dataclass
class PlayConfig:
    red: str
    white: str
    games: int
    seed: int | None
    log_level: str


def build_play_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gammon", description="Play backgammon in the terminal")
    parser.add_argument("--red", choices=PLAYER_KINDS, default="human", help="Red moves first")
    parser.add_argument("--white", choices=PLAYER_KINDS, default="random")
    parser.add_argument("--games", type=int, default=1, help="More than one game runs quietly and prints a tally")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", type=str.upper, default="WARNING",
                        choices=["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"])
    return parser


def parse_play_args(args: list[str] | None = None) -> PlayConfig:
    parser = build_play_parser()
    namespace = parser.parse_args(args=args)
    if namespace.games < 1:
        parser.error("--games must be at least 1")

    return PlayConfig(
        red=namespace.red,
        white=namespace.white,
        games=namespace.games,
        seed=namespace.seed,
        log_level=namespace.log_level,
    )
