from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from typing import List, Optional

import yaml

from . import __version__
from .config import Settings, load_settings
from .engine.session import GameSession
from .render.ascii import render_ascii

logger = logging.getLogger(__name__)


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def _parse_seed(raw: str):
    try:
        return int(raw)
    except ValueError:
        return raw


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="delve", description="Rooms-and-tunnels dungeon generator with field of view")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=None, help="YAML settings file (defaults to the packaged settings)")
    common.add_argument("--seed", type=_parse_seed, default=None, help="Master seed (int or string)")
    common.add_argument("--width", type=int, default=None, help="Override map width")
    common.add_argument("--height", type=int, default=None, help="Override map height")

    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", parents=[common], help="Print a generated map")
    gen.add_argument("--json", action="store_true", help="Print a JSON summary instead of the map")

    view = sub.add_parser("view", parents=[common], help="Print the map as seen from the spawn point")
    view.add_argument("--radius", type=int, default=None, help="Override torch radius")

    sub.add_parser("play", parents=[common], help="Open the interactive window (needs arcade)")
    return parser


def build_settings(args: argparse.Namespace) -> Settings:
    settings = load_settings(args.config)
    dungeon = settings.dungeon
    if args.width is not None or args.height is not None:
        dungeon = dataclasses.replace(
            dungeon,
            map_width=args.width if args.width is not None else dungeon.map_width,
            map_height=args.height if args.height is not None else dungeon.map_height,
        )
    fov = settings.fov
    if getattr(args, "radius", None) is not None:
        fov = dataclasses.replace(fov, torch_radius=args.radius)
    seed = args.seed if args.seed is not None else settings.seed
    return dataclasses.replace(settings, dungeon=dungeon, fov=fov, seed=seed)


def summarize(session: GameSession) -> dict:
    grid = session.grid
    return {
        "seed_hex": session.rngm.seed_hex,
        "width": grid.width,
        "height": grid.height,
        "rooms": [dataclasses.asdict(room) for room in session.result.rooms],
        "spawn": list(session.result.spawn),
        "floor_tiles": grid.floor_count(),
        "signature": grid.signature(),
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        settings = build_settings(args)
    except (ValueError, FileNotFoundError, yaml.YAMLError) as exc:
        print(f"delve: invalid settings: {exc}", file=sys.stderr)
        return 2

    if args.command == "play":
        from .app.arcade_app import run

        try:
            run(settings)
        except RuntimeError as exc:
            print(f"delve: {exc}", file=sys.stderr)
            return 1
        return 0

    session = GameSession(settings)
    if args.command == "generate":
        if args.json:
            print(json.dumps(summarize(session), indent=2, sort_keys=True))
        else:
            print("\n".join(render_ascii(session, reveal=True)))
        return 0

    session.refresh_visibility()
    print("\n".join(render_ascii(session)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
