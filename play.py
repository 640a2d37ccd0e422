"""
Terminal host for the discovery game.

Type a guess and press enter. Commands:
    :select <label>   focus a visible node and list its visible neighbours
    :deselect         clear the focus
    :board            print every visible node
    :quit             leave
"""

import argparse
import logging
import sys

from core.graph_store import GraphDefinitionError
from core.placement import PlacementParams
from envs.discovery_env import DiscoveryEnv
from utils.graph_loader import load_default_definition

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Guess your way through a hidden word graph.")
    parser.add_argument("--data", default=None, help="Graph definition JSON (default: $WORDWEB_DATA or the sample graph)")
    parser.add_argument("--seed", type=int, default=None, help="Placement seed")
    parser.add_argument("--width", type=float, default=1280.0, help="Viewport width")
    parser.add_argument("--height", type=float, default=800.0, help="Viewport height")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    return parser.parse_args(argv)


def print_status(env: DiscoveryEnv) -> None:
    progress = env.progress()
    print(f"-- {progress['found']} found, {progress['teased']} to guess, {progress['hidden']} hidden --")
    for line in env.guess_log.lines()[:3]:
        print(f"   {line}")


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        definition = load_default_definition(args.data)
        env = DiscoveryEnv(
            definition,
            params=PlacementParams(width=args.width, height=args.height),
            seed=args.seed,
        )
    except (FileNotFoundError, GraphDefinitionError) as e:
        logger.error("Could not start game: %s", e)
        return 1

    print(env.scene.render_text())
    print_status(env)

    for raw in sys.stdin:
        text = raw.strip()
        if not text:
            continue
        if text == ":quit":
            break
        elif text == ":deselect":
            env.deselect()
        elif text == ":board":
            print(env.scene.render_text())
            continue
        elif text.startswith(":select "):
            if env.click(text[len(":select "):].strip()) is None:
                print("nothing to select there")
                continue
            print(env.scene.render_text())
            continue
        else:
            env.guess(text)

        print_status(env)
        if env.is_complete():
            print("Everything found!")
            break

    return 0


if __name__ == "__main__":
    sys.exit(main())
