"""Command-line launcher for path searches, benchmarks and the demo."""

from __future__ import annotations

import argparse
import logging
import sys
import time

logger = logging.getLogger(__name__)


def _parse_cell(text: str) -> tuple[int, int]:
    try:
        x, y = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected a cell as 'x,y', got {text!r}",
        ) from None
    return x, y


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-pathfinder",
        description="Self-avoiding snake path search tools.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- find ---
    find_p = sub.add_parser("find", help="Search for a path to one target.")
    find_p.add_argument(
        "--scenario", type=str, default=None,
        help="Path to a JSON scenario file (overrides other flags).",
    )
    find_p.add_argument("--width", type=int, default=10)
    find_p.add_argument("--height", type=int, default=10)
    find_p.add_argument(
        "--body", type=_parse_cell, nargs="+", default=None,
        help="Body cells from tail to head, e.g. '0,0 1,0 2,0'.",
    )
    find_p.add_argument("--target", type=_parse_cell, default=None)
    find_p.add_argument("--max-explored", type=int, default=None)
    find_p.add_argument(
        "--json", action="store_true", help="Print the result as JSON.",
    )
    find_p.add_argument(
        "--show", action="store_true", help="Draw the board after the path.",
    )

    # --- benchmark ---
    bench_p = sub.add_parser("benchmark", help="Measure search throughput.")
    bench_p.add_argument("--scenario", type=str, default=None)
    bench_p.add_argument("--repeats", type=int, default=3)

    # --- demo ---
    demo_p = sub.add_parser(
        "demo", help="Chase random targets until the snake gets stuck.",
    )
    demo_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON demo config file (overrides other flags).",
    )
    demo_p.add_argument("--width", type=int, default=None)
    demo_p.add_argument("--height", type=int, default=None)
    demo_p.add_argument("--length", type=int, default=None)
    demo_p.add_argument("--growth", type=int, default=None)
    demo_p.add_argument("--rounds", type=int, default=None)
    demo_p.add_argument("--seed", type=int, default=None)
    demo_p.add_argument(
        "--animate", action="store_true",
        help="Print a frame per move while the next round is searched.",
    )
    demo_p.add_argument(
        "--delay", type=float, default=0.1,
        help="Seconds between animation frames.",
    )

    return parser


def _run_find(args: argparse.Namespace) -> int:
    from snake_pathfinder.config import SearchConfig
    from snake_pathfinder.render import render
    from snake_pathfinder.scenario import PathResponse, ScenarioModel
    from snake_pathfinder.search import search_path

    try:
        if args.scenario:
            scenario = ScenarioModel.from_file(args.scenario)
            logger.info("Loaded scenario from %s", args.scenario)
        else:
            if args.body is None or args.target is None:
                print(  # noqa: T201
                    "error: --body and --target are required without "
                    "--scenario", file=sys.stderr,
                )
                return 2
            scenario = ScenarioModel(
                width=args.width,
                height=args.height,
                body=args.body,
                target=args.target,
            )
        snake, (tx, ty) = scenario.build()
        config = SearchConfig(max_explored=args.max_explored)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)  # noqa: T201
        return 2

    result = search_path(snake, tx, ty, config=config)

    if args.json:
        print(PathResponse.from_result(result).model_dump_json())  # noqa: T201
    elif not result.found:
        print(f"No path to {(tx, ty)}.")  # noqa: T201
        print(result.summary())  # noqa: T201
    else:
        print(result.to_string())  # noqa: T201
        print(result.summary())  # noqa: T201
    if args.show and result.found:
        print(render(snake.advanced(result.moves), (tx, ty)))  # noqa: T201
    return 0 if result.found else 1


def _run_benchmark(args: argparse.Namespace) -> int:
    from snake_pathfinder.benchmark import benchmark_search
    from snake_pathfinder.scenario import ScenarioModel

    try:
        scenario = (
            ScenarioModel.from_file(args.scenario) if args.scenario else None
        )
        result = benchmark_search(scenario, repeats=args.repeats)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)  # noqa: T201
        return 2
    print(result.summary())  # noqa: T201
    return 0


def _run_demo(args: argparse.Namespace) -> int:
    from snake_pathfinder.config import DemoConfig
    from snake_pathfinder.engine import SnakeDriver
    from snake_pathfinder.render import animate

    overrides: dict = {}
    flag_map = {
        "width": "width",
        "height": "height",
        "length": "initial_length",
        "growth": "growth_per_target",
        "rounds": "max_rounds",
        "seed": "seed",
    }
    for cli_name, cfg_name in flag_map.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val

    try:
        config = DemoConfig.load(args.config) if args.config else DemoConfig()
        if overrides:
            d = config.to_dict()
            d.update(overrides)
            d.pop("search")
            config = DemoConfig(search=config.search, **d)
        driver = SnakeDriver(config)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)  # noqa: T201
        return 2

    with driver:
        pending = driver.prefetch()
        while (played := pending.result()) is not None:
            # Search the next target while this round is being shown.
            upcoming = None if driver.game_over else driver.prefetch()
            if args.animate and played.result is not None:
                for frame in animate(
                    played.snake, played.result.moves, played.target,
                ):
                    print(frame, end="\n\n")  # noqa: T201
                    time.sleep(args.delay)
            if played.result is None:
                print(  # noqa: T201
                    f"Round {played.number}: stuck, "
                    f"no path to {played.target}",
                )
            else:
                print(  # noqa: T201
                    f"Round {played.number}: {played.result.to_string()} "
                    f"({played.result.summary()}, "
                    f"{played.elapsed_seconds * 1000:.1f} ms)",
                )
            if upcoming is None:
                break
            pending = upcoming
        print(f"Final score: {driver.score}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-pathfinder`` CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "find": _run_find,
        "benchmark": _run_benchmark,
        "demo": _run_demo,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
