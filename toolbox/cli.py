import argparse
import asyncio
import json
import logging
import sys
from decimal import Decimal
from pathlib import Path
from typing import Optional

from arcaea.catalog import CatalogEntry, ChartCatalog
from arcaea.entities.enums import ClearRank
from arcaea.entities.profile import B30Response, BestResultItem, Profile
from arcaea.entities.world import CurrentProgress, WorldMap
from arcaea.exceptions import ArcaeaError, InvalidProfile
from dbutils.st3 import read_st3, to_play_results
from utils import floor_to_ndp
from utils.calculation.best import profile_best_n
from utils.calculation.progress import (
    compute_progress_range,
    compute_remaining_progress,
    inverse_progress,
)
from utils.calculation.score import (
    compute_clear_rank,
    compute_score,
    compute_score_result,
    infer_note_result,
)
from utils.config import config
from utils.logging import logger as root_logger
from utils.logging import setup_file_logging, setup_logging

logger = root_logger.getChild("cli")


def load_catalog(path: Optional[Path]) -> ChartCatalog:
    return ChartCatalog.from_file(path or config.catalog.chart_data)


def load_profile(path: Path) -> Profile:
    with path.open(encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            msg = f"{path} is not valid JSON: {e}"
            raise InvalidProfile(msg) from e
    return Profile.from_dict(data)


def save_profile(profile: Profile, path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        json.dump(profile.to_dict(), f, ensure_ascii=False, indent=2)


def format_decimal(value: Optional[Decimal], dp: int = 4) -> str:
    if value is None:
        return "-"
    return str(floor_to_ndp(value, dp))


def format_item(item: BestResultItem) -> str:
    name = CatalogEntry(item.chart, item.song).display_name
    clear = f" [{item.clear}]" if item.clear is not None else ""
    return (
        f"#{item.no:<3} {name} ({item.chart.difficulty} {item.chart.constant}) "
        f"{item.score.score:,} {item.score.grade} -> "
        f"{format_decimal(item.score.potential)}{clear}"
    )


def print_b30(response: B30Response) -> None:
    print(f"{response.username} ({response.potential})")
    for item in response.b30:
        print(format_item(item))
    if response.b31_39:
        print("--- 31-39 ---")
        for item in response.b31_39:
            print(format_item(item))
    print(f"B30 average: {format_decimal(response.b30_average)}")
    print(f"R10 average: {format_decimal(response.r10_average)}")
    print(f"Max potential: {format_decimal(response.max_potential)}")
    print(f"Min potential: {format_decimal(response.min_potential)}")


def command_b30(args: argparse.Namespace) -> int:
    catalog = load_catalog(args.catalog)
    print_b30(profile_best_n(load_profile(args.profile), catalog))
    return 0


async def command_import_st3(args: argparse.Namespace) -> int:
    catalog = load_catalog(args.catalog)
    if args.profile.exists():
        profile = load_profile(args.profile)
    else:
        profile = Profile.empty(args.username or args.profile.stem)

    scores = await read_st3(args.database)
    results = to_play_results(logger, scores, catalog)
    save_profile(profile.merge(results), args.profile)
    logger.info("Imported %d of %d ST3 scores into %s", len(results), len(scores), args.profile)
    return 0


def command_infer(args: argparse.Namespace) -> int:
    entry = load_catalog(args.catalog).get(args.chart)
    chart = entry.chart
    note_result = infer_note_result(chart, args.perfect, args.far, args.lost, args.score)
    if note_result is None:
        print("Cannot infer judgments from the given values.")
        return 1

    score = compute_score(chart, note_result)
    result = compute_score_result(score, chart)
    clear = compute_clear_rank(note_result, chart, args.clear)
    print(f"{entry.display_name} ({chart.difficulty} {chart.constant})")
    print(
        f"Pure {note_result.pure} ({note_result.perfect}) / "
        f"Far {note_result.far} / Lost {note_result.lost}"
    )
    print(f"Score: {score:,} {result.grade}")
    print(f"Potential: {format_decimal(result.potential)}")
    print(f"Clear: {clear if clear is not None else '-'}")
    return 0


def command_progress(args: argparse.Namespace) -> int:
    if args.map is not None:
        world_map = WorldMap.from_json(args.map.read_text(encoding="utf-8"))  # type: ignore[attr-defined]
    else:
        world_map = WorldMap.from_lengths(
            "custom", [float(x) for x in args.platforms.split(",")]
        )
    current = CurrentProgress(args.level, args.progress)

    remaining = compute_remaining_progress(world_map, current)
    if remaining.next_reward is not None:
        print(
            f"Next reward: {remaining.next_reward.reward.display_name} "
            f"at level {remaining.next_reward.level}, "
            f"{format_decimal(remaining.next_reward.remaining, 1)} away"
        )
    print(f"Distance to the end: {format_decimal(remaining.total, 1)}")

    low, high = compute_progress_range(world_map, current, args.target)
    print(f"Landing on level {args.target} needs {low} to {high}")

    bounds = {}
    if args.catalog is not None or config.catalog.chart_data.exists():
        catalog = load_catalog(args.catalog)
        if len(catalog):
            bounds = {
                "minimum_constant": catalog.minimum_constant,
                "maximum_constant": catalog.maximum_constant,
            }

    for solution in inverse_progress(args.step, low, high, **bounds):
        bonus = str(solution.bonus) if solution.bonus is not None else "no bonus"
        if solution.invalid_message is not None:
            print(f"{bonus}: {solution.invalid_message}")
        elif solution.pm_range is None:
            print(f"{bonus}: no PM constant fits")
        else:
            print(f"{bonus}: PM a {solution.pm_range[0]} to {solution.pm_range[1]} chart")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="toolbox")
    parser.add_argument(
        "--catalog",
        required=False,
        type=Path,
        help="Path to the chart data JSON. Defaults to the configured one.",
    )
    subparsers = parser.add_subparsers(
        title="subcommands", dest="command", required=True
    )

    b30 = subparsers.add_parser("b30", help="Show the best 30 of a profile")
    b30.add_argument("profile", type=Path)

    import_st3 = subparsers.add_parser(
        "import-st3", help="Merge an ST3 save file into a profile"
    )
    import_st3.add_argument("database", type=Path)
    import_st3.add_argument("profile", type=Path)
    import_st3.add_argument(
        "--username",
        required=False,
        help="Username for a new profile. Defaults to the file name.",
    )

    infer = subparsers.add_parser(
        "infer", help="Reconstruct judgments and potential from partial data"
    )
    infer.add_argument("chart", help="Chart id, e.g. grievouslady@ftr")
    infer.add_argument("--perfect", type=int)
    infer.add_argument("--far", type=int)
    infer.add_argument("--lost", type=int)
    infer.add_argument("--score", type=int)
    infer.add_argument(
        "--clear", type=ClearRank, choices=list(ClearRank), help="Clear shown in game"
    )

    progress = subparsers.add_parser(
        "progress", help="Find the potential that lands on a world map level"
    )
    progress.add_argument("--step", type=float, required=True)
    source = progress.add_mutually_exclusive_group(required=True)
    source.add_argument("--map", type=Path, help="World map JSON")
    source.add_argument("--platforms", help="Comma separated level lengths")
    progress.add_argument("--level", type=int, required=True)
    progress.add_argument(
        "--progress",
        type=float,
        required=True,
        help="Distance left in the current level",
    )
    progress.add_argument("--target", type=int, required=True)

    return parser


async def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if config.dangerous.dev else logging.INFO
    if config.logging.file:
        setup_file_logging(config.logging.file, level=level)
    else:
        setup_logging(level=level)

    try:
        if args.command == "b30":
            return command_b30(args)
        if args.command == "import-st3":
            return await command_import_st3(args)
        if args.command == "infer":
            return command_infer(args)
        if args.command == "progress":
            return command_progress(args)
    except (ArcaeaError, OSError) as e:
        logger.error("%s", e)
        return 1

    return 2


def run() -> None:
    sys.exit(asyncio.run(main()))
