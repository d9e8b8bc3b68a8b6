from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

import pygame

from config import CFG
from gui import (
    WINDOW_WIDTH, WINDOW_HEIGHT, BG,
    draw_top_bar, draw_region_grid,
)
from input_parser import ParseError, load_puzzle
from regions import Region, UnknownShapeError
from solver import PackingContext, RegionResult, count_fitting, solve_region

log = logging.getLogger("present_packer")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, CFG.LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Count the regions that can hold all of their presents."
    )
    parser.add_argument("input", help="puzzle input file (shape blocks + region lines)")
    parser.add_argument("--workers", type=int, default=CFG.WORKERS,
                        help="worker processes for checking regions")
    parser.add_argument("--node-limit", type=int, default=CFG.NODE_LIMIT,
                        help="max rows tried per region (0 = unlimited)")
    parser.add_argument("--time-limit", type=float, default=CFG.TIME_LIMIT,
                        help="max seconds per region (0 = unlimited)")
    parser.add_argument("--view", action="store_true",
                        help="browse the packings in a pygame window")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def run_viewer(regions: List[Region], results: List[RegionResult]) -> None:
    pygame.init()
    screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption("Present Packer")

    # Fonts
    title_font = pygame.font.SysFont("SF Pro Display", 28, bold=True)
    label_font = pygame.font.SysFont("SF Pro Text", 22)
    cell_font = pygame.font.SysFont("SF Pro Text", 16, bold=True)

    clock = pygame.time.Clock()
    current_idx = 0

    running = True
    while running:
        clock.tick(30)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_RIGHT and current_idx < len(regions) - 1:
                    current_idx += 1
                elif event.key == pygame.K_LEFT and current_idx > 0:
                    current_idx -= 1

        screen.fill(BG)
        if regions:
            region = regions[current_idx]
            result = results[current_idx]
            draw_top_bar(screen, title_font, label_font, current_idx, len(regions), region, result)
            draw_region_grid(screen, cell_font, region, result)

        pygame.display.flip()

    pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    _setup_logging(args.verbose)
    sys.setrecursionlimit(max(sys.getrecursionlimit(), CFG.RECURSION_LIMIT))

    try:
        shapes, regions = load_puzzle(args.input)
    except (OSError, ParseError) as exc:
        log.error("cannot read %s: %s", args.input, exc)
        return 2

    log.debug("Loaded %d shapes and %d regions", len(shapes), len(regions))

    try:
        if args.view:
            context = PackingContext()
            results = [
                solve_region(region, shapes, context,
                             node_limit=args.node_limit, time_limit=args.time_limit)
                for region in regions
            ]
            count = sum(1 for r in results if r.ok)
        else:
            count = count_fitting(regions, shapes, workers=args.workers,
                                  node_limit=args.node_limit, time_limit=args.time_limit)
    except UnknownShapeError as exc:
        log.error("region references unknown shape id %s", exc.args[0])
        return 2

    print(f"Regions that can fit all presents: {count} / {len(regions)}")

    if args.view:
        run_viewer(regions, results)
    return 0


if __name__ == "__main__":
    sys.exit(main())
