# gui.py

from __future__ import annotations

from typing import Dict, List, Tuple

import pygame

from config import CFG
from placements import Placement, cell_coords
from regions import Region
from solver import RegionResult

TOP_BAR_HEIGHT = 120
MARGIN = 16

WINDOW_WIDTH = 720
WINDOW_HEIGHT = 640

# Colors – higher contrast, refined dark mode
BG = (15, 15, 17)
CARD_BG = (30, 30, 34)
GRID = (90, 90, 95)
TEXT_MAIN = (245, 245, 250)
TEXT_SECONDARY = (230, 230, 235)

FIT_OK = (50, 220, 90)
FIT_FAIL = (220, 90, 90)

# More contrast, vivid colors (indexed by shape id)
PIECE_COLORS: List[Tuple[int, int, int]] = [
    (60, 200, 80),
    (45, 140, 255),
    (255, 190, 60),
    (190, 70, 210),
    (90, 220, 220),
    (250, 80, 80),
    (210, 145, 50),
    (110, 120, 255),
    (255, 160, 210),
]


def shape_color(shape_id: int, instance: int = 0) -> Tuple[int, int, int]:
    """Base color for the shape, alternately darkened so neighbouring copies stay distinguishable."""
    r, g, b = PIECE_COLORS[shape_id % len(PIECE_COLORS)]
    if instance % 2:
        return (r * 3 // 4, g * 3 // 4, b * 3 // 4)
    return (r, g, b)


def cell_owner_map(placements: List[Tuple[int, Placement]]) -> Dict[int, int]:
    """Cell index -> index of the placement covering it."""
    owners: Dict[int, int] = {}
    for idx, (_, cells) in enumerate(placements):
        for cell in cells:
            owners[cell] = idx
    return owners


def fit_cell_size(region: Region, screen_size: Tuple[int, int]) -> int:
    w, h = screen_size
    avail_w = w - 2 * MARGIN
    avail_h = h - TOP_BAR_HEIGHT - MARGIN
    if region.width <= 0 or region.height <= 0:
        return CFG.CELL_SIZE
    size = min(avail_w // region.width, avail_h // region.height, CFG.CELL_SIZE)
    return max(2, size)


def draw_top_bar(
    screen: pygame.Surface,
    title_font: pygame.font.Font,
    label_font: pygame.font.Font,
    current_idx: int,
    total_regions: int,
    region: Region,
    result: RegionResult,
):
    w, _ = screen.get_size()
    pygame.draw.rect(screen, BG, (0, 0, w, TOP_BAR_HEIGHT))

    card_rect = pygame.Rect(MARGIN, MARGIN, w - 2 * MARGIN, TOP_BAR_HEIGHT - 2 * MARGIN)
    pygame.draw.rect(screen, CARD_BG, card_rect, border_radius=16)

    title_surf = title_font.render(region.label(), True, TEXT_MAIN)
    screen.blit(title_surf, (card_rect.x + 20, card_rect.y + 12))

    status = "Fits" if result.ok else f"Does not fit ({result.reason})"
    status_surf = label_font.render(status, True, FIT_OK if result.ok else FIT_FAIL)
    status_x = card_rect.right - status_surf.get_width() - 20
    screen.blit(status_surf, (status_x, card_rect.y + 12))

    nav_text = f"Region {current_idx + 1} of {total_regions}"
    nav_surf = label_font.render(nav_text, True, TEXT_SECONDARY)
    screen.blit(nav_surf, (card_rect.x + 20, card_rect.y + 48))


def draw_region_grid(
    screen: pygame.Surface,
    cell_font: pygame.font.Font | None,
    region: Region,
    result: RegionResult,
):
    """Draws the region with the packing found (if any)."""
    cell_size = fit_cell_size(region, screen.get_size())
    owners = cell_owner_map(result.placements)
    radius = max(0, cell_size // 5)
    inset = 2 if cell_size > 8 else 0

    board_w = region.width * cell_size
    origin_x = (screen.get_width() - board_w) // 2
    origin_y = TOP_BAR_HEIGHT

    for index in range(region.area):
        c, r = cell_coords(index, region.width)
        x = origin_x + c * cell_size
        y = origin_y + r * cell_size
        rect = pygame.Rect(x + inset, y + inset, cell_size - 2 * inset, cell_size - 2 * inset)

        if index in owners:
            placement_idx = owners[index]
            shape_id = result.placements[placement_idx][0]
            pygame.draw.rect(screen, shape_color(shape_id, placement_idx), rect, border_radius=radius)

            if cell_font is not None and cell_size >= 24:
                text_surf = cell_font.render(str(shape_id), True, (255, 255, 255))
                screen.blit(
                    text_surf,
                    (
                        x + (cell_size - text_surf.get_width()) // 2,
                        y + (cell_size - text_surf.get_height()) // 2,
                    ),
                )
        else:
            # Empty cell
            pygame.draw.rect(screen, BG, rect, border_radius=radius)
            pygame.draw.rect(screen, GRID, rect, width=1, border_radius=radius)
