"""Placement math for items on a diary page.

Items are boxes on a fixed-size page. While an item is dragged its edges are
pulled onto nearby page edges and sibling edges/centres when they are within
``threshold`` pixels; otherwise the position is rounded to the grid. Resizing
pulls the right/bottom edges the same way and enforces a minimum size. The
result never leaves the page and never goes negative.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from studyatlas.schemas.diary import PageBounds, Rect, SnapGuides


def snap_to_grid(value: float, grid_size: int) -> float:
    """Round ``value`` to the nearest multiple of ``grid_size``."""
    if grid_size <= 0:
        return value
    return float(round(value / grid_size) * grid_size)


def clamp(value: float, low: float, high: float) -> float:
    if high < low:
        return low
    return max(low, min(value, high))


def _dedupe(values: Iterable[float]) -> List[float]:
    seen = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


def calculate_snap_guides(current: Rect, others: Sequence[Rect], threshold: float = 8) -> SnapGuides:
    """Alignment lines between ``current`` and every sibling within ``threshold``."""
    vertical: List[float] = []
    horizontal: List[float] = []

    for item in others:
        if abs(current.x - item.x) <= threshold:
            vertical.append(item.x)
        if abs(current.right - item.right) <= threshold:
            vertical.append(item.right)
        if abs(current.x - item.right) <= threshold:
            vertical.append(item.right)
        if abs(current.right - item.x) <= threshold:
            vertical.append(item.x)
        if abs(current.center_x - item.center_x) <= threshold:
            vertical.append(item.center_x)

        if abs(current.y - item.y) <= threshold:
            horizontal.append(item.y)
        if abs(current.bottom - item.bottom) <= threshold:
            horizontal.append(item.bottom)
        if abs(current.y - item.bottom) <= threshold:
            horizontal.append(item.bottom)
        if abs(current.bottom - item.y) <= threshold:
            horizontal.append(item.y)
        if abs(current.center_y - item.center_y) <= threshold:
            horizontal.append(item.center_y)

    return SnapGuides(vertical=_dedupe(vertical), horizontal=_dedupe(horizontal))


def _nearest(origin: float, candidates: Iterable[float], threshold: float) -> Optional[float]:
    """Candidate closest to ``origin`` within ``threshold``; the first one wins ties."""
    best: Optional[float] = None
    best_distance = threshold
    for candidate in candidates:
        distance = abs(candidate - origin)
        if distance <= best_distance and (best is None or distance < best_distance):
            best, best_distance = candidate, distance
    return best


def _axis_start_candidates(
    start: float,
    length: float,
    page_length: float,
    siblings: Sequence[Tuple[float, float]],
) -> List[float]:
    """Start positions that put one of the moving edges on a page or sibling line.

    ``siblings`` holds ``(start, length)`` pairs on the same axis.
    """
    candidates = [0.0, page_length - length]
    for sib_start, sib_length in siblings:
        sib_end = sib_start + sib_length
        sib_center = sib_start + sib_length / 2
        candidates.extend(
            [
                sib_start,  # start on start
                sib_end,  # start on end
                sib_end - length,  # end on end
                sib_start - length,  # end on start
                sib_center - length / 2,  # centre on centre
            ]
        )
    return candidates


def _snap_axis(
    start: float,
    length: float,
    page_length: float,
    siblings: Sequence[Tuple[float, float]],
    threshold: float,
    grid_size: int,
) -> float:
    candidates = _axis_start_candidates(start, length, page_length, siblings)
    snapped = _nearest(start, candidates, threshold)
    if snapped is None:
        snapped = snap_to_grid(start, grid_size)
    return clamp(snapped, 0, page_length - length)


def snap_position(
    rect: Rect,
    siblings: Sequence[Rect],
    page: PageBounds,
    threshold: float = 8,
    grid_size: int = 20,
) -> Rect:
    """Snap a moved item; size is kept, only x/y change."""
    x = _snap_axis(rect.x, rect.width, page.width, [(s.x, s.width) for s in siblings], threshold, grid_size)
    y = _snap_axis(rect.y, rect.height, page.height, [(s.y, s.height) for s in siblings], threshold, grid_size)
    return Rect(x=x, y=y, width=rect.width, height=rect.height)


def _snap_extent(
    start: float,
    length: float,
    page_length: float,
    sibling_lines: Iterable[float],
    threshold: float,
    grid_size: int,
    minimum: float,
) -> float:
    end = start + length
    target = _nearest(end, [page_length, *sibling_lines], threshold)
    if target is None:
        target = snap_to_grid(end, grid_size)
    snapped = target - start
    max_length = max(page_length - start, minimum)
    return clamp(snapped, minimum, max_length)


def snap_size(
    rect: Rect,
    siblings: Sequence[Rect],
    page: PageBounds,
    threshold: float = 8,
    grid_size: int = 20,
    min_width: float = 40,
    min_height: float = 40,
) -> Rect:
    """Snap a resized item's right and bottom edges; the top-left corner stays put."""
    vertical_lines = [line for s in siblings for line in (s.x, s.right)]
    horizontal_lines = [line for s in siblings for line in (s.y, s.bottom)]
    width = _snap_extent(rect.x, rect.width, page.width, vertical_lines, threshold, grid_size, min_width)
    height = _snap_extent(rect.y, rect.height, page.height, horizontal_lines, threshold, grid_size, min_height)
    return Rect(x=rect.x, y=rect.y, width=width, height=height)


def constrain(
    rect: Rect,
    page: PageBounds,
    min_width: float = 40,
    min_height: float = 40,
) -> Rect:
    """Apply only the hard limits (min size, on-page, non-negative) without snapping."""
    width = max(rect.width, min_width)
    height = max(rect.height, min_height)
    x = clamp(rect.x, 0, page.width - width)
    y = clamp(rect.y, 0, page.height - height)
    return Rect(x=x, y=y, width=width, height=height)
