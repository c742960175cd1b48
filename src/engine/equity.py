from typing import List

from .models import EquityPoint, EquitySegment

UP = "up"
DOWN = "down"


def segment_equity_curve(points: List[EquityPoint]) -> List[EquitySegment]:
    """
    Split the equity curve into runs that move in one direction, for
    two-colour plotting.

    A segment's trend is set by its first non-zero move. A move against
    that trend closes the segment at the previous point and starts a new
    one there, so neighbours share exactly one boundary point. Flat moves
    never start a new segment.

    Each segment is labelled "up" if it ends at or above where it
    started, otherwise "down".
    """
    if not points:
        return []

    segments: List[EquitySegment] = []
    current: List[EquityPoint] = [points[0]]
    trend: str | None = None

    for prev, curr in zip(points, points[1:]):
        direction = _direction(curr.value - prev.value)

        if direction is not None:
            if trend is None:
                trend = direction
            elif direction != trend:
                segments.append(_close(current))
                current = [prev]
                trend = direction

        current.append(curr)

    segments.append(_close(current))
    return segments


def flatten_segments(segments: List[EquitySegment]) -> List[EquityPoint]:
    # inverse of segment_equity_curve: drop the shared boundary points
    points: List[EquityPoint] = []
    for i, seg in enumerate(segments):
        points.extend(seg.points if i == 0 else seg.points[1:])
    return points


def _direction(delta: float) -> str | None:
    if delta > 0:
        return UP
    if delta < 0:
        return DOWN
    return None


def _close(points: List[EquityPoint]) -> EquitySegment:
    trend = UP if points[-1].value >= points[0].value else DOWN
    return EquitySegment(points=list(points), trend=trend)
