# flapgap/game/collision.py
from __future__ import annotations
from typing import Iterable, Optional, Tuple

from .config import AVATAR_W, AVATAR_H
from .entities import Avatar, Obstacle


def avatar_box(avatar: Avatar) -> Tuple[float, float, float, float]:
    """(left, top, right, bottom) of the avatar's AABB, centered on its position."""
    return (
        avatar.x - AVATAR_W / 2,
        avatar.y - AVATAR_H / 2,
        avatar.x + AVATAR_W / 2,
        avatar.y + AVATAR_H / 2,
    )


def collides(avatar: Avatar, obstacle: Obstacle) -> bool:
    """Avatar box overlaps the obstacle's column and pokes out of its gap."""
    left, top, right, bottom = avatar_box(avatar)
    if right > obstacle.x and left < obstacle.x + obstacle.width:
        return top < obstacle.top_height or bottom > obstacle.bottom_y
    return False


def first_hit(avatar: Avatar, obstacles: Iterable[Obstacle]) -> Optional[Obstacle]:
    """Scan in the given (creation) order, stop at the first collision."""
    for ob in obstacles:
        if collides(avatar, ob):
            return ob
    return None
