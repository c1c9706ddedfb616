# utils.py
import random
import string
from typing import Any, Iterable, List

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits


def shuffle(arr, rng=random):
    tmp = list(arr)
    rng.shuffle(tmp)
    return tmp


def generate_room_code(existing: Iterable[str] = (), length: int = 6, rng=random) -> str:
    """Short shareable room code that does not collide with `existing`."""
    taken = set(existing)
    while True:
        code = "".join(rng.choice(ROOM_CODE_ALPHABET) for _ in range(length))
        if code not in taken:
            return code


def player_key(index: int) -> str:
    """Score-table key used by the board payloads ("player1" / "player2")."""
    return f"player{index + 1}"


def flatten(grid: List[List[Any]]) -> List[Any]:
    return [cell for row in grid for cell in row]
