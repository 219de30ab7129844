"""Coin toss helper used before kickoff."""
import random
from typing import Optional

COIN_SIDES = ("Heads", "Tails")


def flip_coin(rng: Optional[random.Random] = None) -> str:
    """Return ``'Heads'`` or ``'Tails'`` with equal probability."""
    source = rng or random
    return COIN_SIDES[0] if source.random() < 0.5 else COIN_SIDES[1]
