"""
Round Robin Pairing

Circle-method 1-factorization used by the league schedule generator:
1. Participants are shuffled (Fisher-Yates) so pairings differ per generation
2. Odd rosters are padded with a BYE placeholder
3. Position 0 is fixed, the rest rotate one step per round
"""

import random
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence


class _Bye:
    """Placeholder opponent for odd-sized rosters"""

    def __repr__(self) -> str:
        return "BYE"


BYE = _Bye()


@dataclass(frozen=True)
class Pairing:
    """One slot of a round: slot index is the position pair (i, N-1-i)"""

    slot: int
    home: Any
    away: Any

    @property
    def is_bye(self) -> bool:
        return self.home is BYE or self.away is BYE


def shuffle(items: Sequence[Any], rng: Optional[random.Random] = None) -> List[Any]:
    """
    Return a uniformly random permutation of ``items`` (Fisher-Yates on a copy).

    For i from the last index down to 1, swap position i with a uniform index in [0, i].
    """
    rng = rng or random.Random()
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def circle_rounds(participants: Sequence[Any]) -> List[List[Pairing]]:
    """
    Circle-method pairings, one list of N/2 pairings per round (N-1 rounds).

    Even rounds put position i at home and position N-1-i away; odd rounds swap
    sides so the anchor alternates home and away. Pairings against BYE are kept
    here (``Pairing.is_bye``) so slot indices stay stable; callers drop them.
    """
    positions = list(participants)
    if len(positions) < 2:
        raise ValueError(f"circle_rounds: need at least 2 participants, got {len(positions)}")
    if len(positions) % 2 != 0:
        positions.append(BYE)

    n = len(positions)
    half = n // 2
    rounds: List[List[Pairing]] = []

    for round_index in range(n - 1):
        pairings = []
        for i in range(half):
            first, second = positions[i], positions[n - 1 - i]
            if round_index % 2 == 0:
                pairings.append(Pairing(slot=i, home=first, away=second))
            else:
                pairings.append(Pairing(slot=i, home=second, away=first))
        rounds.append(pairings)

        # Rotate: keep 0, move last to second, shift others
        positions = [positions[0]] + [positions[-1]] + positions[1:-1]

    return rounds
