from __future__ import annotations

from typing import List, Sequence

import pytest


class FirstChoice:
    """Deterministic stand-in for random.Random: always picks the first item."""

    def __init__(self) -> None:
        self.seen: List[Sequence] = []

    def choice(self, seq):
        self.seen.append(list(seq))
        return seq[0]


@pytest.fixture
def first_choice() -> FirstChoice:
    return FirstChoice()
