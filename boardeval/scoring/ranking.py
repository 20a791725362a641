"""Composite ranker.

Turns per-phase averages into one ordered leaderboard. Weights are trusted
as given; they were validated when the cohort settings were written.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional

from .records import PHASES, CandidateAggregates, CandidateRecord, Phase, PhaseAggregate


def round_half_up(value: float, places: int = 2) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


@dataclass
class RankedCandidate:
    rank: int
    candidate: CandidateRecord
    application: PhaseAggregate
    interview: PhaseAggregate
    character: PhaseAggregate
    composite: Optional[float]
    consistency: Optional[int]
    is_top: bool = False

    @property
    def is_pending(self) -> bool:
        return self.composite is None

    def phase(self, phase: Phase) -> PhaseAggregate:
        return getattr(self, Phase.parse(phase).value)

    def to_dict(self) -> dict:
        c = self.candidate
        return {
            "rank": self.rank,
            "candidate_id": c.id,
            "candidate_number": c.candidate_number,
            "first_name": c.first_name,
            "last_name": c.last_name,
            "email": c.email,
            "application": self.application.to_dict(),
            "interview": self.interview.to_dict(),
            "character": self.character.to_dict(),
            "composite": self.composite,
            "consistency": self.consistency,
            "is_top": self.is_top,
            "pending": self.is_pending,
        }


def composite_score(aggregates: CandidateAggregates, weights: Dict[Phase, float]) -> Optional[float]:
    """Weighted sum of the three phase averages, or None while any is missing.

    A missing phase is never treated as zero.
    """
    averages = [aggregates.phase(p).average for p in PHASES]
    if any(a is None for a in averages):
        return None
    total = sum(avg * weights[p] for avg, p in zip(averages, PHASES))
    return round_half_up(total, 2)


def consistency(aggregates: CandidateAggregates) -> Optional[int]:
    """Percentage of raw scores that were not outliers; None without scores."""
    total = aggregates.total_raw
    if total == 0:
        return None
    pct = (total - aggregates.total_outliers) / total * 100
    return int(round_half_up(pct, 0))


def rank(aggregates: Iterable[CandidateAggregates], weights: Dict[Phase, float], top_n: int = 0) -> List[RankedCandidate]:
    """Leaderboard sorted by composite, highest first.

    Pending candidates follow every scored one. The sort is stable, so ties
    and pending candidates keep the order they came in (display order when
    fed straight from `aggregate`).
    """
    if isinstance(aggregates, dict):
        aggregates = aggregates.values()

    scored = [(agg, composite_score(agg, weights)) for agg in aggregates]
    scored = sorted(scored, key=lambda pair: (pair[1] is None, -(pair[1] or 0.0)))

    board = []
    for position, (agg, composite) in enumerate(scored, start=1):
        board.append(RankedCandidate(
            rank=position,
            candidate=agg.candidate,
            application=agg.application,
            interview=agg.interview,
            character=agg.character,
            composite=composite,
            consistency=consistency(agg),
            is_top=composite is not None and position <= top_n,
        ))
    return board
