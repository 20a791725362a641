"""Score aggregation and ranking engine (pure, no Flask or database)."""

from .records import (
    DEFAULT_SETTINGS,
    PHASES,
    CandidateAggregates,
    CandidateRecord,
    CohortSnapshot,
    HistoricalAlias,
    ItemBreakdown,
    ItemKey,
    ItemKind,
    ItemRecord,
    LiveUser,
    Phase,
    PhaseAggregate,
    RaterIdentity,
    RatingRecord,
    ScoreRecord,
    ScoringSettings,
)
from .stats import classify_outliers, mean, population_std_dev
from .aggregate import aggregate, item_breakdown
from .ranking import RankedCandidate, composite_score, consistency, rank, round_half_up

__all__ = [
    "DEFAULT_SETTINGS",
    "PHASES",
    "CandidateAggregates",
    "CandidateRecord",
    "CohortSnapshot",
    "HistoricalAlias",
    "ItemBreakdown",
    "ItemKey",
    "ItemKind",
    "ItemRecord",
    "LiveUser",
    "Phase",
    "PhaseAggregate",
    "RaterIdentity",
    "RatingRecord",
    "RankedCandidate",
    "ScoreRecord",
    "ScoringSettings",
    "aggregate",
    "classify_outliers",
    "composite_score",
    "consistency",
    "item_breakdown",
    "mean",
    "population_std_dev",
    "rank",
    "round_half_up",
]
