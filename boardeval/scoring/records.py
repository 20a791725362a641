"""Typed records exchanged between the repository layer and the engine.

The repository assembles these from database rows; the engine never sees an
ORM object. Everything here is immutable so a snapshot can be shared between
concurrent readers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class Phase(str, Enum):
    """The three independent evaluation tracks."""

    APPLICATION = "application"
    INTERVIEW = "interview"
    CHARACTER = "character"

    @property
    def item_kind(self) -> "ItemKind":
        if self is Phase.CHARACTER:
            return ItemKind.TRAIT
        return ItemKind.QUESTION

    @classmethod
    def parse(cls, value) -> "Phase":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"unknown phase {value!r}") from None


PHASES = (Phase.APPLICATION, Phase.INTERVIEW, Phase.CHARACTER)


class ItemKind(str, Enum):
    QUESTION = "question"
    TRAIT = "trait"


@dataclass(frozen=True)
class ItemKey:
    """A scorable item, unique across questions and traits."""

    kind: ItemKind
    item_id: int


@dataclass(frozen=True)
class LiveUser:
    user_id: int

    @property
    def label(self) -> str:
        return f"user:{self.user_id}"


@dataclass(frozen=True)
class HistoricalAlias:
    name: str

    @property
    def label(self) -> str:
        return f"alias:{self.name}"


RaterIdentity = Union[LiveUser, HistoricalAlias]


@dataclass(frozen=True)
class CandidateRecord:
    id: int
    is_active: bool = True
    display_order: Optional[int] = None
    candidate_number: Optional[int] = None
    first_name: str = ""
    last_name: str = ""
    email: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def sort_key(self):
        # custom_order first (unset last), then the stable candidate number
        return (
            self.display_order is None,
            self.display_order if self.display_order is not None else 0,
            self.candidate_number is None,
            self.candidate_number if self.candidate_number is not None else 0,
            self.id,
        )


@dataclass(frozen=True)
class RatingRecord:
    id: int
    candidate_id: int
    rater: RaterIdentity
    phase: Phase


@dataclass(frozen=True)
class ScoreRecord:
    rating_id: int
    item: ItemKey
    value: float
    comment: Optional[str] = None


@dataclass(frozen=True)
class ItemRecord:
    key: ItemKey
    label: str
    phase: Phase
    order: int = 0


@dataclass(frozen=True)
class CohortSnapshot:
    """Everything the read path needs for one cohort, fetched in one go."""

    cohort_id: int
    candidates: tuple = ()
    ratings: tuple = ()
    scores: tuple = ()
    items: tuple = ()


@dataclass(frozen=True)
class ScoringSettings:
    application_weight: float
    interview_weight: float
    character_weight: float
    outlier_std_devs: float
    top_n: int

    @property
    def weights(self) -> dict:
        return {
            Phase.APPLICATION: self.application_weight,
            Phase.INTERVIEW: self.interview_weight,
            Phase.CHARACTER: self.character_weight,
        }

    def to_dict(self) -> dict:
        return {
            "application_weight": self.application_weight,
            "interview_weight": self.interview_weight,
            "character_weight": self.character_weight,
            "outlier_std_devs": self.outlier_std_devs,
            "top_n": self.top_n,
        }


DEFAULT_SETTINGS = ScoringSettings(
    application_weight=0.4,
    interview_weight=0.3,
    character_weight=0.3,
    outlier_std_devs=2.0,
    top_n=10,
)


@dataclass
class PhaseAggregate:
    average: Optional[float] = None
    raw_scores: list = field(default_factory=list)
    outliers: list = field(default_factory=list)
    is_complete: bool = False
    # ballots received, abstains included
    rating_count: int = 0

    def to_dict(self) -> dict:
        return {
            "average": self.average,
            "raw_scores": list(self.raw_scores),
            "outliers": list(self.outliers),
            "outlier_count": len(self.outliers),
            "is_complete": self.is_complete,
            "rating_count": self.rating_count,
        }


@dataclass
class CandidateAggregates:
    candidate: CandidateRecord
    application: PhaseAggregate = field(default_factory=PhaseAggregate)
    interview: PhaseAggregate = field(default_factory=PhaseAggregate)
    character: PhaseAggregate = field(default_factory=PhaseAggregate)

    def phase(self, phase: Phase) -> PhaseAggregate:
        return getattr(self, Phase.parse(phase).value)

    @property
    def total_raw(self) -> int:
        return sum(len(self.phase(p).raw_scores) for p in PHASES)

    @property
    def total_outliers(self) -> int:
        return sum(len(self.phase(p).outliers) for p in PHASES)


@dataclass
class ItemBreakdown:
    item: ItemRecord
    scores: list
    outliers: list
    adjusted_average: Optional[float]
    raw_average: Optional[float]
    comments: list

    @property
    def votes(self) -> int:
        return len(self.scores)

    def to_dict(self) -> dict:
        return {
            "item_id": self.item.key.item_id,
            "kind": self.item.key.kind.value,
            "label": self.item.label,
            "phase": self.item.phase.value,
            "scores": list(self.scores),
            "outliers": list(self.outliers),
            "adjusted_average": self.adjusted_average,
            "raw_average": self.raw_average,
            "votes": self.votes,
            "comments": list(self.comments),
        }
