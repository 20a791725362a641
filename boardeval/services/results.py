"""Read path: leaderboard, per-candidate breakdown and voting progress.

Each call works on one snapshot read; a ballot landing mid-call shows up on
the next call.
"""

from dataclasses import dataclass, field
from typing import List

from flask import current_app

from ..models import BoardMembership, Candidate, Rating, User
from ..scoring import PHASES, ScoringSettings, aggregate, item_breakdown, rank
from .repository import candidate_record, get_candidate, get_cohort, load_snapshot
from .settings import resolve_settings


@dataclass
class Leaderboard:
    cohort_id: int
    term: str
    year: int
    settings: ScoringSettings
    entries: List = field(default_factory=list)

    @property
    def export_filename(self):
        return f"{self.term}_{self.year}_Results.csv"

    def to_dict(self):
        return {
            "cohort_id": self.cohort_id,
            "term": self.term,
            "year": self.year,
            "settings": self.settings.to_dict(),
            "candidates": [e.to_dict() for e in self.entries],
        }


def compute_leaderboard(cohort_id) -> Leaderboard:
    cohort = get_cohort(cohort_id)
    settings = resolve_settings(cohort_id)
    snapshot = load_snapshot(cohort_id)
    aggregates = aggregate(snapshot, settings.outlier_std_devs)
    entries = rank(aggregates, settings.weights, top_n=settings.top_n)
    current_app.logger.debug("cohort %s leaderboard: %d candidates, %d ballots",
                             cohort_id, len(entries), len(snapshot.ratings))
    return Leaderboard(cohort_id=cohort.id, term=cohort.term, year=cohort.year,
                       settings=settings, entries=entries)


def candidate_breakdown(cohort_id, candidate_id) -> dict:
    """Item-by-item statistics for one candidate, comments included."""
    candidate = get_candidate(candidate_id, cohort_id)
    settings = resolve_settings(cohort_id)
    snapshot = load_snapshot(cohort_id, include_inactive=True)
    rows = item_breakdown(snapshot, candidate.id, settings.outlier_std_devs)

    phases = {p.value: [] for p in PHASES}
    for row in rows:
        phases[row.item.phase.value].append(row.to_dict())

    rec = candidate_record(candidate)
    return {
        "candidate": {
            "id": rec.id,
            "candidate_number": rec.candidate_number,
            "first_name": rec.first_name,
            "last_name": rec.last_name,
            "email": rec.email,
            "is_active": rec.is_active,
        },
        "outlier_std_devs": settings.outlier_std_devs,
        "phases": phases,
        "has_scores": bool(rows),
    }


def board_progress(cohort_id) -> dict:
    """Ballots cast per board member and phase.

    An abstain counts as a cast ballot here even though it adds no values
    to any average.
    """
    get_cohort(cohort_id)
    members = (
        BoardMembership.query.filter_by(cohort_id=cohort_id)
        .join(User, User.id == BoardMembership.user_id)
        .order_by(User.last_name, User.first_name, User.email)
        .all()
    )
    active_ids = {c.id for c in Candidate.query.filter_by(cohort_id=cohort_id, is_active=True).all()}
    candidate_count = len(active_ids)

    counts = {}
    for r in Rating.query.filter(Rating.cohort_id == cohort_id, Rating.voter_id.isnot(None)).all():
        if r.candidate_id not in active_ids:
            continue
        per_phase = counts.setdefault(r.voter_id, {p.value: 0 for p in PHASES})
        per_phase[r.rating_type] += 1

    rows = []
    for m in members:
        done = counts.get(m.user_id, {p.value: 0 for p in PHASES})
        rows.append({
            "user_id": m.user_id,
            "name": m.user.display_name,
            "email": m.user.email,
            "position": m.position,
            "phases": {
                phase: {"count": n, "total": candidate_count, "complete": candidate_count > 0 and n >= candidate_count}
                for phase, n in done.items()
            },
        })
    return {"cohort_id": cohort_id, "candidate_count": candidate_count, "members": rows}
