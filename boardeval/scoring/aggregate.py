"""Aggregation engine.

One deterministic pass over a cohort snapshot: group scores by candidate,
phase and scorable item, classify outliers per item, then pool per phase.
Outlier detection is never run on scores pooled across items; a 9 can be
ordinary on a lenient question and extreme on a strict one.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, Optional

from .records import (
    PHASES,
    CandidateAggregates,
    CohortSnapshot,
    ItemBreakdown,
    ItemKey,
    ItemRecord,
    Phase,
    PhaseAggregate,
)
from .stats import classify_outliers, mean

logger = logging.getLogger(__name__)


def _aggregate_phase(groups: Dict[ItemKey, List[float]], threshold: float, rating_count: int) -> PhaseAggregate:
    raw: List[float] = []
    outliers: List[float] = []
    inliers: List[float] = []
    for key in sorted(groups, key=lambda k: (k.kind.value, k.item_id)):
        values = groups[key]
        flagged, kept = classify_outliers(values, threshold)
        raw.extend(values)
        outliers.extend(flagged)
        inliers.extend(kept)

    if not raw:
        return PhaseAggregate(rating_count=rating_count)

    # every score flagged still leaves the candidate with a usable average
    average = mean(inliers) if inliers else mean(raw)
    return PhaseAggregate(
        average=average,
        raw_scores=raw,
        outliers=outliers,
        is_complete=True,
        rating_count=rating_count,
    )


def _group_scores(snapshot: CohortSnapshot, candidate_ids):
    """Map candidate -> phase -> item -> [scores] (and rating counts).

    Dangling references are logged and skipped; one bad row never aborts
    the pass for the rest of the cohort.
    """
    ratings = {}
    known = {r.id for r in snapshot.ratings}
    counts = defaultdict(lambda: defaultdict(int))
    for rating in snapshot.ratings:
        if rating.candidate_id not in candidate_ids:
            logger.debug("cohort %s: rating %s for inactive or unknown candidate %s skipped",
                         snapshot.cohort_id, rating.id, rating.candidate_id)
            continue
        ratings[rating.id] = rating
        counts[rating.candidate_id][rating.phase] += 1

    grouped = defaultdict(lambda: defaultdict(lambda: defaultdict(list)))
    comments = defaultdict(list)
    for score in snapshot.scores:
        rating = ratings.get(score.rating_id)
        if rating is None:
            if score.rating_id not in known:
                logger.warning("cohort %s: score for missing rating %s skipped",
                               snapshot.cohort_id, score.rating_id)
            continue
        if score.item.kind is not rating.phase.item_kind:
            logger.warning("cohort %s: rating %s (%s) holds a %s score, skipped",
                           snapshot.cohort_id, rating.id, rating.phase.value, score.item.kind.value)
            continue
        grouped[rating.candidate_id][rating.phase][score.item].append(float(score.value))
        if score.comment:
            comments[(rating.candidate_id, score.item)].append(score.comment)
    return grouped, counts, comments


def ordered_candidates(snapshot: CohortSnapshot):
    """Active candidates in display order."""
    return sorted((c for c in snapshot.candidates if c.is_active), key=lambda c: c.sort_key())


def aggregate(snapshot: CohortSnapshot, threshold_std_devs: float) -> Dict[int, CandidateAggregates]:
    """Per-candidate phase aggregates, keyed by candidate id in display order."""
    candidates = ordered_candidates(snapshot)
    candidate_ids = {c.id for c in candidates}
    grouped, counts, _ = _group_scores(snapshot, candidate_ids)

    results: Dict[int, CandidateAggregates] = {}
    for candidate in candidates:
        per_phase = {
            phase: _aggregate_phase(
                grouped[candidate.id][phase],
                threshold_std_devs,
                counts[candidate.id][phase],
            )
            for phase in PHASES
        }
        results[candidate.id] = CandidateAggregates(
            candidate=candidate,
            application=per_phase[Phase.APPLICATION],
            interview=per_phase[Phase.INTERVIEW],
            character=per_phase[Phase.CHARACTER],
        )
    return results


def item_breakdown(snapshot: CohortSnapshot, candidate_id: int, threshold_std_devs: float) -> List[ItemBreakdown]:
    """Per-item statistics for one candidate, in phase then item order.

    Items that received no score from anyone are left out.
    """
    grouped, _, comments = _group_scores(snapshot, {candidate_id})
    items = {item.key: item for item in snapshot.items}
    phase_rank = {phase: i for i, phase in enumerate(PHASES)}

    rows = []
    for phase, by_item in grouped[candidate_id].items():
        for key, values in by_item.items():
            item = items.get(key)
            if item is None:
                logger.warning("cohort %s: scores for unknown item %s/%s",
                               snapshot.cohort_id, key.kind.value, key.item_id)
                item = ItemRecord(key=key, label="Unknown Item", phase=phase)
            flagged, kept = classify_outliers(values, threshold_std_devs)
            raw_average: Optional[float] = mean(values) if values else None
            rows.append(ItemBreakdown(
                item=item,
                scores=list(values),
                outliers=flagged,
                adjusted_average=mean(kept) if kept else raw_average,
                raw_average=raw_average,
                comments=comments.get((candidate_id, key), []),
            ))
    rows.sort(key=lambda r: (phase_rank[r.item.phase], r.item.order, r.item.key.item_id))
    return rows
