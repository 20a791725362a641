import pytest

from boardeval.scoring import (
    DEFAULT_SETTINGS,
    CandidateAggregates,
    CandidateRecord,
    Phase,
    PhaseAggregate,
    composite_score,
    consistency,
    rank,
    round_half_up,
)

WEIGHTS = DEFAULT_SETTINGS.weights


def phase(average, raw=None, outliers=None):
    if average is None:
        return PhaseAggregate()
    return PhaseAggregate(average=average, raw_scores=raw or [average],
                          outliers=outliers or [], is_complete=True, rating_count=1)


def candidate(cid, app=None, interview=None, character=None, **kw):
    return CandidateAggregates(
        candidate=CandidateRecord(id=cid, candidate_number=cid, **kw),
        application=app if isinstance(app, PhaseAggregate) else phase(app),
        interview=interview if isinstance(interview, PhaseAggregate) else phase(interview),
        character=character if isinstance(character, PhaseAggregate) else phase(character),
    )


def test_composite_uses_weights():
    agg = candidate(1, 8.0, 6.0, 7.0)
    assert composite_score(agg, WEIGHTS) == pytest.approx(7.1)


def test_composite_is_none_when_a_phase_is_missing():
    assert composite_score(candidate(1, 9.0, 9.0, None), WEIGHTS) is None


def test_zero_average_is_not_missing():
    assert composite_score(candidate(1, 0.0, 0.0, 0.0), WEIGHTS) == 0.0


def test_composite_rounds_half_up():
    weights = {Phase.APPLICATION: 0.5, Phase.INTERVIEW: 0.5, Phase.CHARACTER: 0.0}
    # 0.5 * 7.125 + 0.5 * 7.125 would round to 7.12 with banker's rounding
    assert composite_score(candidate(1, 7.125, 7.125, 1.0), weights) == 7.13


@pytest.mark.parametrize("value,places,expected", [
    (2.675, 2, 2.68),
    (1.005, 2, 1.01),
    (87.5, 0, 88.0),
    (86.5, 0, 87.0),
    (3.0, 2, 3.0),
])
def test_round_half_up(value, places, expected):
    assert round_half_up(value, places) == expected


def test_leaderboard_orders_by_composite_with_pending_last():
    board = rank([
        candidate(1, 6.0, 6.0, 6.0),
        candidate(2, 9.0, 9.0, None),
        candidate(3, 8.0, 8.0, 8.0),
        candidate(4, None, None, None),
        candidate(5, 7.0, 7.0, 7.0),
    ], WEIGHTS, top_n=2)

    assert [r.candidate.id for r in board] == [3, 5, 1, 2, 4]
    assert [r.rank for r in board] == [1, 2, 3, 4, 5]
    assert [r.is_top for r in board] == [True, True, False, False, False]
    assert board[3].is_pending and board[3].composite is None
    assert board[0].composite == 8.0


def test_pending_candidate_is_never_top():
    board = rank([candidate(1, 9.0, None, None)], WEIGHTS, top_n=10)
    assert board[0].is_top is False
    assert board[0].rank == 1


def test_ties_keep_input_order():
    board = rank([
        candidate(7, 5.0, 5.0, 5.0),
        candidate(2, 5.0, 5.0, 5.0),
        candidate(4, 5.0, 5.0, 5.0),
    ], WEIGHTS)
    assert [r.candidate.id for r in board] == [7, 2, 4]


def test_rank_accepts_aggregate_mapping():
    aggs = {1: candidate(1, 4.0, 4.0, 4.0), 2: candidate(2, 6.0, 6.0, 6.0)}
    assert [r.candidate.id for r in rank(aggs, WEIGHTS)] == [2, 1]


def test_top_n_zero_marks_nobody():
    board = rank([candidate(1, 5.0, 5.0, 5.0)], WEIGHTS, top_n=0)
    assert board[0].is_top is False


def test_consistency_percentage():
    agg = candidate(
        1,
        phase(6.0, raw=[6, 6, 6, 9], outliers=[9]),
        phase(6.0, raw=[6, 6, 6, 6]),
        phase(6.0, raw=[6, 6, 6, 6]),
    )
    # 11 of 12 scores kept: 91.67 rounds to 92
    assert consistency(agg) == 92


def test_consistency_none_without_scores():
    assert consistency(candidate(1)) is None


def test_to_dict_shape():
    board = rank([candidate(1, 8.0, 6.0, 7.0, first_name="Ada", last_name="Lovelace")], WEIGHTS, top_n=1)
    data = board[0].to_dict()
    assert data["first_name"] == "Ada"
    assert data["composite"] == pytest.approx(7.1)
    assert data["pending"] is False
    assert data["is_top"] is True
    assert data["application"]["average"] == 8.0
    assert data["consistency"] == 100


def test_weighted_composite_of_full_candidate():
    assert composite_score(candidate(1, 8.0, 7.0, 9.0), WEIGHTS) == 8.0


def test_candidate_without_character_ratings_is_pending():
    agg = candidate(1, 7.5, 6.5, None)
    board = rank([agg], WEIGHTS)
    assert agg.character.is_complete is False
    assert board[0].composite is None
    assert board[0].to_dict()["pending"] is True
