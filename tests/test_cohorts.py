import pytest

from boardeval.errors import CohortExists, CohortInactive, CohortNotFound, Forbidden
from boardeval.extensions import db
from boardeval.models import (
    BoardMembership,
    Candidate,
    CharacterTrait,
    Cohort,
    CohortSettings,
    Question,
    Rating,
    RatingScore,
    User,
)
from boardeval.scoring import LiveUser, Phase
from boardeval.services import cohorts as svc
from boardeval.services.ballots import BallotItem, submit_ballot
from boardeval.services.settings import save_settings
from conftest import items_for, make_user


def test_new_cohort_is_inert(app):
    c = svc.create_cohort("  Spring ", 2027)
    assert c.term == "Spring"
    assert c.is_active is False
    assert not any(c.is_phase_open(p) for p in Phase)


def test_duplicate_term_and_year(app):
    svc.create_cohort("Spring", 2027)
    with pytest.raises(CohortExists):
        svc.create_cohort("Spring", 2027)


def test_only_one_cohort_is_active(cohort):
    other = svc.create_cohort("Spring", 2027)
    svc.activate_cohort(other.id)

    assert svc.active_cohort().id == other.id
    assert Cohort.query.filter_by(is_active=True).count() == 1
    assert db.session.get(Cohort, cohort.id).is_active is False


def test_inactive_cohort_closes_every_phase(cohort):
    assert cohort.is_phase_open("interview")
    svc.deactivate_cohort(cohort.id)
    assert not cohort.is_phase_open("interview")
    assert svc.active_cohort() is None


def test_toggle_phase(cohort):
    svc.set_phase_open(cohort.id, Phase.CHARACTER, False)
    assert cohort.character_open is False
    assert cohort.is_phase_open("application")


def test_toggle_needs_active_cohort(app):
    c = svc.create_cohort("Spring", 2027)
    with pytest.raises(CohortInactive):
        svc.set_phase_open(c.id, "application", True)


def test_unknown_cohort(app):
    with pytest.raises(CohortNotFound):
        svc.activate_cohort(77)


def test_only_super_admin_deletes(cohort, admin):
    with pytest.raises(Forbidden):
        svc.delete_cohort(cohort.id, admin)
    with pytest.raises(Forbidden):
        svc.delete_cohort(cohort.id, None)
    assert Cohort.query.count() == 1


def test_delete_removes_everything_scoped_to_the_cohort(cohort, candidates, member):
    root = make_user("root@board.example.org")
    q1, _ = items_for(cohort, "application")
    t1, _ = items_for(cohort, "character")
    submit_ballot(candidates[0].id, cohort.id, "application", LiveUser(member.id), [BallotItem(q1, 7)])
    submit_ballot(candidates[1].id, cohort.id, "character", LiveUser(member.id), [BallotItem(t1, 5)])
    save_settings(cohort.id, 0.4, 0.3, 0.3, 2.0, 10)

    svc.delete_cohort(cohort.id, root)

    for model in (Cohort, Candidate, Question, CharacterTrait, Rating, RatingScore, CohortSettings, BoardMembership):
        assert model.query.count() == 0, model.__name__
    # accounts outlive the cohort
    assert User.query.filter_by(email=member.email).count() == 1
