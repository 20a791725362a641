"""Cohort lifecycle: created inert, one active at a time, phases toggled only while active."""

from flask import current_app
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..errors import CohortExists, CohortInactive, Forbidden
from ..models import Cohort
from ..models.cohort import PHASE_FLAGS
from ..scoring import Phase
from .repository import get_cohort


def _commit():
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise


def create_cohort(term, year) -> Cohort:
    term = (term or "").strip()
    if Cohort.query.filter_by(term=term, year=int(year)).first() is not None:
        raise CohortExists()
    cohort = Cohort(term=term, year=int(year), is_active=False)
    db.session.add(cohort)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise CohortExists() from None
    current_app.logger.info("cohort %s created: %s %s", cohort.id, term, year)
    return cohort


def active_cohort():
    return Cohort.query.filter_by(is_active=True).first()


def activate_cohort(cohort_id) -> Cohort:
    """Make this the one active cohort."""
    cohort = get_cohort(cohort_id)
    Cohort.query.filter(Cohort.id != cohort.id, Cohort.is_active.is_(True)).update(
        {"is_active": False}, synchronize_session=False
    )
    cohort.is_active = True
    _commit()
    current_app.logger.info("cohort %s activated", cohort.id)
    return cohort


def deactivate_cohort(cohort_id) -> Cohort:
    cohort = get_cohort(cohort_id)
    cohort.is_active = False
    _commit()
    return cohort


def set_phase_open(cohort_id, phase, is_open) -> Cohort:
    cohort = get_cohort(cohort_id)
    if not cohort.is_active:
        raise CohortInactive()
    phase = Phase.parse(phase)
    setattr(cohort, PHASE_FLAGS[phase], bool(is_open))
    _commit()
    current_app.logger.info("cohort %s %s voting %s", cohort.id, phase.value, "opened" if is_open else "closed")
    return cohort


def delete_cohort(cohort_id, actor):
    """Delete a cohort and everything in it. Super admin only."""
    if actor is None or not getattr(actor, "is_super_admin", False):
        raise Forbidden("Only a Super Admin can delete a cohort.")
    cohort = get_cohort(cohort_id)
    db.session.delete(cohort)
    _commit()
    current_app.logger.warning("cohort %s deleted by %s", cohort_id, actor.email)
