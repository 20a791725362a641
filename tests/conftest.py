import pytest

from boardeval import create_app
from boardeval.extensions import db
from boardeval.models import (
    BoardMembership,
    Candidate,
    CharacterTrait,
    Cohort,
    Question,
    User,
)


@pytest.fixture
def app():
    app = create_app('config.TestConfig')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(email, role="member", password="secret-pass", first_name=None, last_name=None):
    u = User(email=email, role=role, first_name=first_name, last_name=last_name)
    u.set_password(password)
    db.session.add(u)
    db.session.commit()
    return u


@pytest.fixture
def cohort(app):
    """Active cohort with all voting phases open, two questions per phase and two traits."""
    c = Cohort(term="Fall", year=2026, is_active=True,
               application_open=True, interview_open=True, character_open=True)
    db.session.add(c)
    db.session.flush()
    db.session.add_all([
        Question(cohort_id=c.id, question_text="Why this board?", category="application", question_order=1),
        Question(cohort_id=c.id, question_text="Leadership example", category="application", question_order=2),
        Question(cohort_id=c.id, question_text="Conflict handling", category="interview", question_order=1),
        Question(cohort_id=c.id, question_text="Vision", category="interview", question_order=2),
        Question(cohort_id=c.id, question_text="Display only", category="application", question_order=3, is_scorable=False),
        CharacterTrait(cohort_id=c.id, trait_name="Integrity", trait_order=1),
        CharacterTrait(cohort_id=c.id, trait_name="Empathy", trait_order=2),
    ])
    db.session.commit()
    return c


def items_for(cohort, phase):
    """Scorable item ids of a phase in display order."""
    if phase == "character":
        rows = CharacterTrait.query.filter_by(cohort_id=cohort.id).order_by(CharacterTrait.trait_order).all()
        return [r.id for r in rows]
    rows = (Question.query.filter_by(cohort_id=cohort.id, category=phase, is_scorable=True)
            .order_by(Question.question_order).all())
    return [r.id for r in rows]


@pytest.fixture
def candidates(cohort):
    rows = [
        Candidate(cohort_id=cohort.id, first_name="Ada", last_name="Lovelace", email="ada@example.com", candidate_number=1),
        Candidate(cohort_id=cohort.id, first_name="Grace", last_name="Hopper", email="grace@example.com", candidate_number=2),
        Candidate(cohort_id=cohort.id, first_name="Alan", last_name="Turing", email="alan@example.com", candidate_number=3),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return rows


@pytest.fixture
def member(app, cohort):
    u = make_user("member@board.example.org", first_name="Mia", last_name="Member")
    db.session.add(BoardMembership(cohort_id=cohort.id, user_id=u.id, position="Treasurer"))
    db.session.commit()
    return u


@pytest.fixture
def admin(app):
    return make_user("admin@board.example.org", role="admin")


def login(client, user, password="secret-pass"):
    resp = client.post("/auth/login", json={"email": user.email, "password": password})
    assert resp.status_code == 200, resp.get_json()
    return resp
