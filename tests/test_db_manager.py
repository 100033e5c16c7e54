"""
Tests for the SQLite storage layer
"""
from datetime import date

import pytest

from database.db_manager import DatabaseManager
from database.models import Personnel, Project, Skill
from errors import DuplicateEntry, InvalidInput, NotFound, StorageUnavailable, UnknownProficiency
from matching.engine import resolve_requirements


def _person(db, name, email, **kwargs):
    return db.insert_personnel(Personnel(name=name, email=email, **kwargs))


def test_database_initialization(db):
    """Test database initialization"""
    stats = db.get_statistics()

    assert stats == {"total_personnel": 0, "total_skills": 0, "total_projects": 0}


def test_schema_is_idempotent(tmp_path):
    path = str(tmp_path / "again.db")
    DatabaseManager(db_path=path).insert_skill(Skill(name="Go", category="Programming Language"))

    assert len(DatabaseManager(db_path=path).list_skills()) == 1


def test_skill_crud(db):
    skill_id = db.insert_skill(Skill(name="Docker", category="Tool", description="Containers"))

    assert db.get_skill_by_id(skill_id).description == "Containers"
    assert db.get_skill_by_name("docker").id == skill_id

    updated = db.update_skill(skill_id, Skill(name="Docker", category="Cloud"))
    assert updated.category == "Cloud"
    assert updated.description is None

    db.delete_skill(skill_id)
    assert db.get_skill_by_id(skill_id) is None
    with pytest.raises(NotFound):
        db.delete_skill(skill_id)


def test_skill_validation(db):
    with pytest.raises(InvalidInput):
        db.insert_skill(Skill(name="", category="Tool"))
    with pytest.raises(InvalidInput):
        db.insert_skill(Skill(name="Kubernetes", category="Orchestration"))


def test_personnel_insertion_and_retrieval(db, skill_ids):
    """Test personnel insertion and retrieval with skills"""
    person_id = _person(db, "John Doe", "john.doe@sample.com", role="Developer", experience_level="Senior")
    db.assign_skill(person_id, skill_ids["SQL"], "Advanced")
    db.assign_skill(person_id, skill_ids["React"], "Beginner")

    person = db.get_personnel_by_email("John.Doe@sample.com")

    assert person.id == person_id
    assert person.experience_level == "Senior"
    assert person.created_at is not None
    assert [(s.name, s.proficiency) for s in person.skills] == [("SQL", "Advanced"), ("React", "Beginner")]


def test_personnel_validation(db):
    with pytest.raises(InvalidInput):
        _person(db, "No Email", "")
    with pytest.raises(InvalidInput):
        _person(db, "Bad Email", "not-an-email")
    with pytest.raises(InvalidInput):
        _person(db, "Bad Level", "bad.level@sample.com", experience_level="Principal")


def test_duplicate_email_rejected(db):
    _person(db, "Jane", "jane@sample.com")

    with pytest.raises(DuplicateEntry):
        _person(db, "Other Jane", "jane@sample.com")


def test_update_and_delete_personnel(db, skill_ids):
    person_id = _person(db, "Jane", "jane@sample.com")
    db.assign_skill(person_id, skill_ids["Python"], "Expert")

    updated = db.update_personnel(person_id, Personnel(name="Jane Roe", email="jane.roe@sample.com", role="Lead"))
    assert updated.name == "Jane Roe"
    assert [s.name for s in updated.skills] == ["Python"]

    with pytest.raises(NotFound):
        db.update_personnel(999, Personnel(name="X", email="x@sample.com"))

    db.delete_personnel(person_id)
    assert db.get_personnel_by_id(person_id) is None
    with db.get_connection() as conn:
        assert conn.execute("SELECT COUNT(*) AS c FROM personnel_skills").fetchone()["c"] == 0


def test_skill_assigned_twice_is_rejected(db, skill_ids):
    person_id = _person(db, "Jane", "jane@sample.com")
    db.assign_skill(person_id, skill_ids["React"], "Beginner")

    with pytest.raises(DuplicateEntry):
        db.assign_skill(person_id, skill_ids["React"], "Expert")
    assert db.get_personnel_by_id(person_id).skills[0].proficiency == "Beginner"


def test_assign_skill_checks_references_and_proficiency(db, skill_ids):
    person_id = _person(db, "Jane", "jane@sample.com")

    with pytest.raises(NotFound):
        db.assign_skill(999, skill_ids["React"], "Expert")
    with pytest.raises(NotFound):
        db.assign_skill(person_id, 999, "Expert")
    with pytest.raises(UnknownProficiency):
        db.assign_skill(person_id, skill_ids["React"], "Guru")


def test_remove_skill(db, skill_ids):
    person_id = _person(db, "Jane", "jane@sample.com")
    db.assign_skill(person_id, skill_ids["React"], "Expert")

    db.remove_skill(person_id, skill_ids["React"])

    assert db.get_personnel_by_id(person_id).skills == []
    with pytest.raises(NotFound):
        db.remove_skill(person_id, skill_ids["React"])


def test_project_requirements_round_trip(db, skill_ids):
    pairs = [(skill_ids["SQL"], "Intermediate"), (skill_ids["React"], "Advanced")]
    project_id = db.insert_project(
        Project(name="Portal", start_date=date(2026, 1, 5), end_date=date(2026, 6, 30)), pairs
    )

    project = db.get_project_with_requirements(project_id)

    assert project.status == "Planning"
    assert project.start_date == date(2026, 1, 5)
    assert [(r.skill_id, r.min_proficiency) for r in resolve_requirements(project)] == pairs
    assert [r.name for r in project.required_skills] == ["SQL", "React"]


def test_project_validation(db, skill_ids):
    with pytest.raises(InvalidInput):
        db.insert_project(Project(name=""))
    with pytest.raises(InvalidInput):
        db.insert_project(Project(name="Late", start_date=date(2026, 5, 1), end_date=date(2026, 4, 1)))
    with pytest.raises(InvalidInput):
        db.insert_project(Project(name="Odd", status="Cancelled"))
    with pytest.raises(UnknownProficiency):
        db.insert_project(Project(name="Bad"), [(skill_ids["SQL"], "Wizard")])
    with pytest.raises(DuplicateEntry):
        db.insert_project(Project(name="Twice"), [(skill_ids["SQL"], "Beginner"), (skill_ids["SQL"], "Expert")])

    assert db.list_projects() == []


def test_update_project_replaces_requirements_atomically(db, skill_ids):
    project_id = db.insert_project(Project(name="Portal"), [(skill_ids["React"], "Advanced")])

    updated = db.update_project(
        project_id,
        Project(name="Portal v2", status="Active"),
        [(skill_ids["Python"], "Expert"), (skill_ids["SQL"], "Beginner")],
    )
    assert updated.status == "Active"
    assert [r.name for r in updated.required_skills] == ["Python", "SQL"]

    with pytest.raises(NotFound):
        db.update_project(project_id, Project(name="Broken"), [(skill_ids["React"], "Expert"), (999, "Expert")])

    project = db.get_project_with_requirements(project_id)
    assert project.name == "Portal v2"
    assert [r.name for r in project.required_skills] == ["Python", "SQL"]


def test_delete_project(db, skill_ids):
    project_id = db.insert_project(Project(name="Portal"), [(skill_ids["React"], "Advanced")])

    db.delete_project(project_id)

    assert db.get_project_with_requirements(project_id) is None
    with pytest.raises(NotFound):
        db.delete_project(project_id)


def test_all_personnel_with_skills_in_id_order(db, skill_ids):
    first = _person(db, "First", "first@sample.com")
    second = _person(db, "Second", "second@sample.com")
    db.assign_skill(second, skill_ids["SQL"], "Expert")

    personnel = db.get_all_personnel_with_skills()

    assert [p.id for p in personnel] == [first, second]
    assert personnel[0].skills == []
    assert personnel[1].skills[0].name == "SQL"


def test_personnel_by_skill_set_returns_supersets_with_full_profile(db, skill_ids):
    erin = _person(db, "Erin", "erin@sample.com")
    finn = _person(db, "Finn", "finn@sample.com")
    db.assign_skill(erin, skill_ids["React"], "Beginner")
    db.assign_skill(erin, skill_ids["SQL"], "Expert")
    db.assign_skill(erin, skill_ids["Python"], "Advanced")
    db.assign_skill(finn, skill_ids["React"], "Expert")

    found = db.get_personnel_by_skill_set([skill_ids["React"], skill_ids["SQL"]])

    assert [p.id for p in found] == [erin]
    assert {s.name for s in found[0].skills} == {"React", "SQL", "Python"}
    assert [p.id for p in db.get_personnel_by_skill_set([skill_ids["React"]])] == [erin, finn]
    with pytest.raises(InvalidInput):
        db.get_personnel_by_skill_set([])


def test_sqlite_failures_surface_as_storage_unavailable(db):
    project_id = db.insert_project(Project(name="Portal"))
    with db.get_connection() as conn:
        conn.execute("DROP TABLE project_required_skills")

    with pytest.raises(StorageUnavailable):
        db.get_project_with_requirements(project_id)


def test_unopenable_database_is_storage_unavailable(tmp_path):
    with pytest.raises(StorageUnavailable):
        DatabaseManager(db_path=str(tmp_path))
