"""
Shared fixtures for the Skills Matrix tests
"""
import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# api.main opens its database at import time; keep it out of the working tree
os.environ["DATABASE_PATH"] = str(Path(tempfile.mkdtemp()) / "api_import.db")

from database.db_manager import DatabaseManager
from database.models import Personnel, PersonnelSkill, Project, ProjectRequirement, Skill

REACT, SQL, PYTHON = 1, 2, 3
SKILL_NAMES = {REACT: "React", SQL: "SQL", PYTHON: "Python"}


def make_person(person_id: int, name: str, skills=None) -> Personnel:
    """Personnel record with skills given as {skill_id: proficiency}"""
    return Personnel(
        id=person_id,
        name=name,
        email=f"{name.lower().replace(' ', '.')}@sample.com",
        skills=[
            PersonnelSkill(skill_id=sid, name=SKILL_NAMES.get(sid, f"Skill {sid}"), proficiency=prof)
            for sid, prof in (skills or {}).items()
        ],
    )


def make_project(project_id: int, requirements=None) -> Project:
    """Project with requirements given as {skill_id: min_proficiency}"""
    return Project(
        id=project_id,
        name=f"Project {project_id}",
        required_skills=[
            ProjectRequirement(skill_id=sid, name=SKILL_NAMES.get(sid, f"Skill {sid}"), min_proficiency=prof)
            for sid, prof in (requirements or {}).items()
        ],
    )


@pytest.fixture
def db(tmp_path):
    """Fresh SQLite database per test"""
    return DatabaseManager(db_path=str(tmp_path / "skills_matrix.db"))


@pytest.fixture
def skill_ids(db):
    """React, SQL and Python in the catalogue; returns name -> id"""
    return {
        "React": db.insert_skill(Skill(name="React", category="Framework")),
        "SQL": db.insert_skill(Skill(name="SQL", category="Database")),
        "Python": db.insert_skill(Skill(name="Python", category="Programming Language")),
    }
