"""
Create mock consultancy data (skills, personnel, projects) for local testing
"""
import sys
from datetime import date
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import config
from database.db_manager import DatabaseManager
from database.models import Personnel, Project, Skill


SKILLS = [
    ("Python", "Programming Language", "General purpose language"),
    ("JavaScript", "Programming Language", None),
    ("React", "Framework", "Frontend UI library"),
    ("Django", "Framework", None),
    ("SQL", "Database", "Relational querying and modelling"),
    ("PostgreSQL", "Database", None),
    ("AWS", "Cloud", None),
    ("Docker", "Tool", None),
    ("Communication", "Soft Skill", None),
]

PERSONNEL = [
    {
        "name": "Alice Walker",
        "email": "alice.walker@sample.com",
        "role": "Senior Full-Stack Developer",
        "experience_level": "Senior",
        "skills": {"React": "Expert", "JavaScript": "Expert", "SQL": "Advanced", "Python": "Intermediate"},
    },
    {
        "name": "Ben Carter",
        "email": "ben.carter@sample.com",
        "role": "Backend Developer",
        "experience_level": "Mid-Level",
        "skills": {"Python": "Advanced", "Django": "Advanced", "PostgreSQL": "Intermediate", "Docker": "Beginner"},
    },
    {
        "name": "Chloe Nguyen",
        "email": "chloe.nguyen@sample.com",
        "role": "Cloud Engineer",
        "experience_level": "Senior",
        "skills": {"AWS": "Expert", "Docker": "Advanced", "Python": "Advanced"},
    },
    {
        "name": "Daniel Okafor",
        "email": "daniel.okafor@sample.com",
        "role": "Frontend Developer",
        "experience_level": "Junior",
        "skills": {"React": "Beginner", "JavaScript": "Intermediate", "Communication": "Advanced"},
    },
    {
        "name": "Eva Rossi",
        "email": "eva.rossi@sample.com",
        "role": "Delivery Lead",
        "experience_level": "Senior",
        "skills": {"Communication": "Expert", "SQL": "Intermediate"},
    },
    {
        "name": "Finn Larsen",
        "email": "finn.larsen@sample.com",
        "role": "Graduate Consultant",
        "experience_level": "Junior",
        "skills": {},
    },
]

PROJECTS = [
    {
        "name": "Customer Portal Rebuild",
        "description": "React frontend over a Django API",
        "start_date": date(2026, 11, 2),
        "end_date": date(2027, 3, 31),
        "status": "Planning",
        "requirements": {"React": "Advanced", "SQL": "Intermediate", "Python": "Intermediate"},
    },
    {
        "name": "Cloud Migration",
        "description": "Containerise and move workloads to AWS",
        "start_date": date(2026, 9, 1),
        "end_date": None,
        "status": "Active",
        "requirements": {"AWS": "Advanced", "Docker": "Intermediate"},
    },
    {
        "name": "Discovery Workshop",
        "description": "Scoping engagement, no fixed skill requirements",
        "start_date": None,
        "end_date": None,
        "status": "Planning",
        "requirements": {},
    },
]


def create_mock_data():
    """Create mock consultancy data for testing"""

    print("🔧 Creating mock skills matrix data...")

    db = DatabaseManager(db_path=config.DATABASE_PATH)

    print("🗑️  Clearing existing data...")
    with db.get_connection() as conn:
        conn.execute("DELETE FROM project_required_skills")
        conn.execute("DELETE FROM personnel_skills")
        conn.execute("DELETE FROM projects")
        conn.execute("DELETE FROM personnel")
        conn.execute("DELETE FROM skills")
    print("  ✅ Database cleared")

    skill_ids = {}
    for name, category, description in SKILLS:
        skill_ids[name] = db.insert_skill(Skill(name=name, category=category, description=description))
    print(f"  ✅ {len(skill_ids)} skills created")

    for data in PERSONNEL:
        personnel_id = db.insert_personnel(Personnel(
            name=data["name"],
            email=data["email"],
            role=data["role"],
            experience_level=data["experience_level"],
        ))
        for skill_name, proficiency in data["skills"].items():
            db.assign_skill(personnel_id, skill_ids[skill_name], proficiency)
    print(f"  ✅ {len(PERSONNEL)} personnel created")

    for data in PROJECTS:
        project = Project(
            name=data["name"],
            description=data["description"],
            start_date=data["start_date"],
            end_date=data["end_date"],
            status=data["status"],
        )
        requirements = [(skill_ids[name], level) for name, level in data["requirements"].items()]
        db.insert_project(project, requirements)
    print(f"  ✅ {len(PROJECTS)} projects created")

    stats = db.get_statistics()
    print(f"\n📊 Database: {stats['total_personnel']} personnel, "
          f"{stats['total_skills']} skills, {stats['total_projects']} projects")


if __name__ == "__main__":
    create_mock_data()
