"""
Database manager for the Skills Matrix

Serves the reads the matching engine depends on (project requirements,
personnel skill profiles, exact skill-set search) plus CRUD for skills,
personnel and projects.
"""
import logging
import re
import sqlite3
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from .models import (
    EXPERIENCE_LEVELS,
    PROJECT_STATUSES,
    SKILL_CATEGORIES,
    Personnel,
    PersonnelSkill,
    Project,
    ProjectRequirement,
    Skill,
)
from errors import DuplicateEntry, InvalidInput, NotFound, StorageUnavailable
from matching.proficiency import parse_proficiency

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class DatabaseManager:
    """Manages SQLite database operations"""

    def __init__(self, db_path: str = "data/skills_matrix.db"):
        self.db_path = db_path
        self._ensure_db_directory()
        self._initialize_database()

    def _ensure_db_directory(self):
        """Create database directory if it doesn't exist"""
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def get_connection(self):
        """
        Context manager for database connections.

        Commits on success and rolls back on any error. sqlite3 failures
        surface as StorageUnavailable; domain errors pass through unchanged.
        """
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StorageUnavailable(f"Cannot open database {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            conn.execute("PRAGMA foreign_keys = ON;")
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Database error: {type(e).__name__}: {e}")
            raise StorageUnavailable(str(e)) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _initialize_database(self):
        """Initialize database schema"""
        schema_path = Path(__file__).parent / "schema.sql"
        with self.get_connection() as conn:
            with open(schema_path, "r") as f:
                conn.executescript(f.read())

    # ============================================
    # Matching reads
    # ============================================

    def get_project_with_requirements(self, project_id: int) -> Optional[Project]:
        """Project with its required skills in stored order, or None"""
        with self.get_connection() as conn:
            row = conn.execute("SELECT * FROM projects WHERE id = ?", (project_id,)).fetchone()
            if not row:
                return None
            project = self._row_to_project(row)
            project.required_skills = self._load_requirements(conn, project_id)
            return project

    def get_all_personnel_with_skills(self) -> List[Personnel]:
        """Every person (ordered by id) with their skills in stored order"""
        with self.get_connection() as conn:
            rows = conn.execute("SELECT * FROM personnel ORDER BY id").fetchall()
            personnel = [self._row_to_personnel(row) for row in rows]
            self._attach_skills(conn, personnel)
            return personnel

    def get_personnel_by_skill_set(self, skill_ids: Iterable[int]) -> List[Personnel]:
        """
        Personnel holding every skill id in skill_ids, proficiency ignored.
        Each person carries their full skill profile, not only the requested skills.
        """
        ids = sorted(set(skill_ids))
        if not ids:
            raise InvalidInput("At least one skill id is required")

        placeholders = ", ".join("?" for _ in ids)
        with self.get_connection() as conn:
            rows = conn.execute(
                f"""
                SELECT p.* FROM personnel p
                WHERE p.id IN (
                    SELECT ps.personnel_id
                    FROM personnel_skills ps
                    WHERE ps.skill_id IN ({placeholders})
                    GROUP BY ps.personnel_id
                    HAVING COUNT(DISTINCT ps.skill_id) = ?
                )
                ORDER BY p.id
                """,
                (*ids, len(ids)),
            ).fetchall()
            personnel = [self._row_to_personnel(row) for row in rows]
            self._attach_skills(conn, personnel)
            return personnel

    # ============================================
    # Skill Operations
    # ============================================

    def insert_skill(self, skill: Skill) -> int:
        """Insert a skill into the catalogue and return the ID"""
        self._validate_skill(skill)
        with self.get_connection() as conn:
            cursor = conn.execute(
                "INSERT INTO skills (name, category, description) VALUES (?, ?, ?)",
                (skill.name.strip(), skill.category, skill.description),
            )
            return int(cursor.lastrowid)

    def get_skill_by_id(self, skill_id: int) -> Optional[Skill]:
        with self.get_connection() as conn:
            row = conn.execute("SELECT * FROM skills WHERE id = ?", (skill_id,)).fetchone()
            return self._row_to_skill(row) if row else None

    def get_skill_by_name(self, name: str) -> Optional[Skill]:
        """Case-insensitive lookup by catalogue name"""
        with self.get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM skills WHERE name = ? COLLATE NOCASE ORDER BY id LIMIT 1",
                ((name or "").strip(),),
            ).fetchone()
            return self._row_to_skill(row) if row else None

    def list_skills(self) -> List[Skill]:
        with self.get_connection() as conn:
            rows = conn.execute("SELECT * FROM skills ORDER BY name").fetchall()
            return [self._row_to_skill(row) for row in rows]

    def update_skill(self, skill_id: int, skill: Skill) -> Skill:
        """Replace a skill's fields; raises NotFound"""
        self._validate_skill(skill)
        with self.get_connection() as conn:
            cursor = conn.execute(
                "UPDATE skills SET name = ?, category = ?, description = ? WHERE id = ?",
                (skill.name.strip(), skill.category, skill.description, skill_id),
            )
            if cursor.rowcount == 0:
                raise NotFound("Skill", skill_id)
            row = conn.execute("SELECT * FROM skills WHERE id = ?", (skill_id,)).fetchone()
            return self._row_to_skill(row)

    def delete_skill(self, skill_id: int) -> None:
        with self.get_connection() as conn:
            cursor = conn.execute("DELETE FROM skills WHERE id = ?", (skill_id,))
            if cursor.rowcount == 0:
                raise NotFound("Skill", skill_id)

    # ============================================
    # Personnel Operations
    # ============================================

    def insert_personnel(self, person: Personnel) -> int:
        """Insert a new person and return the ID"""
        self._validate_personnel(person)
        with self.get_connection() as conn:
            try:
                cursor = conn.execute(
                    """
                    INSERT INTO personnel (name, email, role, experience_level)
                    VALUES (?, ?, ?, ?)
                    """,
                    (person.name.strip(), person.email.strip(), person.role, person.experience_level),
                )
            except sqlite3.IntegrityError as e:
                raise DuplicateEntry("Email already exists") from e
            return int(cursor.lastrowid)

    def get_personnel_by_id(self, personnel_id: int) -> Optional[Personnel]:
        """Get a person with their full skill profile"""
        with self.get_connection() as conn:
            row = conn.execute("SELECT * FROM personnel WHERE id = ?", (personnel_id,)).fetchone()
            if not row:
                return None
            person = self._row_to_personnel(row)
            self._attach_skills(conn, [person])
            return person

    def get_personnel_by_email(self, email: str) -> Optional[Personnel]:
        with self.get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM personnel WHERE email = ? COLLATE NOCASE",
                ((email or "").strip(),),
            ).fetchone()
            if not row:
                return None
            person = self._row_to_personnel(row)
            self._attach_skills(conn, [person])
            return person

    def list_personnel(self) -> List[Personnel]:
        """All personnel, newest first, with skills"""
        with self.get_connection() as conn:
            rows = conn.execute("SELECT * FROM personnel ORDER BY created_at DESC, id DESC").fetchall()
            personnel = [self._row_to_personnel(row) for row in rows]
            self._attach_skills(conn, personnel)
            return personnel

    def update_personnel(self, personnel_id: int, person: Personnel) -> Personnel:
        """Replace a person's fields (skills untouched); raises NotFound"""
        self._validate_personnel(person)
        with self.get_connection() as conn:
            try:
                cursor = conn.execute(
                    """
                    UPDATE personnel SET name = ?, email = ?, role = ?, experience_level = ?
                    WHERE id = ?
                    """,
                    (person.name.strip(), person.email.strip(), person.role,
                     person.experience_level, personnel_id),
                )
            except sqlite3.IntegrityError as e:
                raise DuplicateEntry("Email already exists") from e
            if cursor.rowcount == 0:
                raise NotFound("Personnel", personnel_id)
            row = conn.execute("SELECT * FROM personnel WHERE id = ?", (personnel_id,)).fetchone()
            updated = self._row_to_personnel(row)
            self._attach_skills(conn, [updated])
            return updated

    def delete_personnel(self, personnel_id: int) -> None:
        with self.get_connection() as conn:
            cursor = conn.execute("DELETE FROM personnel WHERE id = ?", (personnel_id,))
            if cursor.rowcount == 0:
                raise NotFound("Personnel", personnel_id)

    def assign_skill(self, personnel_id: int, skill_id: int, proficiency: str) -> int:
        """
        Attach a skill to a person. A person holds each skill at most once:
        assigning it again raises DuplicateEntry.
        """
        level = parse_proficiency(proficiency)
        with self.get_connection() as conn:
            if not conn.execute("SELECT 1 FROM personnel WHERE id = ?", (personnel_id,)).fetchone():
                raise NotFound("Personnel", personnel_id)
            self._require_skill(conn, skill_id)
            try:
                cursor = conn.execute(
                    "INSERT INTO personnel_skills (personnel_id, skill_id, proficiency) VALUES (?, ?, ?)",
                    (personnel_id, skill_id, level),
                )
            except sqlite3.IntegrityError as e:
                raise DuplicateEntry("Skill already assigned to this person") from e
            return int(cursor.lastrowid)

    def remove_skill(self, personnel_id: int, skill_id: int) -> None:
        with self.get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM personnel_skills WHERE personnel_id = ? AND skill_id = ?",
                (personnel_id, skill_id),
            )
            if cursor.rowcount == 0:
                raise NotFound("Skill assignment", f"{personnel_id}/{skill_id}")

    # ============================================
    # Project Operations
    # ============================================

    def insert_project(self, project: Project, requirements: Sequence[Tuple[int, str]] = ()) -> int:
        """
        Insert a project and its (skill_id, min_proficiency) requirements
        in one transaction. Returns the project ID.
        """
        self._validate_project(project)
        reqs = self._validate_requirements(requirements)
        with self.get_connection() as conn:
            cursor = conn.execute(
                """
                INSERT INTO projects (name, description, start_date, end_date, status)
                VALUES (?, ?, ?, ?, ?)
                """,
                (project.name.strip(), project.description, _date_param(project.start_date),
                 _date_param(project.end_date), project.status or "Planning"),
            )
            project_id = int(cursor.lastrowid)
            self._insert_requirements(conn, project_id, reqs)
            return project_id

    def list_projects(self) -> List[Project]:
        """All projects, newest first, with requirements"""
        with self.get_connection() as conn:
            rows = conn.execute("SELECT * FROM projects ORDER BY created_at DESC, id DESC").fetchall()
            projects = [self._row_to_project(row) for row in rows]
            for project in projects:
                project.required_skills = self._load_requirements(conn, project.id)
            return projects

    def update_project(
        self,
        project_id: int,
        project: Project,
        requirements: Sequence[Tuple[int, str]] = (),
    ) -> Project:
        """
        Replace a project's fields and its whole requirement set atomically;
        readers never see a partially replaced set. Raises NotFound.
        """
        self._validate_project(project)
        reqs = self._validate_requirements(requirements)
        with self.get_connection() as conn:
            cursor = conn.execute(
                """
                UPDATE projects SET name = ?, description = ?, start_date = ?, end_date = ?, status = ?
                WHERE id = ?
                """,
                (project.name.strip(), project.description, _date_param(project.start_date),
                 _date_param(project.end_date), project.status or "Planning", project_id),
            )
            if cursor.rowcount == 0:
                raise NotFound("Project", project_id)
            conn.execute("DELETE FROM project_required_skills WHERE project_id = ?", (project_id,))
            self._insert_requirements(conn, project_id, reqs)

            row = conn.execute("SELECT * FROM projects WHERE id = ?", (project_id,)).fetchone()
            updated = self._row_to_project(row)
            updated.required_skills = self._load_requirements(conn, project_id)
            return updated

    def delete_project(self, project_id: int) -> None:
        with self.get_connection() as conn:
            cursor = conn.execute("DELETE FROM projects WHERE id = ?", (project_id,))
            if cursor.rowcount == 0:
                raise NotFound("Project", project_id)

    # ============================================
    # Helper Methods
    # ============================================

    def _load_requirements(self, conn: sqlite3.Connection, project_id: int) -> List[ProjectRequirement]:
        rows = conn.execute(
            """
            SELECT s.id AS skill_id, s.name AS skill_name, prs.min_proficiency
            FROM project_required_skills prs
            JOIN skills s ON s.id = prs.skill_id
            WHERE prs.project_id = ?
            ORDER BY prs.id
            """,
            (project_id,),
        ).fetchall()
        return [
            ProjectRequirement(
                skill_id=int(row["skill_id"]),
                name=row["skill_name"],
                min_proficiency=row["min_proficiency"],
            )
            for row in rows
        ]

    def _attach_skills(self, conn: sqlite3.Connection, personnel: List[Personnel]) -> None:
        """Fill each person's skills from one query over the same connection"""
        if not personnel:
            return
        by_id = {p.id: p for p in personnel}
        placeholders = ", ".join("?" for _ in by_id)
        rows = conn.execute(
            f"""
            SELECT ps.personnel_id, s.id AS skill_id, s.name AS skill_name, ps.proficiency
            FROM personnel_skills ps
            JOIN skills s ON s.id = ps.skill_id
            WHERE ps.personnel_id IN ({placeholders})
            ORDER BY ps.id
            """,
            tuple(by_id),
        ).fetchall()
        for row in rows:
            by_id[row["personnel_id"]].skills.append(
                PersonnelSkill(
                    skill_id=int(row["skill_id"]),
                    name=row["skill_name"],
                    proficiency=row["proficiency"],
                )
            )

    def _insert_requirements(self, conn: sqlite3.Connection, project_id: int,
                             requirements: List[Tuple[int, str]]) -> None:
        for skill_id, min_proficiency in requirements:
            self._require_skill(conn, skill_id)
            try:
                conn.execute(
                    """
                    INSERT INTO project_required_skills (project_id, skill_id, min_proficiency)
                    VALUES (?, ?, ?)
                    """,
                    (project_id, skill_id, min_proficiency),
                )
            except sqlite3.IntegrityError as e:
                raise DuplicateEntry(f"Skill {skill_id} listed more than once for this project") from e

    def _require_skill(self, conn: sqlite3.Connection, skill_id: int) -> None:
        if not conn.execute("SELECT 1 FROM skills WHERE id = ?", (skill_id,)).fetchone():
            raise NotFound("Skill", skill_id)

    def _validate_skill(self, skill: Skill) -> None:
        if not (skill.name or "").strip() or not skill.category:
            raise InvalidInput("Name and category are required")
        if skill.category not in SKILL_CATEGORIES:
            raise InvalidInput(f"Invalid category: {skill.category}. Allowed: {list(SKILL_CATEGORIES)}")

    def _validate_personnel(self, person: Personnel) -> None:
        if not (person.name or "").strip() or not (person.email or "").strip():
            raise InvalidInput("Name and email are required")
        if not EMAIL_PATTERN.match(person.email.strip()):
            raise InvalidInput("Invalid email format")
        if person.experience_level and person.experience_level not in EXPERIENCE_LEVELS:
            raise InvalidInput(
                f"Invalid experience_level: {person.experience_level}. Allowed: {list(EXPERIENCE_LEVELS)}"
            )

    def _validate_project(self, project: Project) -> None:
        if not (project.name or "").strip():
            raise InvalidInput("Project name is required")
        if project.status and project.status not in PROJECT_STATUSES:
            raise InvalidInput(f"Invalid status: {project.status}. Allowed: {list(PROJECT_STATUSES)}")
        if project.start_date and project.end_date and project.end_date < project.start_date:
            raise InvalidInput("end_date must not be before start_date")

    def _validate_requirements(self, requirements: Sequence[Tuple[int, str]]) -> List[Tuple[int, str]]:
        return [(int(skill_id), parse_proficiency(level)) for skill_id, level in requirements]

    def _row_to_skill(self, row: sqlite3.Row) -> Skill:
        """Convert database row to Skill object"""
        return Skill(
            id=row["id"],
            name=row["name"],
            category=row["category"],
            description=row["description"],
            created_at=_parse_datetime(row["created_at"]),
        )

    def _row_to_personnel(self, row: sqlite3.Row) -> Personnel:
        """Convert database row to Personnel object (skills attached separately)"""
        return Personnel(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            role=row["role"],
            experience_level=row["experience_level"],
            created_at=_parse_datetime(row["created_at"]),
        )

    def _row_to_project(self, row: sqlite3.Row) -> Project:
        """Convert database row to Project object (requirements attached separately)"""
        return Project(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            start_date=_parse_date(row["start_date"]),
            end_date=_parse_date(row["end_date"]),
            status=row["status"],
            created_at=_parse_datetime(row["created_at"]),
        )

    def get_statistics(self) -> Dict[str, Any]:
        """Get database statistics"""
        with self.get_connection() as conn:
            stats: Dict[str, Any] = {}

            cursor = conn.execute("SELECT COUNT(*) as count FROM personnel")
            stats["total_personnel"] = cursor.fetchone()["count"]

            cursor = conn.execute("SELECT COUNT(*) as count FROM skills")
            stats["total_skills"] = cursor.fetchone()["count"]

            cursor = conn.execute("SELECT COUNT(*) as count FROM projects")
            stats["total_projects"] = cursor.fetchone()["count"]

            return stats


def _date_param(value) -> Optional[str]:
    return value.isoformat() if isinstance(value, date) else value


def _parse_date(raw) -> Optional[date]:
    if not raw:
        return None
    return date.fromisoformat(str(raw)[:10])


def _parse_datetime(raw) -> Optional[datetime]:
    if not raw:
        return None
    return datetime.fromisoformat(str(raw))
