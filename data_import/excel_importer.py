"""
Excel importer for the Skills Matrix
Loads a skills matrix sheet (one row per person-skill) into the database
"""
import logging
from typing import Dict

import pandas as pd

from database.db_manager import DatabaseManager
from database.models import Personnel, Skill
from errors import DuplicateEntry, InvalidInput

logger = logging.getLogger(__name__)


class SkillsMatrixImporter:
    """Import personnel and their skills from an Excel sheet"""

    REQUIRED_COLUMNS = ['Name', 'Email', 'Skill', 'Proficiency']
    DEFAULT_CATEGORY = 'Tool'

    def __init__(self, db_manager: DatabaseManager):
        self.db = db_manager
        self.personnel_cache: Dict[str, int] = {}  # email -> id
        self.skill_cache: Dict[str, int] = {}      # lower(name) -> id

    def import_from_excel(self, excel_path: str, sheet_name=0) -> Dict[str, int]:
        """
        Import a skills matrix from an Excel file

        Expected columns:
        - Name
        - Email
        - Skill
        - Proficiency (Beginner / Intermediate / Advanced / Expert)
        - Role, Experience Level, Category (optional)
        """
        logger.info(f"Starting import from {excel_path}")
        df = pd.read_excel(excel_path, sheet_name=sheet_name)
        return self.import_dataframe(df)

    def import_dataframe(self, df: pd.DataFrame) -> Dict[str, int]:
        """Import rows from an already loaded DataFrame"""
        df = df.copy()
        df.columns = df.columns.str.strip()

        missing_cols = [col for col in self.REQUIRED_COLUMNS if col not in df.columns]
        if missing_cols:
            raise InvalidInput(f"Missing required columns: {missing_cols}")

        stats = {
            'total_rows': len(df),
            'imported_personnel': 0,
            'imported_skills': 0,
            'assigned_skills': 0,
            'errors': 0
        }

        for idx, row in df.iterrows():
            try:
                personnel_id = self._get_or_create_personnel(row, stats)
                skill_id = self._get_or_create_skill(row, stats)
                self.db.assign_skill(personnel_id, skill_id, self._clean(row.get('Proficiency')))
                stats['assigned_skills'] += 1
            except DuplicateEntry as e:
                logger.warning(f"Row {idx}: {e}")
                stats['errors'] += 1
            except InvalidInput as e:
                logger.error(f"Row {idx}: {e}")
                stats['errors'] += 1

        logger.info(
            f"Import complete: {stats['imported_personnel']} personnel, "
            f"{stats['imported_skills']} skills, {stats['assigned_skills']} assignments, "
            f"{stats['errors']} errors"
        )
        return stats

    def _get_or_create_personnel(self, row: pd.Series, stats: Dict[str, int]) -> int:
        email = self._clean(row.get('Email'))
        if not email:
            raise InvalidInput("Email is required")

        key = email.lower()
        if key in self.personnel_cache:
            return self.personnel_cache[key]

        existing = self.db.get_personnel_by_email(email)
        if existing:
            self.personnel_cache[key] = existing.id
            return existing.id

        person = Personnel(
            name=self._clean(row.get('Name')),
            email=email,
            role=self._clean(row.get('Role')),
            experience_level=self._clean(row.get('Experience Level')),
        )
        personnel_id = self.db.insert_personnel(person)
        self.personnel_cache[key] = personnel_id
        stats['imported_personnel'] += 1
        return personnel_id

    def _get_or_create_skill(self, row: pd.Series, stats: Dict[str, int]) -> int:
        name = self._clean(row.get('Skill'))
        if not name:
            raise InvalidInput("Skill is required")

        key = name.lower()
        if key in self.skill_cache:
            return self.skill_cache[key]

        existing = self.db.get_skill_by_name(name)
        if existing:
            self.skill_cache[key] = existing.id
            return existing.id

        skill = Skill(
            name=name,
            category=self._clean(row.get('Category')) or self.DEFAULT_CATEGORY,
        )
        skill_id = self.db.insert_skill(skill)
        self.skill_cache[key] = skill_id
        stats['imported_skills'] += 1
        return skill_id

    @staticmethod
    def _clean(value):
        """Strip strings; NaN/empty cells become None"""
        if value is None or pd.isna(value):
            return None
        text = str(value).strip()
        return text or None
