#!/usr/bin/env python3
"""
Import a skills matrix from an Excel file
Usage: python scripts/import_personnel.py <path_to_excel_file>
"""
import sys
import os
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging

import config
from database.db_manager import DatabaseManager
from data_import.excel_importer import SkillsMatrixImporter

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    if len(sys.argv) < 2:
        print("Usage: python scripts/import_personnel.py <path_to_excel_file>")
        print("\nExpected Excel columns (one row per person-skill):")
        print("  - Name")
        print("  - Email")
        print("  - Skill")
        print("  - Proficiency (Beginner / Intermediate / Advanced / Expert)")
        print("  - Role, Experience Level, Category (optional)")
        sys.exit(1)

    excel_path = sys.argv[1]

    if not os.path.exists(excel_path):
        logger.error(f"File not found: {excel_path}")
        sys.exit(1)

    logger.info("=" * 60)
    logger.info("Skills Matrix - Data Import")
    logger.info("=" * 60)

    db_manager = DatabaseManager(db_path=config.DATABASE_PATH)
    importer = SkillsMatrixImporter(db_manager)

    logger.info(f"Importing from: {excel_path}")
    stats = importer.import_from_excel(excel_path)

    logger.info("=" * 60)
    logger.info("Import Summary:")
    logger.info(f"  Total rows processed: {stats['total_rows']}")
    logger.info(f"  Personnel imported: {stats['imported_personnel']}")
    logger.info(f"  Skills created: {stats['imported_skills']}")
    logger.info(f"  Skills assigned: {stats['assigned_skills']}")
    logger.info(f"  Errors: {stats['errors']}")
    logger.info("=" * 60)

    db_stats = db_manager.get_statistics()
    logger.info("Database Statistics:")
    logger.info(f"  Total personnel: {db_stats['total_personnel']}")
    logger.info(f"  Total skills: {db_stats['total_skills']}")
    logger.info(f"  Total projects: {db_stats['total_projects']}")
    logger.info("=" * 60)


if __name__ == "__main__":
    main()
