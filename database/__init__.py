"""Database package for the Skills Matrix"""
from .db_manager import DatabaseManager
from .models import Skill, Personnel, PersonnelSkill, Project, ProjectRequirement

__all__ = [
    'DatabaseManager',
    'Skill',
    'Personnel',
    'PersonnelSkill',
    'Project',
    'ProjectRequirement'
]
