"""
Data models for the Skills Matrix
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, List

SKILL_CATEGORIES = (
    "Programming Language",
    "Framework",
    "Tool",
    "Soft Skill",
    "Database",
    "Cloud",
)
EXPERIENCE_LEVELS = ("Junior", "Mid-Level", "Senior")
PROJECT_STATUSES = ("Planning", "Active", "Completed")


def _isoformat(value):
    return value.isoformat() if isinstance(value, (date, datetime)) else value


@dataclass
class Skill:
    """Skill catalogue entry"""
    name: str
    category: str
    description: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_dict(self):
        """Convert to dictionary for JSON serialization"""
        return {
            'id': self.id,
            'name': self.name,
            'category': self.category,
            'description': self.description,
            'created_at': _isoformat(self.created_at)
        }


@dataclass
class PersonnelSkill:
    """A skill held by a person, joined with the catalogue name"""
    skill_id: int
    name: str
    proficiency: str

    def to_dict(self):
        return {
            'id': self.skill_id,
            'name': self.name,
            'proficiency': self.proficiency
        }


@dataclass
class Personnel:
    """Consultant record with the skills they hold (in stored order)"""
    name: str
    email: str
    role: Optional[str] = None
    experience_level: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    skills: List[PersonnelSkill] = field(default_factory=list)

    def to_dict(self, include_skills: bool = True):
        """Convert to dictionary for JSON serialization"""
        data = {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'experience_level': self.experience_level,
            'created_at': _isoformat(self.created_at)
        }
        if include_skills:
            data['skills'] = [s.to_dict() for s in self.skills]
        return data


@dataclass
class ProjectRequirement:
    """A (skill, minimum proficiency) pair attached to a project"""
    skill_id: int
    name: str
    min_proficiency: str

    def to_dict(self):
        return {
            'id': self.skill_id,
            'name': self.name,
            'min_proficiency': self.min_proficiency
        }


@dataclass
class Project:
    """Project with its required skills (in stored order)"""
    name: str
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: str = 'Planning'
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    required_skills: List[ProjectRequirement] = field(default_factory=list)

    def to_dict(self):
        """Convert to dictionary for JSON serialization"""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'start_date': _isoformat(self.start_date),
            'end_date': _isoformat(self.end_date),
            'status': self.status,
            'created_at': _isoformat(self.created_at),
            'required_skills': [r.to_dict() for r in self.required_skills]
        }
