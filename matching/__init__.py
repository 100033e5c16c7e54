"""Personnel-to-project matching engine"""
from .proficiency import PROFICIENCY_LEVELS, level_of, parse_proficiency
from .engine import (
    SkillRequirement,
    PersonSkill,
    MatchedSkillEntry,
    MatchResult,
    ProjectMatches,
    resolve_requirements,
    build_skill_profile,
    score_person,
    rank_personnel,
    match_project,
)
from .service import MatchingService, parse_skill_ids

__all__ = [
    'PROFICIENCY_LEVELS',
    'level_of',
    'parse_proficiency',
    'SkillRequirement',
    'PersonSkill',
    'MatchedSkillEntry',
    'MatchResult',
    'ProjectMatches',
    'resolve_requirements',
    'build_skill_profile',
    'score_person',
    'rank_personnel',
    'match_project',
    'MatchingService',
    'parse_skill_ids'
]
