from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from database.models import Personnel, Project
from matching.proficiency import level_of

logger = logging.getLogger(__name__)


# -----------------------
# Models
# -----------------------

@dataclass(frozen=True)
class SkillRequirement:
    skill_id: int
    name: str
    min_proficiency: str
    min_level: int         # ordinal of min_proficiency (0 if unrecognized)


@dataclass(frozen=True)
class PersonSkill:
    skill_id: int
    name: str
    proficiency: str
    level: int


@dataclass(frozen=True)
class MatchedSkillEntry:
    skill_name: str
    required_proficiency: str
    actual_proficiency: str
    meets_requirement: bool

    def to_dict(self) -> dict:
        return {
            "skill": self.skill_name,
            "required": self.required_proficiency,
            "actual": self.actual_proficiency,
            "meets_requirement": self.meets_requirement,
        }


@dataclass(frozen=True)
class MatchResult:
    person: Personnel
    matched_skills: List[MatchedSkillEntry]
    missing_skills: List[str]
    match_percentage: int                     # 0..100
    meets_all_requirements: Optional[bool]    # None when the project has no requirements

    def to_dict(self) -> dict:
        """Person fields flattened alongside the match details"""
        data = self.person.to_dict(include_skills=False)
        data.update({
            "matched_skills": [m.to_dict() for m in self.matched_skills],
            "missing_skills": list(self.missing_skills),
            "match_percentage": self.match_percentage,
            "meets_all_requirements": self.meets_all_requirements,
        })
        return data


@dataclass(frozen=True)
class ProjectMatches:
    project: Project
    requirements: List[SkillRequirement]
    matches: List[MatchResult] = field(default_factory=list)

    def to_dict(self) -> dict:
        project = self.project.to_dict()
        project["required_skills"] = [
            {"name": r.name, "min_proficiency": r.min_proficiency} for r in self.requirements
        ]
        return {
            "project": project,
            "matches": [m.to_dict() for m in self.matches],
        }


# -----------------------
# Normalization
# -----------------------

def resolve_requirements(project: Project) -> List[SkillRequirement]:
    """Project's required skills in stored order. Empty means no constraint."""
    return [
        SkillRequirement(
            skill_id=r.skill_id,
            name=r.name,
            min_proficiency=r.min_proficiency,
            min_level=level_of(r.min_proficiency),
        )
        for r in project.required_skills
    ]


def build_skill_profile(person: Personnel) -> List[PersonSkill]:
    return [
        PersonSkill(
            skill_id=s.skill_id,
            name=s.name,
            proficiency=s.proficiency,
            level=level_of(s.proficiency),
        )
        for s in person.skills
    ]


# -----------------------
# Scoring
# -----------------------

def _round_half_up_percentage(met: int, total: int) -> int:
    # integer form of floor(100 * met / total + 0.5)
    return (200 * met + total) // (2 * total)


def score_person(person: Personnel, requirements: List[SkillRequirement]) -> Optional[MatchResult]:
    """
    Score one person against a requirement list.

    Returns None when the person holds none of the required skills and so
    is left out of the results. With no requirements every person is
    returned at 0% with nothing missing.
    """
    if not requirements:
        return MatchResult(
            person=person,
            matched_skills=[],
            missing_skills=[],
            match_percentage=0,
            meets_all_requirements=None,
        )

    held: Dict[int, PersonSkill] = {}
    for s in build_skill_profile(person):
        held.setdefault(s.skill_id, s)

    matched: List[MatchedSkillEntry] = []
    missing: List[str] = []
    met = 0
    for req in requirements:
        ps = held.get(req.skill_id)
        if ps is None:
            missing.append(req.name)
            continue

        ok = ps.level >= req.min_level
        matched.append(
            MatchedSkillEntry(
                skill_name=req.name,
                required_proficiency=req.min_proficiency,
                actual_proficiency=ps.proficiency,
                meets_requirement=ok,
            )
        )
        if ok:
            met += 1
        else:
            missing.append(req.name)

    if not matched:
        return None

    return MatchResult(
        person=person,
        matched_skills=matched,
        missing_skills=missing,
        match_percentage=_round_half_up_percentage(met, len(requirements)),
        meets_all_requirements=not missing,
    )


# -----------------------
# Ranking
# -----------------------

def rank_personnel(personnel: Iterable[Personnel], requirements: List[SkillRequirement]) -> List[MatchResult]:
    """
    Score everyone and sort by match percentage, highest first.
    Equal percentages keep the order the personnel were supplied in.
    """
    results = []
    for person in personnel:
        result = score_person(person, requirements)
        if result is not None:
            results.append(result)

    results.sort(key=lambda r: r.match_percentage, reverse=True)
    return results


def match_project(project: Project, personnel: Iterable[Personnel]) -> ProjectMatches:
    """
    Rank personnel for a project. A project with no requirements lists
    everyone at 0%, ordered by name.
    """
    requirements = resolve_requirements(project)
    if not requirements:
        personnel = sorted(personnel, key=lambda p: p.name or "")
    matches = rank_personnel(personnel, requirements)
    logger.debug(
        f"Project {project.id}: {len(requirements)} requirements, {len(matches)} matching personnel"
    )
    return ProjectMatches(project=project, requirements=requirements, matches=matches)
