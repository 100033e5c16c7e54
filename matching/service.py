"""
Matching service: the entry point callers (the HTTP layer, scripts) use
to rank personnel against a project and to run exact skill-set searches.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Optional, Protocol

from database.models import Personnel, Project
from errors import InvalidInput, NotFound
from matching.engine import ProjectMatches, match_project

logger = logging.getLogger(__name__)


class PersonnelStore(Protocol):
    """Storage reads the matching service depends on"""

    def get_project_with_requirements(self, project_id: int) -> Optional[Project]: ...

    def get_all_personnel_with_skills(self) -> List[Personnel]: ...

    def get_personnel_by_skill_set(self, skill_ids: Iterable[int]) -> List[Personnel]: ...


def parse_skill_ids(raw: Optional[str]) -> List[int]:
    """
    Parse a comma-separated id list such as "1,2,5".
    Raises InvalidInput when it is missing, empty, or not all integers.
    """
    if raw is None or not str(raw).strip():
        raise InvalidInput("Skills parameter is required")
    try:
        ids = [int(part) for part in str(raw).split(",") if part.strip()]
    except ValueError as e:
        raise InvalidInput(f"Skills must be comma-separated integers: {raw!r}") from e
    if not ids:
        raise InvalidInput("Skills parameter is required")
    return ids


class MatchingService:
    """
    Ranks personnel against project requirements over a snapshot read
    from storage. Storage errors propagate unchanged; nothing is retried.
    """

    def __init__(self, store: PersonnelStore):
        self.store = store

    async def compute_matches(self, project_id: int) -> ProjectMatches:
        """Ranked matches for a project; raises NotFound if it does not exist"""
        project, personnel = await asyncio.gather(
            asyncio.to_thread(self.store.get_project_with_requirements, project_id),
            asyncio.to_thread(self.store.get_all_personnel_with_skills),
        )
        if project is None:
            raise NotFound("Project", project_id)

        result = match_project(project, personnel)
        logger.info(
            f"Matched project {project_id} ({project.name}): "
            f"{len(result.matches)}/{len(personnel)} personnel included"
        )
        return result

    async def search_by_skill_set(self, skill_ids: Iterable[int]) -> List[Personnel]:
        """Personnel holding every given skill id, regardless of proficiency"""
        ids = sorted(set(skill_ids))
        if not ids:
            raise InvalidInput("At least one skill id is required")

        personnel = await asyncio.to_thread(self.store.get_personnel_by_skill_set, ids)
        logger.info(f"Skill-set search {ids}: {len(personnel)} personnel found")
        return personnel
