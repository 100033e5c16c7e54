"""
FastAPI application for the Skills Matrix

Matching routes live under /api/matching; skills, personnel and projects
have plain CRUD routes alongside them.
"""
import logging
from datetime import date, datetime
from typing import List, Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

import config
from database.db_manager import DatabaseManager
from database.models import Personnel, Project, Skill
from errors import DuplicateEntry, InvalidInput, NotFound, StorageUnavailable
from matching.service import MatchingService, parse_skill_ids

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =====================================================
# App setup
# =====================================================

app = FastAPI(
    title="Skills Matrix API",
    description="Track consultant skills and rank personnel against project requirements",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info(f"📁 Database path: {config.DATABASE_PATH}")
db_manager = DatabaseManager(db_path=config.DATABASE_PATH)
matching_service = MatchingService(db_manager)


def get_db() -> DatabaseManager:
    return db_manager


def get_matching_service() -> MatchingService:
    return matching_service


# =====================================================
# Error translation
# =====================================================

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return _error(404, str(exc))


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput):
    return _error(400, str(exc))


@app.exception_handler(DuplicateEntry)
async def duplicate_entry_handler(request: Request, exc: DuplicateEntry):
    return _error(400, str(exc))


@app.exception_handler(StorageUnavailable)
async def storage_unavailable_handler(request: Request, exc: StorageUnavailable):
    logger.error(f"❌ Storage unavailable on {request.url.path}: {exc}")
    return _error(500, str(exc))


# =====================================================
# Request models
# =====================================================

class SkillRequest(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None


class PersonnelRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    experience_level: Optional[str] = None


class SkillAssignmentRequest(BaseModel):
    personnel_id: int
    skill_id: int
    proficiency: str


class RequiredSkillRequest(BaseModel):
    skill_id: int
    min_proficiency: str


class ProjectRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[str] = "Planning"
    required_skills: List[RequiredSkillRequest] = []

    def to_project(self) -> Project:
        return Project(
            name=self.name,
            description=self.description,
            start_date=self.start_date,
            end_date=self.end_date,
            status=self.status or "Planning",
        )

    def requirement_pairs(self):
        return [(r.skill_id, r.min_proficiency) for r in self.required_skills]


# =====================================================
# Basic endpoints
# =====================================================

@app.get("/")
async def root():
    return {
        "service": "Skills Matrix API",
        "status": "running",
        "timestamp": datetime.now().isoformat()
    }


@app.get("/health")
def health_check(db: DatabaseManager = Depends(get_db)):
    return {
        "status": "healthy",
        "statistics": db.get_statistics(),
        "timestamp": datetime.now().isoformat()
    }


# =====================================================
# Matching
# =====================================================

@app.get("/api/matching/project/{project_id}")
async def get_matching_personnel(
    project_id: int,
    service: MatchingService = Depends(get_matching_service),
):
    result = await service.compute_matches(project_id)
    return result.to_dict()


@app.get("/api/matching/search")
async def search_personnel_by_skills(
    skills: Optional[str] = None,
    service: MatchingService = Depends(get_matching_service),
):
    skill_ids = parse_skill_ids(skills)
    personnel = await service.search_by_skill_set(skill_ids)
    return [p.to_dict() for p in personnel]


# =====================================================
# Skills
# =====================================================

@app.get("/api/skills")
def list_skills(db: DatabaseManager = Depends(get_db)):
    return [s.to_dict() for s in db.list_skills()]


@app.post("/api/skills", status_code=201)
def create_skill(request: SkillRequest, db: DatabaseManager = Depends(get_db)):
    skill_id = db.insert_skill(Skill(**request.model_dump()))
    return db.get_skill_by_id(skill_id).to_dict()


@app.put("/api/skills/{skill_id}")
def update_skill(skill_id: int, request: SkillRequest, db: DatabaseManager = Depends(get_db)):
    return db.update_skill(skill_id, Skill(**request.model_dump())).to_dict()


@app.delete("/api/skills/{skill_id}")
def delete_skill(skill_id: int, db: DatabaseManager = Depends(get_db)):
    db.delete_skill(skill_id)
    return {"message": "Skill deleted successfully"}


# =====================================================
# Personnel
# =====================================================

@app.get("/api/personnel")
def list_personnel(db: DatabaseManager = Depends(get_db)):
    return [p.to_dict() for p in db.list_personnel()]


@app.post("/api/personnel/skills/assign", status_code=201)
def assign_skill(request: SkillAssignmentRequest, db: DatabaseManager = Depends(get_db)):
    db.assign_skill(request.personnel_id, request.skill_id, request.proficiency)
    return {"message": "Skill assigned successfully"}


@app.delete("/api/personnel/{personnel_id}/skills/{skill_id}")
def remove_skill(personnel_id: int, skill_id: int, db: DatabaseManager = Depends(get_db)):
    db.remove_skill(personnel_id, skill_id)
    return {"message": "Skill removed successfully"}


@app.get("/api/personnel/{personnel_id}")
def get_personnel(personnel_id: int, db: DatabaseManager = Depends(get_db)):
    person = db.get_personnel_by_id(personnel_id)
    if person is None:
        raise NotFound("Personnel", personnel_id)
    return person.to_dict()


@app.post("/api/personnel", status_code=201)
def create_personnel(request: PersonnelRequest, db: DatabaseManager = Depends(get_db)):
    personnel_id = db.insert_personnel(Personnel(**request.model_dump()))
    return db.get_personnel_by_id(personnel_id).to_dict()


@app.put("/api/personnel/{personnel_id}")
def update_personnel(personnel_id: int, request: PersonnelRequest, db: DatabaseManager = Depends(get_db)):
    return db.update_personnel(personnel_id, Personnel(**request.model_dump())).to_dict()


@app.delete("/api/personnel/{personnel_id}")
def delete_personnel(personnel_id: int, db: DatabaseManager = Depends(get_db)):
    db.delete_personnel(personnel_id)
    return {"message": "Personnel deleted successfully"}


# =====================================================
# Projects
# =====================================================

@app.get("/api/projects")
def list_projects(db: DatabaseManager = Depends(get_db)):
    return [p.to_dict() for p in db.list_projects()]


@app.get("/api/projects/{project_id}")
def get_project(project_id: int, db: DatabaseManager = Depends(get_db)):
    project = db.get_project_with_requirements(project_id)
    if project is None:
        raise NotFound("Project", project_id)
    return project.to_dict()


@app.post("/api/projects", status_code=201)
def create_project(request: ProjectRequest, db: DatabaseManager = Depends(get_db)):
    project_id = db.insert_project(request.to_project(), request.requirement_pairs())
    return db.get_project_with_requirements(project_id).to_dict()


@app.put("/api/projects/{project_id}")
def update_project(project_id: int, request: ProjectRequest, db: DatabaseManager = Depends(get_db)):
    return db.update_project(project_id, request.to_project(), request.requirement_pairs()).to_dict()


@app.delete("/api/projects/{project_id}")
def delete_project(project_id: int, db: DatabaseManager = Depends(get_db)):
    db.delete_project(project_id)
    return {"message": "Project deleted successfully"}


# =====================================================
# Entrypoint
# =====================================================

if __name__ == "__main__":
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)
