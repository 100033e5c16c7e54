"""
Exceptions shared by the storage layer, the matching service and the API
"""
from typing import Any


class SkillsMatrixError(Exception):
    """Base class for all Skills Matrix errors"""


class NotFound(SkillsMatrixError):
    """A referenced record does not exist"""

    def __init__(self, entity: str, identifier: Any):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found: {identifier}")


class InvalidInput(SkillsMatrixError, ValueError):
    """Caller supplied missing or malformed input"""


class UnknownProficiency(InvalidInput):
    """Proficiency name is not one of the recognized levels"""

    def __init__(self, name: Any):
        self.name = name
        super().__init__(f"Unknown proficiency: {name!r}")


class DuplicateEntry(SkillsMatrixError):
    """A uniqueness constraint was violated (email, skill assignment, requirement)"""


class StorageUnavailable(SkillsMatrixError):
    """The storage backend failed to serve a read or write"""
