from enum import Enum


class ErrorCode(str, Enum):
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    OPERATION_FAILED = "operation_failed"


class EntityKind(str, Enum):
    ORGANIZATION = "organization"
    ART = "art"
    TEAM = "team"

    @property
    def label(self) -> str:
        return "ART" if self is EntityKind.ART else self.value.capitalize()
