from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Role(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    CHATTER = "chatter"
    NONE = "none"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Role":
        if value == "admin":
            return cls.ADMIN
        if value == "manager":
            return cls.MANAGER
        if value == "chatter":
            return cls.CHATTER
        return cls.NONE


class ProfileStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"
    DELETED = "deleted"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ProfileStatus"]:
        if value is None or not str(value).strip():
            return None
        if value == "pending":
            return cls.PENDING
        if value == "approved":
            return cls.APPROVED
        if value == "denied":
            return cls.DENIED
        if value == "deleted":
            return cls.DELETED
        return cls.UNKNOWN


class CallerContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str
    role: Role
    status: ProfileStatus
    simulated: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role in (Role.ADMIN, Role.MANAGER)

    @property
    def is_approved(self) -> bool:
        return self.status == ProfileStatus.APPROVED
