from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from src.models.access import CallerContext, ProfileStatus, Role
from src.repositories.access_repository import AccessRepository

logger = logging.getLogger(__name__)

# Profiles created before approval tracking have no status. They are treated
# as approved: a deliberate fail-open choice kept from the existing dashboard.
DEFAULT_PROFILE_STATUS_POLICY = ProfileStatus.APPROVED


class AccessControlService:
    def __init__(
        self,
        repository: AccessRepository,
        role_simulation: Optional[Role] = None,
        default_status: ProfileStatus = DEFAULT_PROFILE_STATUS_POLICY,
    ) -> None:
        self.repository = repository
        self.role_simulation = role_simulation
        self.default_status = default_status

    def resolve_caller(self, access_token: Optional[str]) -> Optional[CallerContext]:
        if not access_token or not access_token.strip():
            return None
        user = self.repository.get_user(access_token.strip())
        if user is None:
            logger.info("Rejected access token")
            return None
        user_id = str(user["id"])

        if self.role_simulation is not None:
            return CallerContext(
                user_id=user_id,
                role=self.role_simulation,
                status=ProfileStatus.APPROVED,
                simulated=True,
            )

        with ThreadPoolExecutor(max_workers=2) as executor:
            role_future = executor.submit(self.repository.get_role, user_id)
            status_future = executor.submit(self.repository.get_profile_status, user_id)
            raw_role = role_future.result()
            raw_status = status_future.result()

        role = Role.parse(raw_role)
        if raw_role and role == Role.NONE:
            logger.warning("Unrecognised role %r for user %s", raw_role, user_id)
        status = ProfileStatus.parse(raw_status)
        if status is None:
            status = self.default_status
        elif status == ProfileStatus.UNKNOWN:
            logger.warning("Unrecognised profile status %r for user %s", raw_status, user_id)
        return CallerContext(user_id=user_id, role=role, status=status)
