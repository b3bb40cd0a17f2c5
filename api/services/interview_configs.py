"""Interview configuration service."""

from typing import Any, Sequence

from api.services.base import ResourceService
from database.models.interview_configs import InterviewConfig


class InterviewConfigService(ResourceService[InterviewConfig]):
    model = InterviewConfig
    resource = "Interview config"

    async def find_by_enterprise_and_role(
        self, enterprise_id: Any, job_role_id: Any
    ) -> Sequence[InterviewConfig]:
        return await self._find_by(enterprise_id=enterprise_id, job_role_id=job_role_id)
