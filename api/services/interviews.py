"""Interview service."""

from typing import Any

from api.services.base import ResourceService
from api.services.interview_configs import InterviewConfigService
from core.exceptions import NotFoundError
from database.models.interviews import Interview, InterviewStatus


class InterviewService(ResourceService[Interview]):
    model = Interview
    resource = "Interview"

    async def create(self, data: dict[str, Any]) -> Interview:
        """
        Create an interview from an existing configuration.

        Raises:
            NotFoundError: ``config_id`` does not name a stored configuration
        """
        await InterviewConfigService(self.session).find_one(data["config_id"])
        return await super().create(data)

    async def find_by_application(self, application_id: Any) -> Interview:
        """
        Fetch the interview of an application.

        Unlike the other per-interview finders this raises instead of
        returning an empty result.
        """
        interviews = await self._find_by(application_id=application_id)
        if not interviews:
            raise NotFoundError(
                self.resource,
                application_id,
                message=f"Interview for application {application_id} not found",
            )
        return interviews[0]

    async def update_status(self, interview_id: Any, status: InterviewStatus) -> Interview:
        return await self._set_field(interview_id, "status", status)
