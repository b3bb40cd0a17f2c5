"""Question bank service."""

from typing import Any, Sequence

from api.services.base import ResourceService
from database.models.questions import Question


class QuestionService(ResourceService[Question]):
    model = Question
    resource = "Question"

    async def find_by_role_and_seniority(
        self, job_role_id: Any, seniority_id: Any
    ) -> Sequence[Question]:
        return await self._find_by(job_role_id=job_role_id, seniority_id=seniority_id)
