"""Interview result service."""

from typing import Any, Sequence

from api.services.base import ResourceService
from database.models.interview_results import InterviewResult


class InterviewResultService(ResourceService[InterviewResult]):
    model = InterviewResult
    resource = "Interview result"

    async def find_by_interview(self, interview_id: Any) -> Sequence[InterviewResult]:
        return await self._find_by(interview_id=interview_id)

    async def update_rating(self, result_id: Any, rating: int) -> InterviewResult:
        return await self._set_field(result_id, "rating", rating)

    async def update_ai_feedback(self, result_id: Any, ai_feedback: str) -> InterviewResult:
        return await self._set_field(result_id, "ai_feedback", ai_feedback)
