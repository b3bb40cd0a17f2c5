"""Interview report service."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Sequence

from api.services.base import ResourceService
from database.models.interview_reports import InterviewReport

SCORE_PRECISION = Decimal("0.01")


def round_score(score: Any) -> Decimal:
    """Round a score to the two decimal places the column keeps."""
    return Decimal(str(score)).quantize(SCORE_PRECISION, rounding=ROUND_HALF_UP)


class InterviewReportService(ResourceService[InterviewReport]):
    model = InterviewReport
    resource = "Interview report"

    async def create(self, data: dict[str, Any]) -> InterviewReport:
        return await super().create(self._with_rounded_score(data))

    async def update(self, record_id: Any, changes: dict[str, Any]) -> InterviewReport:
        return await super().update(record_id, self._with_rounded_score(changes))

    async def find_by_interview(self, interview_id: Any) -> Sequence[InterviewReport]:
        """Reports of an interview; empty when none were produced yet."""
        return await self._find_by(interview_id=interview_id)

    async def update_overall_score(self, report_id: Any, overall_score: Decimal) -> InterviewReport:
        return await self._set_field(report_id, "overall_score", overall_score)

    async def update_recommendations(self, report_id: Any, recommendations: str) -> InterviewReport:
        return await self._set_field(report_id, "recommendations", recommendations)

    async def update_company_report(
        self, report_id: Any, company_report: dict[str, Any]
    ) -> InterviewReport:
        return await self._set_field(report_id, "company_report", company_report)

    async def update_candidate_report(
        self, report_id: Any, candidate_report: dict[str, Any]
    ) -> InterviewReport:
        return await self._set_field(report_id, "candidate_report", candidate_report)

    @staticmethod
    def _with_rounded_score(data: dict[str, Any]) -> dict[str, Any]:
        if data.get("overall_score") is None:
            return data
        return {**data, "overall_score": round_score(data["overall_score"])}
