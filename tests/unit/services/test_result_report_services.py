"""Tests for interview result and interview report services."""

import uuid
from decimal import Decimal

import pytest

from api.services import InterviewReportService, InterviewResultService
from core.exceptions import NotFoundError


@pytest.fixture
def result_service(session):
    return InterviewResultService(session)


@pytest.fixture
def report_service(session):
    return InterviewReportService(session)


@pytest.fixture
def interview_id():
    return uuid.uuid4()


@pytest.fixture
def result_data(interview_id):
    return {
        "interview_id": interview_id,
        "question_id": uuid.uuid4(),
        "candidate_answer": "Use a queue.",
        "rating": 3,
        "ai_feedback": "Reasonable answer.",
    }


@pytest.fixture
def report_data(interview_id):
    return {
        "interview_id": interview_id,
        "company_report": {"technical_skills": {"score": 80}},
        "candidate_report": {"summary": "Good"},
        "overall_score": Decimal("80.50"),
        "recommendations": "Proceed",
    }


class TestInterviewResultService:
    """Test result finders and narrow mutators."""

    async def test_find_by_interview(self, result_service, result_data, interview_id):
        first = await result_service.create(result_data)
        second = await result_service.create({**result_data, "question_id": uuid.uuid4()})
        await result_service.create({**result_data, "interview_id": uuid.uuid4()})

        results = await result_service.find_by_interview(str(interview_id))

        assert {result.id for result in results} == {first.id, second.id}

    async def test_find_by_interview_empty(self, result_service):
        assert list(await result_service.find_by_interview(str(uuid.uuid4()))) == []

    async def test_update_rating_touches_only_rating(self, result_service, result_data):
        created = await result_service.create(result_data)

        updated = await result_service.update_rating(created.id, 5)

        assert updated.rating == 5
        assert updated.candidate_answer == result_data["candidate_answer"]
        assert updated.ai_feedback == result_data["ai_feedback"]
        assert updated.question_id == result_data["question_id"]

    async def test_update_ai_feedback_touches_only_feedback(self, result_service, result_data):
        created = await result_service.create(result_data)

        updated = await result_service.update_ai_feedback(created.id, "Excellent depth.")

        assert updated.ai_feedback == "Excellent depth."
        assert updated.rating == result_data["rating"]

    async def test_update_rating_missing(self, result_service):
        with pytest.raises(NotFoundError) as exc_info:
            await result_service.update_rating(uuid.uuid4(), 4)
        assert exc_info.value.resource == "Interview result"


class TestInterviewReportService:
    """Test report finders and narrow mutators."""

    async def test_optional_documents(self, report_service, interview_id):
        report = await report_service.create(
            {"interview_id": interview_id, "overall_score": Decimal("150")}
        )

        assert report.company_report is None
        assert report.candidate_report is None
        assert report.recommendations is None
        assert float(report.overall_score) == 150.0

    async def test_find_by_interview_empty_list(self, report_service):
        assert list(await report_service.find_by_interview(str(uuid.uuid4()))) == []

    async def test_find_by_interview(self, report_service, report_data, interview_id):
        created = await report_service.create(report_data)

        reports = await report_service.find_by_interview(interview_id)
        assert [report.id for report in reports] == [created.id]

    async def test_update_overall_score(self, report_service, report_data):
        created = await report_service.create(report_data)

        updated = await report_service.update_overall_score(created.id, Decimal("92.25"))

        assert float(updated.overall_score) == 92.25
        assert updated.recommendations == report_data["recommendations"]
        assert updated.company_report == report_data["company_report"]

    async def test_scores_rounded_on_write(self, report_service, report_data):
        created = await report_service.create({**report_data, "overall_score": Decimal("87.555")})
        assert created.overall_score == Decimal("87.56")

        updated = await report_service.update(created.id, {"overall_score": Decimal("64.004")})
        assert updated.overall_score == Decimal("64.00")

    async def test_update_recommendations(self, report_service, report_data):
        created = await report_service.create(report_data)

        updated = await report_service.update_recommendations(created.id, "Hire")

        assert updated.recommendations == "Hire"
        assert float(updated.overall_score) == 80.5

    async def test_update_company_and_candidate_reports(self, report_service, report_data):
        created = await report_service.create(report_data)

        await report_service.update_company_report(created.id, {"culture_fit": "high"})
        updated = await report_service.update_candidate_report(created.id, {"next_steps": []})

        assert updated.company_report == {"culture_fit": "high"}
        assert updated.candidate_report == {"next_steps": []}
        assert updated.recommendations == report_data["recommendations"]

    async def test_update_recommendations_missing(self, report_service):
        with pytest.raises(NotFoundError):
            await report_service.update_recommendations("missing", "text")
