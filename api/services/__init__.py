"""
API Services Layer.

Database operations behind the HTTP endpoints and message responders,
one service class per resource.
"""

from api.services.base import ResourceService, parse_uuid
from api.services.interview_configs import InterviewConfigService
from api.services.interviews import InterviewService
from api.services.interview_results import InterviewResultService
from api.services.interview_reports import InterviewReportService
from api.services.questions import QuestionService

__all__ = [
    "ResourceService",
    "parse_uuid",
    "InterviewConfigService",
    "InterviewService",
    "InterviewResultService",
    "InterviewReportService",
    "QuestionService",
]
