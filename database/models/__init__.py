"""
Database models.

Importing this package registers every table on ``Base.metadata``.
"""

from database.models.interview_configs import InterviewConfig
from database.models.interviews import Interview, InterviewStatus
from database.models.interview_results import InterviewResult
from database.models.interview_reports import InterviewReport
from database.models.questions import Question

__all__ = [
    "InterviewConfig",
    "Interview",
    "InterviewStatus",
    "InterviewResult",
    "InterviewReport",
    "Question",
]
