"""
Interview report endpoints.

A report aggregates an interview into a company-facing and a
candidate-facing document plus an overall score.
"""

from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from api.dependencies import get_interview_report_service, get_message_bus, get_optional_message_bus
from api.routes.resource import ResourceModule, build_router, emit_event, register_message_handlers
from api.schemas.interview_reports import (
    CandidateReportUpdate,
    CompanyReportUpdate,
    InterviewReportCreate,
    InterviewReportResponse,
    InterviewReportUpdate,
    OverallScoreUpdate,
    RecommendationsUpdate,
)
from api.services import InterviewReportService
from core.messaging import MessageBus, Reference, ensure_references_exist
from core.messaging.verification import VERIFY_INTERVIEW

module = ResourceModule(
    name="interview_report",
    label="Interview report",
    path="/interview-reports",
    service_class=InterviewReportService,
    service_dependency=get_interview_report_service,
    create_schema=InterviewReportCreate,
    update_schema=InterviewReportUpdate,
    response_schema=InterviewReportResponse,
    record_key="report",
    id_key="report_id",
    verify_pattern="verify_report",
    create_references=((VERIFY_INTERVIEW, "interview_id"),),
    extra_events=(
        "interview_report_score_updated",
        "interview_report_recommendations_updated",
    ),
)

router = build_router(module)


@router.get(
    "/interview/{interview_id}",
    response_model=list[InterviewReportResponse],
    summary="List reports of an interview",
)
async def find_by_interview(
    interview_id: str,
    service: InterviewReportService = Depends(get_interview_report_service),
    bus: MessageBus = Depends(get_message_bus),
):
    await ensure_references_exist(bus, Reference(VERIFY_INTERVIEW, interview_id))
    return await service.find_by_interview(interview_id)


@router.patch(
    "/{record_id}/overall-score",
    response_model=InterviewReportResponse,
    summary="Update overall score",
)
async def update_overall_score(
    record_id: str,
    payload: OverallScoreUpdate,
    service: InterviewReportService = Depends(get_interview_report_service),
    bus: Optional[MessageBus] = Depends(get_optional_message_bus),
):
    report = await service.update_overall_score(record_id, payload.overall_score)
    emit_event(
        bus,
        "interview_report_score_updated",
        report_id=str(report.id),
        overall_score=float(report.overall_score),
    )
    return report


@router.patch(
    "/{record_id}/recommendations",
    response_model=InterviewReportResponse,
    summary="Update recommendations",
)
async def update_recommendations(
    record_id: str,
    payload: RecommendationsUpdate,
    service: InterviewReportService = Depends(get_interview_report_service),
    bus: Optional[MessageBus] = Depends(get_optional_message_bus),
):
    report = await service.update_recommendations(record_id, payload.recommendations)
    emit_event(
        bus,
        "interview_report_recommendations_updated",
        report_id=str(report.id),
        recommendations=report.recommendations,
    )
    return report


@router.patch(
    "/{record_id}/company-report",
    response_model=InterviewReportResponse,
    summary="Replace the company report",
)
async def update_company_report(
    record_id: str,
    payload: CompanyReportUpdate,
    service: InterviewReportService = Depends(get_interview_report_service),
    bus: Optional[MessageBus] = Depends(get_optional_message_bus),
):
    report = await service.update_company_report(record_id, payload.company_report)
    emit_event(bus, module.event("updated"), report=module.serialize(report))
    return report


@router.patch(
    "/{record_id}/candidate-report",
    response_model=InterviewReportResponse,
    summary="Replace the candidate report",
)
async def update_candidate_report(
    record_id: str,
    payload: CandidateReportUpdate,
    service: InterviewReportService = Depends(get_interview_report_service),
    bus: Optional[MessageBus] = Depends(get_optional_message_bus),
):
    report = await service.update_candidate_report(record_id, payload.candidate_report)
    emit_event(bus, module.event("updated"), report=module.serialize(report))
    return report


def register_handlers(bus: MessageBus, session_factory: async_sessionmaker[AsyncSession]) -> None:
    register_message_handlers(module, bus, session_factory)
