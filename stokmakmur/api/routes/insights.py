"""AI insight endpoint."""

from fastapi import APIRouter, Depends

from stokmakmur.api.dependencies import get_current_role, get_generate_insights_use_case
from stokmakmur.application.dto.responses import ErrorResponse, InsightResponse
from stokmakmur.application.use_cases.generate_insights import GenerateInsightsUseCase
from stokmakmur.core.entities.inventory import UserRole

router = APIRouter(prefix="/api/insights", tags=["insights"])


@router.post("", response_model=InsightResponse, responses={403: {"model": ErrorResponse}})
async def generate_insights(
    role: UserRole = Depends(get_current_role),
    use_case: GenerateInsightsUseCase = Depends(get_generate_insights_use_case),
) -> InsightResponse:
    """Strategic restock advice; falls back to a fixed message when the LLM fails."""
    return await use_case.execute(role)
