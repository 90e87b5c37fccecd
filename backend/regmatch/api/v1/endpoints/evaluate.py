"""Evaluation endpoint for matching a business against the rule catalog."""

import logging

from fastapi import APIRouter, HTTPException, status

from regmatch.deps import DbSession
from regmatch.models.schemas.business import BusinessInput
from regmatch.models.schemas.evaluation import EvaluateResponse
from regmatch.services.evaluation_service import EvaluationService
from regmatch.services.rule_engine import RuleConfigurationError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=EvaluateResponse,
    summary="Evaluate a business profile",
    description="Return the regulatory rules whose scope and conditions the business satisfies",
)
async def evaluate_business(
    business: BusinessInput,
    db: DbSession,
) -> EvaluateResponse:
    """
    Evaluate a business profile against the rule catalog.

    The body is validated before evaluation (422 on invalid input). Missing
    NAICS, city or ZIP produce warnings rather than errors, since rules
    scoped on those attributes simply cannot match.
    """
    try:
        service = EvaluationService(db)
        return await service.evaluate(business)
    except RuleConfigurationError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Rule catalog configuration error: {str(e)}",
        )
    except Exception as e:
        logger.error(f"Evaluation failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Evaluation failed: {str(e)}",
        )
