"""Claim verification API endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ...domain.errors import AdmissionDeniedError, InvalidClaimError
from ...domain.models.verification import Verdict
from ...domain.services.verification_aggregator import VerificationAggregator
from ...infrastructure.dependencies import get_verification_aggregator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["verification"])


class VerifyRequest(BaseModel):
    """Request model for claim verification."""

    # Left untyped so that non-string claims get the same 400 as empty ones
    claim: Any = Field(None, description="Claim text or article URL to verify")


@router.post("/verify-news", response_model=Verdict)
async def verify_news(
    request: VerifyRequest,
    aggregator: VerificationAggregator = Depends(get_verification_aggregator),
) -> Verdict:
    """Verify a claim.

    Args:
        request: Verification request

    Returns:
        Verdict with label, confidence, explanation and sources

    Raises:
        HTTPException: 400 for an invalid claim, 429 when rate limited
    """
    try:
        return await aggregator.verify(request.claim)
    except InvalidClaimError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AdmissionDeniedError as e:
        logger.info(f"🚦 Verification refused, retry in {e.retry_after_seconds}s")
        raise HTTPException(
            status_code=429,
            detail=str(e),
            headers={"Retry-After": str(e.retry_after_seconds)},
        )
    except Exception as e:
        logger.error(f"❌ verify-news failed: {type(e).__name__}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Unexpected server error.")
