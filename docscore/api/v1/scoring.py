import logging

from fastapi import APIRouter, Request

from docscore.core.config.scoring import DEFAULT_SCORING_CONFIG, ScoringConfig
from docscore.core.rate_limit import rate_limit, scoring_limit
from docscore.schemas.report import ATSScoreReport, SEOScoreReport
from docscore.schemas.requests import ATSScoreRequest, SEOScoreRequest
from docscore.services import score_ats, score_seo

logger = logging.getLogger(__name__)

router = APIRouter()


def _scoring_config(request: Request) -> ScoringConfig:
    return getattr(request.app.state, "scoring_config", None) or DEFAULT_SCORING_CONFIG


@router.post("/score/seo", response_model=SEOScoreReport)
@rate_limit(scoring_limit())
async def score_seo_endpoint(request: Request, payload: SEOScoreRequest):
    report = score_seo(
        payload.content,
        payload.keywords,
        title=payload.title,
        meta_description=payload.meta_description,
        config=_scoring_config(request),
    )
    logger.info("seo_score_request overall=%d grade=%s", report.overall, report.grade)
    return report


@router.post("/score/ats", response_model=ATSScoreReport)
@rate_limit(scoring_limit())
async def score_ats_endpoint(request: Request, payload: ATSScoreRequest):
    report = score_ats(
        payload.profile,
        payload.job_description,
        config=_scoring_config(request),
    )
    logger.info(
        "ats_score_request overall=%d grade=%s job_description=%s",
        report.overall,
        report.grade,
        payload.job_description is not None,
    )
    return report
