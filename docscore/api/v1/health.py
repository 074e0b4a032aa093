from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the scoring service.")
async def health_check(request: Request):
    config = getattr(request.app.state, "scoring_config", None)
    return {"status": "healthy", "scoringConfigLoaded": config is not None}
