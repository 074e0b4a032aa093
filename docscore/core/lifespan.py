from contextlib import asynccontextmanager
import logging

from docscore.core.config import settings
from docscore.core.config.scoring import DEFAULT_SCORING_CONFIG, load_scoring_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    if settings.scoring_config_path:
        app.state.scoring_config = load_scoring_config(settings.scoring_config_path)
        logger.info("scoring_config_loaded path=%s", settings.scoring_config_path)
    else:
        app.state.scoring_config = DEFAULT_SCORING_CONFIG
        logger.info("scoring_config_loaded path=default")
    yield
