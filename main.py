import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from campaigns_api.config import settings
from campaigns_api.exception_handlers import register_exception_handlers
from campaigns_api.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from campaigns_api.routes import campaign_challenges, campaigns, challenges, participants, tenants

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    setup_structured_logging(log_level=settings.log_level, json_format=settings.json_logs)

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant campaigns, challenges and participants",
        debug=settings.debug,
        version=settings.app_version,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(StructuredLoggingMiddleware)

    app.include_router(tenants.router, prefix="/api", tags=["Tenant"])
    app.include_router(campaigns.router, prefix="/api", tags=["Campaigns"])
    app.include_router(campaign_challenges.router, prefix="/api", tags=["Campaign Challenges"])
    app.include_router(challenges.router, prefix="/api", tags=["Challenges"])
    app.include_router(participants.router, prefix="/api", tags=["Participants"])

    register_exception_handlers(app)

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok"}

    if settings.debug:
        logger.info("Running in %s mode", settings.environment)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
