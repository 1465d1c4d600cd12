"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, WebSocket
from fastapi.middleware.cors import CORSMiddleware

from counterpick.config import settings
from counterpick.api.routes.champions import router as champions_router
from counterpick.api.routes.drafts import router as drafts_router
from counterpick.api.websockets.draft_ws import draft_websocket
from counterpick.services.champion_catalog import ChampionCatalog
from counterpick.services.draft_service import DraftService
from counterpick.services.narrative_client import NarrativeClient
from counterpick.services.recommendation_engine import RecommendationEngine
from counterpick.services.session_manager import SessionManager

logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logging.getLogger("counterpick").setLevel(settings.log_level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup: load reference data once, shared read-only across sessions
    if not hasattr(app.state, "catalog"):
        app.state.catalog = ChampionCatalog(settings.knowledge_dir)
    if not hasattr(app.state, "draft_service"):
        engine = RecommendationEngine(
            settings.knowledge_dir,
            catalog=app.state.catalog,
            limit=settings.recommendation_limit,
            flex_fallback_threshold=settings.flex_fallback_threshold,
        )
        app.state.draft_service = DraftService(
            engine,
            session_manager=SessionManager(ttl_seconds=settings.session_ttl_seconds),
            narrative_client=NarrativeClient(
                api_key=settings.llm_api_key,
                base_url=settings.llm_base_url,
                model=settings.llm_model,
                timeout=settings.llm_timeout_seconds,
                enabled=settings.enable_llm,
            ),
            diagnostics_enabled=settings.scoring_diagnostics,
            diagnostics_dir=settings.diagnostics_dir,
        )
    yield
    # Shutdown: Clean up resources
    await app.state.draft_service.narrative_client.close()


app = FastAPI(
    title="Counterpick",
    description="LoL Draft Assistant - pick/ban recommendations and composition analysis",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "counterpick"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Counterpick API",
        "version": "0.1.0",
        "docs": "/docs",
    }


# Register routers
app.include_router(champions_router)
app.include_router(drafts_router)


@app.websocket("/ws/drafts/{session_id}")
async def websocket_draft(websocket: WebSocket, session_id: str):
    """WebSocket endpoint for live draft sessions."""
    await draft_websocket(websocket, session_id, app.state.draft_service)


def run():
    """Run the API server (``counterpick`` console script)."""
    uvicorn.run(
        "counterpick.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
