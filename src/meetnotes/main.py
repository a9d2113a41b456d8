import logging

from dotenv import load_dotenv
from fastapi import FastAPI

load_dotenv()

from .config import get_config
from .db import init_db
from .api.v1 import router as api_v1_router
from .pages import router as pages_router

config = get_config()

logging.basicConfig(
    level=getattr(logging, config.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="AI Meeting Notes & Action Items Manager",
    description="Manage meeting notes and generate AI-powered summaries, decisions, and action items",
)


@app.on_event("startup")
def startup():
    init_db()
    logger.info(f"meetnotes started (environment: {config.environment})")


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(api_v1_router)
app.include_router(pages_router)


def run():
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "meetnotes.main:app",
        host=config.api_host,
        port=config.api_port,
        reload=config.debug,
    )
