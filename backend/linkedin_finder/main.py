from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from linkedin_finder.config import get_settings
from linkedin_finder.database import connect_to_mongo, close_mongo_connection
from linkedin_finder.discovery.router import router as discovery_router
from linkedin_finder.discovery.dependencies import shutdown_provider_chain

settings = get_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle - connect/disconnect MongoDB and search clients."""
    # Startup
    await connect_to_mongo()
    logger.info("LinkedIn discovery service started")

    yield

    # Shutdown
    await shutdown_provider_chain()
    await close_mongo_connection()


app = FastAPI(title="LinkedIn Company Finder API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Include routers
app.include_router(discovery_router)


@app.get("/health")
def health():
    return {"status": "ok"}
