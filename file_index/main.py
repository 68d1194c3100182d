"""
File Index API.

Run with:
    uvicorn file_index.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from file_index.config import get_settings
from file_index.routers import files, markdown, site
from file_index.services.listing import listing_service

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Scan once before serving so handlers never scan on the event loop
    listings = listing_service.listings
    logger.info(f"Serving {len(listings)} listings from {listing_service.root}")
    yield


app = FastAPI(title="File Index", lifespan=lifespan)

app.include_router(files.router)
app.include_router(markdown.router)
app.include_router(site.router)
