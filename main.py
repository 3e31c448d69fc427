# local imports
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

# external imports
from api import classify, drugs, health
from api.handlers import register_error_handlers
from config import settings
from db.database import check_connection, init_db

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("medivize")

# Uploaded images are served statically from this directory
Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    check_connection()
    logger.info("✓ MEDIVIZE Backend ready, uploads served from %s", settings.UPLOAD_URL_PREFIX)
    yield


app = FastAPI(
    title="MEDIVIZE API",
    description="""
    **MEDIVIZE** identifies medicines from a photo of their packaging and shows
    reference information for them.
    
    ## Features
    
    * **Image Classification** - Forwards the photo to the drug classifier (ML API)
    * **Drug Details** - Dosage, side effects and warnings from the drug catalog
    * **Search** - Case-insensitive search by name, type or purpose
    * **Catalog Management** - Add, update and delete drug records
    
    ## How It Works
    
    1. Upload a photo of the drug package to `/api/drugs/classify`
    2. Receive the predicted drug name and confidence
    3. Read the matching catalog entry returned alongside it
    """,
    version="1.0.0",
    lifespan=lifespan,
    contact={
        "name": "MEDIVIZE Team",
    }
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(classify.router)
app.include_router(drugs.router)

app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")
