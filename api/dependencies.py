from fastapi import Depends
from sqlmodel import Session

from config import settings
from db.database import get_session
from services.catalog import CatalogService
from services.classifier import Classifier, HttpClassifier
from services.uploads import UploadStore


def get_catalog(session: Session = Depends(get_session)) -> CatalogService:
    return CatalogService(session)


def get_classifier() -> Classifier:
    return HttpClassifier(
        url=settings.ML_API_URL,
        username=settings.ML_API_USERNAME,
        password=settings.ML_API_PASSWORD,
        timeout=settings.ML_API_TIMEOUT,
    )


def get_upload_store() -> UploadStore:
    return UploadStore(settings.UPLOAD_DIR, settings.UPLOAD_URL_PREFIX)
