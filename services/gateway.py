import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

from fastapi.concurrency import run_in_threadpool

from config import messages, settings
from db.models import DrugRecord
from schemas import ClassificationResult, DrugDetails
from services.classifier import Classifier
from services.errors import InvalidArgument, UnsupportedMediaType
from services.uploads import UploadStore

logger = logging.getLogger(__name__)


def validate_image(image_bytes: Optional[bytes], filename: Optional[str], content_type: Optional[str],
                   max_bytes: int = settings.MAX_UPLOAD_BYTES):
    """Reject missing, mistyped or oversized uploads before anything touches disk or network."""
    if image_bytes is None or not filename:
        raise InvalidArgument(messages.IMAGE_MISSING)

    extension = Path(filename).suffix.lower().lstrip(".")
    mime = (content_type or "").lower()
    if extension not in settings.ALLOWED_IMAGE_TYPES or not any(t in mime for t in settings.ALLOWED_IMAGE_TYPES):
        raise UnsupportedMediaType(messages.IMAGE_BAD_TYPE)

    if len(image_bytes) > max_bytes:
        raise InvalidArgument(messages.IMAGE_TOO_LARGE)


class ClassificationGateway:
    """
    Stores an uploaded drug photo, asks the classifier what it is and enriches the
    answer with catalog details.

    `lookup` takes the predicted label and returns the matching record or None.
    """

    def __init__(self, classifier: Classifier, store: UploadStore,
                 lookup: Callable[[str], Optional[DrugRecord]],
                 max_bytes: int = settings.MAX_UPLOAD_BYTES):
        self.classifier = classifier
        self.store = store
        self.lookup = lookup
        self.max_bytes = max_bytes

    async def classify(self, image_bytes: Optional[bytes], filename: Optional[str],
                       content_type: Optional[str] = None) -> ClassificationResult:
        validate_image(image_bytes, filename, content_type, self.max_bytes)

        # The upload is kept on success and removed if anything below raises
        async with self.store.transient(image_bytes, filename) as upload:
            prediction = await self.classifier.predict(image_bytes, filename, content_type)

            result = ClassificationResult(
                drug_name=prediction.label or messages.UNRECOGNIZED_DRUG,
                confidence=prediction.confidence,
                image_url=upload.url,
                processed_at=datetime.now(timezone.utc),
            )
            if result.drug_name != messages.UNRECOGNIZED_DRUG:
                result.drug_details = await self._find_details(result.drug_name)
            return result

    async def _find_details(self, drug_name: str) -> Optional[DrugDetails]:
        try:
            # Catalog queries are blocking
            record = await run_in_threadpool(self.lookup, drug_name)
        except Exception:
            logger.exception("Error searching drug in database after ML classification")
            return None

        if record is None:
            logger.info("No details found in DB for drug: %s", drug_name)
            return None
        return DrugDetails.from_record(record)
