# internal imports
import logging
from typing import Union
from fastapi import APIRouter, Depends, File, UploadFile
from starlette.datastructures import UploadFile as StarletteUploadFile

# external imports
from api.dependencies import get_catalog, get_classifier, get_upload_store
from config import messages, settings
from services.catalog import CatalogService
from services.classifier import Classifier
from services.errors import Internal, MediVizeError
from services.gateway import ClassificationGateway
from services.uploads import UploadStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/drugs", tags=["classify"])


@router.post("/classify")
async def classify_drug(
    image: Union[UploadFile, str, None] = File(None),
    classifier: Classifier = Depends(get_classifier),
    store: UploadStore = Depends(get_upload_store),
    catalog: CatalogService = Depends(get_catalog),
):
    """
    Identify a drug from a photo of its packaging.

    Args:
        image: JPEG, PNG or WEBP photo, at most 5MB (multipart field `image`)

    The photo is forwarded to the ML API; a recognised drug name is looked up in
    the catalog and its details are attached as `drugDetails` (null when the
    catalog has no match or the drug was not recognised).
    """
    # A plain text field named `image` counts as a missing upload
    if not isinstance(image, StarletteUploadFile):
        image = None

    image_bytes = filename = content_type = None
    if image is not None:
        # One byte past the limit is enough for the size check to reject it
        image_bytes = await image.read(settings.MAX_UPLOAD_BYTES + 1)
        filename = image.filename
        content_type = image.content_type

    gateway = ClassificationGateway(classifier, store, lookup=catalog.find_by_name)
    try:
        result = await gateway.classify(image_bytes, filename, content_type)
    except MediVizeError:
        raise
    except Exception as e:
        logger.exception("Error in image classification process")
        raise Internal(messages.CLASSIFY_FAILED, error=str(e))

    return {"success": True, "data": result.model_dump(mode="json", by_alias=True)}
