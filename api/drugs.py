import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from api.dependencies import get_catalog
from config import messages
from schemas import DrugCreate, DrugDetails, DrugUpdate
from services.catalog import CatalogService
from services.errors import StorageFailure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/drugs", tags=["drugs"])


def serialize(records) -> list:
    return [DrugDetails.from_record(record).model_dump(by_alias=True) for record in records]


@router.get("")
def list_drugs(catalog: CatalogService = Depends(get_catalog)):
    """List every drug, ordered by name."""
    try:
        drugs = serialize(catalog.list_drugs())
    except SQLAlchemyError as e:
        logger.exception("Error fetching drugs")
        raise StorageFailure(messages.LIST_FAILED, error=str(e))
    return {"success": True, "data": drugs, "count": len(drugs)}


@router.get("/search")
def search_drugs(q: Optional[str] = Query(None), catalog: CatalogService = Depends(get_catalog)):
    """Case-insensitive search across name, type and purpose."""
    try:
        drugs = serialize(catalog.search(q))
    except SQLAlchemyError as e:
        logger.exception("Error searching drugs")
        raise StorageFailure(messages.SEARCH_FAILED, error=str(e))
    return {"success": True, "data": drugs, "count": len(drugs), "query": q}


@router.get("/by-name/{name:path}")
def get_drug(name: str, catalog: CatalogService = Depends(get_catalog)):
    """Exact (case-insensitive) name match, falling back to the first partial match."""
    try:
        drug = catalog.get_by_name(name)
    except SQLAlchemyError as e:
        logger.exception("Error fetching drug by name")
        raise StorageFailure(messages.DETAIL_FAILED, error=str(e))
    return {"success": True, "data": DrugDetails.from_record(drug).model_dump(by_alias=True)}


@router.post("")
def add_drug(body: DrugCreate, catalog: CatalogService = Depends(get_catalog)):
    try:
        name = catalog.create(body.model_dump(exclude_unset=True))
    except SQLAlchemyError as e:
        logger.exception("Error adding drug")
        raise StorageFailure(messages.CREATE_FAILED, error=str(e))
    return JSONResponse(
        status_code=201,
        content={"success": True, "message": messages.DRUG_CREATED, "data": {"name": name}},
    )


@router.put("/by-name/{name:path}")
def update_drug(name: str, body: DrugUpdate, catalog: CatalogService = Depends(get_catalog)):
    """
    Update a drug found by its exact name. Fields left out of the body keep their
    stored values; `newName` renames the drug.
    """
    try:
        catalog.update_by_name(name, body.model_dump(exclude_unset=True))
    except SQLAlchemyError as e:
        logger.exception("Error updating drug")
        raise StorageFailure(messages.UPDATE_FAILED, error=str(e))
    return {"success": True, "message": messages.DRUG_UPDATED}


@router.delete("/by-name/{name:path}")
def delete_drug(name: str, catalog: CatalogService = Depends(get_catalog)):
    try:
        catalog.delete_by_name(name)
    except SQLAlchemyError as e:
        logger.exception("Error deleting drug")
        raise StorageFailure(messages.DELETE_FAILED, error=str(e))
    return {"success": True, "message": messages.DRUG_DELETED}
