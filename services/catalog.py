import logging
from typing import List, Optional

from sqlalchemy import case, func, or_
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from config import messages
from db.models import DrugRecord, join_side_effects
from services.errors import Conflict, InvalidArgument, NotFound

logger = logging.getLogger(__name__)

# Fields copied verbatim from a request body onto a record
PLAIN_FIELDS = ("size", "type", "purpose", "dosage", "how_to_use", "warnings")


class CatalogService:
    """
    CRUD and search over the drugs table.

    Every method works on the injected session. Field dicts use snake_case keys and
    only contain the keys the caller actually sent, so "omitted" and "sent as null"
    stay distinguishable for updates.
    """

    def __init__(self, session: Session):
        self.session = session

    def list_drugs(self) -> List[DrugRecord]:
        return list(self.session.exec(select(DrugRecord).order_by(DrugRecord.name)).all())

    def find_by_name(self, name: str) -> Optional[DrugRecord]:
        """Case-insensitive exact match first, otherwise the first substring match."""
        lowered = func.lower(DrugRecord.name)
        needle = name.lower()
        exact = lowered == needle
        statement = (
            select(DrugRecord)
            .where(or_(exact, lowered.contains(needle, autoescape=True)))
            .order_by(case((exact, 0), else_=1), DrugRecord.name)
            .limit(1)
        )
        return self.session.exec(statement).first()

    def get_by_name(self, name: str) -> DrugRecord:
        record = self.find_by_name(name)
        if record is None:
            raise NotFound(messages.DRUG_NOT_FOUND)
        return record

    def search(self, query: Optional[str]) -> List[DrugRecord]:
        term = (query or "").strip()
        if not term:
            raise InvalidArgument(messages.SEARCH_QUERY_EMPTY)

        needle = term.lower()
        statement = (
            select(DrugRecord)
            .where(
                or_(
                    func.lower(DrugRecord.name).contains(needle, autoescape=True),
                    func.lower(DrugRecord.type).contains(needle, autoescape=True),
                    func.lower(DrugRecord.purpose).contains(needle, autoescape=True),
                )
            )
            .order_by(DrugRecord.name)
        )
        return list(self.session.exec(statement).all())

    def create(self, fields: dict) -> str:
        name = fields.get("name")
        if not name or not fields.get("purpose") or not fields.get("dosage"):
            raise InvalidArgument(messages.DRUG_REQUIRED_FIELDS)

        if self._get_exact(name) is not None:
            raise Conflict(messages.DRUG_ALREADY_EXISTS)

        record = DrugRecord(
            name=name,
            size=fields.get("size") or "",
            type=fields.get("type") or "",
            purpose=fields["purpose"],
            dosage=fields["dosage"],
            how_to_use=fields.get("how_to_use") or "",
            side_effects=join_side_effects(fields.get("side_effects")),
            warnings=fields.get("warnings") or "",
        )
        self.session.add(record)
        self._commit(messages.DRUG_ALREADY_EXISTS)
        logger.info("Drug added: %s", name)
        return name

    def update_by_name(self, current_name: str, fields: dict) -> None:
        record = self._get_exact(current_name)
        if record is None:
            raise NotFound(messages.DRUG_NOT_FOUND_FOR_UPDATE)

        new_name = fields.get("new_name")
        if new_name and new_name != current_name and self._get_exact(new_name) is not None:
            raise Conflict(messages.DRUG_NEW_NAME_TAKEN)

        record.name = new_name or current_name
        for field in PLAIN_FIELDS:
            if field in fields:
                setattr(record, field, fields[field] or "")
        if "side_effects" in fields:
            record.side_effects = join_side_effects(fields["side_effects"])

        self.session.add(record)
        self._commit(messages.DRUG_NEW_NAME_TAKEN)
        logger.info("Drug updated: %s -> %s", current_name, record.name)

    def delete_by_name(self, name: str) -> None:
        record = self._get_exact(name)
        if record is None:
            raise NotFound(messages.DRUG_NOT_FOUND_FOR_DELETE)
        self.session.delete(record)
        self.session.commit()
        logger.info("Drug deleted: %s", name)

    def _get_exact(self, name: str) -> Optional[DrugRecord]:
        return self.session.exec(select(DrugRecord).where(DrugRecord.name == name)).first()

    def _commit(self, conflict_message: str) -> None:
        # The unique index on Name catches writers that raced past the existence check
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise Conflict(conflict_message, error=str(e.orig)) from e
