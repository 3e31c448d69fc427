from datetime import datetime
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from db.models import DrugRecord, split_side_effects


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DrugDetails(CamelModel):
    """Public shape of a drug record."""
    name: str = ""
    size: str = ""
    type: str = ""
    purpose: str = ""
    dosage: str = ""
    how_to_use: str = ""
    side_effects: List[str] = []
    warnings: str = ""

    @classmethod
    def from_record(cls, record: Optional[DrugRecord]) -> Optional["DrugDetails"]:
        if record is None:
            return None
        return cls(
            name=record.name or "",
            size=record.size or "",
            type=record.type or "",
            purpose=record.purpose or "",
            dosage=record.dosage or "",
            how_to_use=record.how_to_use or "",
            side_effects=split_side_effects(record.side_effects),
            warnings=record.warnings or "",
        )


# Everything is optional here so missing required fields get the catalog's own
# 400 message instead of a generic validation error.
class DrugFields(CamelModel):
    size: Optional[str] = None
    type: Optional[str] = None
    purpose: Optional[str] = None
    dosage: Optional[str] = None
    how_to_use: Optional[str] = None
    side_effects: Union[List[str], str, None] = None
    warnings: Optional[str] = None


class DrugCreate(DrugFields):
    name: Optional[str] = None


class DrugUpdate(DrugFields):
    new_name: Optional[str] = None


class ClassificationResult(CamelModel):
    drug_name: str
    confidence: float = 0.0
    image_url: str
    processed_at: datetime
    drug_details: Optional[DrugDetails] = None
