from sqlmodel import SQLModel, Field
from typing import Optional, List


# -------------------
# DRUG MODEL
# -------------------
# Column names follow the existing `drugs` table.
class DrugRecord(SQLModel, table=True):
    __tablename__ = "drugs"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(unique=True, index=True, sa_column_kwargs={"name": "Name"})
    size: str = Field(default="", sa_column_kwargs={"name": "Size"})
    type: str = Field(default="", sa_column_kwargs={"name": "Type"})
    purpose: str = Field(sa_column_kwargs={"name": "Kegunaan"})
    dosage: str = Field(sa_column_kwargs={"name": "Dosis"})
    how_to_use: str = Field(default="", sa_column_kwargs={"name": "Cara Penggunaan"})
    side_effects: str = Field(default="", sa_column_kwargs={"name": "Efek Samping"})
    warnings: str = Field(default="", sa_column_kwargs={"name": "Peringatan Penting"})


def join_side_effects(side_effects) -> str:
    """Lists are stored comma-joined; anything else is stored as given ('' for None)."""
    if isinstance(side_effects, list):
        return ", ".join(side_effects)
    return side_effects or ""


def split_side_effects(stored: Optional[str]) -> List[str]:
    if not stored:
        return []
    return [effect.strip() for effect in stored.split(",")]
