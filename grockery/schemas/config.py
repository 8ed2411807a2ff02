from pydantic import BaseModel, ConfigDict, Field
from typing import List
from grockery.generators.schema_gen.types import EntitySpec

class DatabaseConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    filepath: str = Field("db.json", examples=["./db.json"])
    reset_on_start: bool = Field(False, alias="resetOnStart")


class MockConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    db: DatabaseConfig = DatabaseConfig()
    entities: List[EntitySpec]
