"""MongoDB document base model and connection helpers."""

from typing import Any, Self
from urllib.parse import urlparse
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pymongo.asynchronous.cursor import AsyncCursor


def database_name(url: str) -> str:
    """Database name from the path of a MongoDB URL, e.g. mongodb://localhost/threads."""
    name = urlparse(url).path.lstrip("/")
    if not name:
        raise ValueError(f"MongoDB URL has no database name: {url}")
    return name


def parse_uuid(value: str) -> UUID | None:
    """Parse an id taken from a cookie or URL. Returns None for malformed input."""
    try:
        return UUID(value)
    except ValueError:
        return None


class MongoModel(BaseModel):
    """Base for stored documents. `id` lives in the `_id` field in MongoDB."""

    id: UUID = Field(alias="_id", serialization_alias="id", default_factory=uuid4)

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_serialization_defaults_required=True,
    )

    def to_mongo(self) -> dict[str, Any]:
        data = self.model_dump(exclude={"id"})
        return {"_id": self.id, **data}

    @classmethod
    def from_mongo(cls, doc: dict[str, Any] | None) -> Self | None:
        if doc is None:
            return None
        return cls.model_validate(doc)

    @classmethod
    async def list_cursor(cls, cursor: AsyncCursor[dict[str, Any]]) -> list[Self]:
        """Iterate over an AsyncCursor and return a list of model instances."""
        return [cls.model_validate(item) async for item in cursor]
