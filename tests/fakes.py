"""In-memory stand-ins for the Mongo client and the Telegram gateway."""

import copy
from dataclasses import dataclass, field
from typing import Any

from pymongo.errors import DuplicateKeyError

from threads.errors import DeliveryError


@dataclass
class FakeInsertOneResult:
    inserted_id: Any


@dataclass
class FakeUpdateResult:
    matched_count: int
    modified_count: int
    upserted_id: Any = None


@dataclass
class FakeDeleteResult:
    deleted_count: int


def _matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    for key, condition in query.items():
        value = doc.get(key)
        if isinstance(condition, dict) and condition and all(op.startswith("$") for op in condition):
            for op, arg in condition.items():
                if op == "$gt" and (value is None or not value > arg):
                    return False
                if op == "$lt" and (value is None or not value < arg):
                    return False
        elif value != condition:
            return False
    return True


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._docs = sorted(self._docs, key=lambda doc: doc[key], reverse=direction < 0)
        return self

    def __aiter__(self) -> "FakeCursor":
        self._iter = iter(self._docs)
        return self

    async def __anext__(self) -> dict[str, Any]:
        try:
            return next(self._iter)
        except StopIteration:
            raise StopAsyncIteration from None


class FakeCollection:
    """Implements the handful of collection methods the services use."""

    def __init__(self, database: "FakeDatabase") -> None:
        self._database = database
        self.docs: list[dict[str, Any]] = []

    def _count(self) -> None:
        self._database.calls += 1

    async def create_index(self, keys: Any, **kwargs: Any) -> str:
        return "_".join(f"{name}_{direction}" for name, direction in keys)

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        self._count()
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query: dict[str, Any]) -> FakeCursor:
        self._count()
        return FakeCursor([copy.deepcopy(doc) for doc in self.docs if _matches(doc, query)])

    async def insert_one(self, doc: dict[str, Any]) -> FakeInsertOneResult:
        self._count()
        if any(existing["_id"] == doc["_id"] for existing in self.docs):
            raise DuplicateKeyError("duplicate _id")
        self.docs.append(copy.deepcopy(doc))
        return FakeInsertOneResult(inserted_id=doc["_id"])

    async def update_one(self, query: dict[str, Any], update: dict[str, Any], upsert: bool = False) -> FakeUpdateResult:
        self._count()
        for doc in self.docs:
            if _matches(doc, query):
                doc.update(copy.deepcopy(update.get("$set", {})))
                return FakeUpdateResult(matched_count=1, modified_count=1)

        if not upsert:
            return FakeUpdateResult(matched_count=0, modified_count=0)

        new_doc = {key: value for key, value in query.items() if not isinstance(value, dict)}
        new_doc.update(copy.deepcopy(update.get("$setOnInsert", {})))
        new_doc.update(copy.deepcopy(update.get("$set", {})))
        self.docs.append(new_doc)
        return FakeUpdateResult(matched_count=0, modified_count=0, upserted_id=new_doc["_id"])

    async def delete_one(self, query: dict[str, Any]) -> FakeDeleteResult:
        self._count()
        for index, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[index]
                return FakeDeleteResult(deleted_count=1)
        return FakeDeleteResult(deleted_count=0)

    async def delete_many(self, query: dict[str, Any]) -> FakeDeleteResult:
        self._count()
        kept = [doc for doc in self.docs if not _matches(doc, query)]
        deleted = len(self.docs) - len(kept)
        self.docs = kept
        return FakeDeleteResult(deleted_count=deleted)

    async def find_one_and_delete(self, query: dict[str, Any]) -> dict[str, Any] | None:
        self._count()
        for index, doc in enumerate(self.docs):
            if _matches(doc, query):
                return self.docs.pop(index)
        return None


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}
        self.calls = 0  # number of store operations performed

    def get_collection(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(self)
        return self.collections[name]

    @property
    def is_empty(self) -> bool:
        return all(not collection.docs for collection in self.collections.values())


class FakeMongoClient:
    def __init__(self) -> None:
        self.databases: dict[str, FakeDatabase] = {}
        self.closed = False

    def get_database(self, name: str) -> FakeDatabase:
        if name not in self.databases:
            self.databases[name] = FakeDatabase()
        return self.databases[name]

    async def aclose(self) -> None:
        self.closed = True


@dataclass
class SentMessage:
    chat_id: int
    text: str
    reply_markup: Any = None


@dataclass
class FakeGateway:
    """Records messages instead of calling the Bot API."""

    sent: list[SentMessage] = field(default_factory=list)
    fail: bool = False

    async def send_message(self, chat_id: int, text: str, reply_markup: Any = None) -> SentMessage:
        if self.fail:
            raise DeliveryError(f"Failed to send message to chat {chat_id}")
        message = SentMessage(chat_id=chat_id, text=text, reply_markup=reply_markup)
        self.sent.append(message)
        return message

    async def close(self) -> None:
        pass


def telegram_update(text: str, chat_id: int = 291, chat_type: str = "private", **chat: Any) -> dict[str, Any]:
    """Build a minimal Bot API update payload."""
    return {
        "update_id": 1,
        "message": {
            "message_id": 1,
            "date": 1700000000,
            "text": text,
            "chat": {"id": chat_id, "type": chat_type, "first_name": "Ada", "last_name": "Lovelace", **chat},
        },
    }
