"""
Base repository class with common document operations.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument


def parse_object_id(id: Any) -> Optional[ObjectId]:
    """Convert a client-supplied id into an ObjectId, or None if it cannot be one."""
    if isinstance(id, ObjectId):
        return id
    try:
        return ObjectId(str(id))
    except (InvalidId, TypeError):
        return None


class BaseRepository:
    """
    Base repository with common CRUD operations over one MongoDB collection.

    Every call is a database round trip; documents are returned as plain dicts
    and converted to models by the concrete repositories.
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        """
        Initialize repository.

        Args:
            collection: The Motor collection backing this repository
        """
        self.collection = collection

    async def _insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a document and return it with its assigned ``_id``."""
        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    async def _find_by_id(self, id: Any) -> Optional[Dict[str, Any]]:
        """Get a document by ID."""
        object_id = parse_object_id(id)
        if object_id is None:
            return None
        return await self.collection.find_one({"_id": object_id})

    async def _find(
        self,
        query: Dict[str, Any],
        sort: Sequence[Tuple[str, int]] = (),
        skip: int = 0,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        """Find documents matching a query with optional sort and paging."""
        cursor = self.collection.find(query)
        if sort:
            cursor = cursor.sort(list(sort))
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return [document async for document in cursor]

    async def _count(self, query: Dict[str, Any]) -> int:
        """Count documents matching a query."""
        return await self.collection.count_documents(query)

    async def _update_by_id(self, id: Any, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply ``$set`` changes and return the updated document, or None if not found."""
        object_id = parse_object_id(id)
        if object_id is None:
            return None
        return await self.collection.find_one_and_update(
            {"_id": object_id},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )

    async def _delete_by_id(self, id: Any) -> bool:
        """Delete a document by ID. Returns True if deleted, False if not found."""
        object_id = parse_object_id(id)
        if object_id is None:
            return False
        result = await self.collection.delete_one({"_id": object_id})
        return result.deleted_count > 0
