from datetime import datetime
from typing import Any, Awaitable, Dict, Generic, Optional, Type, TypeVar
from bson import ObjectId
from bson.errors import InvalidId
from beanie import Document
from pydantic import BaseModel
from pymongo.errors import DuplicateKeyError, PyMongoError

from teamdrive.configs.settings import settings
from teamdrive.core.exceptions import ConflictError, InvalidIdError, NotFoundError, PersistenceError
from teamdrive.utils.concurrency import with_deadline
from teamdrive.utils.logging import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Document)
CreateSchemaT = TypeVar("CreateSchemaT", bound=BaseModel)


def to_object_id(id: str, entity: str = "document") -> ObjectId:
    """Parse a hex id, raising InvalidIdError for malformed input"""
    try:
        return ObjectId(id)
    except (InvalidId, TypeError):
        raise InvalidIdError(f"Invalid {entity} id: {id}")


class BaseCRUD(Generic[ModelT, CreateSchemaT]):
    """Team-scoped access to one collection. Every call runs under a deadline."""

    entity = "document"

    def __init__(self, model: Type[ModelT]):
        self.model = model

    async def _run(self, awaitable: Awaitable[Any], operation: str, timeout: Optional[float] = None) -> Any:
        try:
            return await with_deadline(
                awaitable,
                timeout if timeout is not None else settings.TIMEOUT_METADATA,
                f"{self.model.__name__}.{operation}",
            )
        except DuplicateKeyError as e:
            logger.warning(f"Duplicate key on {self.model.__name__}.{operation}: {e}")
            raise ConflictError(f"{self.entity.capitalize()} already exists")
        except PyMongoError as e:
            logger.error(f"Database error on {self.model.__name__}.{operation}: {str(e)}", exc_info=True)
            raise PersistenceError()

    def _not_found(self) -> NotFoundError:
        return NotFoundError(f"{self.entity.capitalize()} not found")

    async def get_by_id(self, team_id: str, id: str, timeout: Optional[float] = None) -> ModelT:
        query = {"_id": to_object_id(id, self.entity), "team_id": team_id}
        document = await self._run(self.model.find_one(query), "get_by_id", timeout)
        if not document:
            raise self._not_found()
        return document

    async def create(self, obj_in: CreateSchemaT) -> ModelT:
        data = obj_in.model_dump()
        db_obj = self.model(**data)
        await self._run(db_obj.insert(), "create")
        return db_obj

    async def update(self, team_id: str, id: str, update_data: Dict[str, Any], timeout: Optional[float] = None) -> None:
        """$set fields on one team-scoped document; NotFoundError when nothing matched"""
        if "last_modified_time" in self.model.model_fields:
            update_data = {**update_data, "last_modified_time": datetime.utcnow()}
        query = {"_id": to_object_id(id, self.entity), "team_id": team_id}
        result = await self._run(
            self.model.find_one(query).update({"$set": update_data}),
            "update",
            timeout,
        )
        if result is None or result.matched_count == 0:
            raise self._not_found()

    async def delete(self, team_id: str, id: str, timeout: Optional[float] = None) -> None:
        query = {"_id": to_object_id(id, self.entity), "team_id": team_id}
        result = await self._run(self.model.find_one(query).delete(), "delete", timeout)
        if result is None or result.deleted_count == 0:
            raise self._not_found()
