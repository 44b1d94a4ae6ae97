"""ProductHub Backend — User Service (the `users` collection, stored as sent)."""

import logging
from typing import Any, Dict, List

from app.database import MongoStore, store_errors
from app.models.documents import User
from app.schemas.responses import InsertResponse

logger = logging.getLogger(__name__)


class UserService:

    async def create_user(self, store: MongoStore, body: Dict[str, Any]) -> InsertResponse:
        collections = await store.connect()
        with store_errors("insert_one", "users"):
            result = await collections.users.insert_one(dict(body))
        logger.info("User created: %s", result.inserted_id)
        return InsertResponse(success=True, insertedId=str(result.inserted_id))

    async def list_users(self, store: MongoStore) -> List[Dict[str, Any]]:
        collections = await store.connect()
        with store_errors("find", "users"):
            docs = await collections.users.find().to_list()
            return [User.model_validate(doc).to_response() for doc in docs]


user_service = UserService()
