"""ProductHub Backend — Liveness check: the service is up when the store connects."""

from app.database import MongoStore
from app.schemas.responses import StatusResponse

RUNNING_MESSAGE = "ProductHub Server is Running"


async def check_liveness(store: MongoStore) -> StatusResponse:
    await store.connect()
    return StatusResponse(status="ok", message=RUNNING_MESSAGE)
