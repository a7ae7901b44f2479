"""Login Route — POST /Login credential check.

Invariants:
    - Unknown username and wrong password both answer 401 with the same body
    - A failed check never falls through to a success response
"""

from fastapi import APIRouter, Depends

from ministry_api.infrastructure.query_executor import QueryExecutor, get_executor
from ministry_api.schemas.auth import LoginRequest
from ministry_api.schemas.records import MessageResponse
from ministry_api.services.authenticate import authenticate

router = APIRouter(tags=["auth"])


@router.post("/Login", response_model=MessageResponse)
async def login(
    body: LoginRequest, executor: QueryExecutor = Depends(get_executor),
):
    """Validate credentials against the stored password hash."""
    await authenticate(executor, body.username, body.password)
    return {"message": "Authentication successful"}
