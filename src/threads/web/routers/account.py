from fastapi import APIRouter, Response, status
from pydantic import BaseModel, Field

from threads.core.modules.session.models import SessionView
from threads.core.modules.user.models import UserView
from threads.web.cookies import clear_session_cookies
from threads.web.deps import ApiSessionDep, AppDep
from threads.web.openapi import ErrorResponse

router = APIRouter(tags=["account"])


class MeResponse(BaseModel):
    """Current user and the session used for the request."""

    user: UserView = Field(..., description="Signed-in user")
    session: SessionView = Field(..., description="Current session")


@router.get(
    "/me",
    summary="Get current user",
    description="Get the signed-in user and the current session.",
    operation_id="getCurrentUser",
    responses={
        200: {"description": "Current user"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_me(current: ApiSessionDep) -> MeResponse:
    return MeResponse(
        user=UserView.from_domain(current.user),
        session=SessionView.from_domain(current.session, current_id=str(current.session.id)),
    )


@router.get(
    "/sessions",
    summary="List sessions",
    description="List the signed-in user's sessions, most recently active first.",
    operation_id="listSessions",
    responses={
        200: {"description": "Sessions of the current user"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def list_sessions(app: AppDep, current: ApiSessionDep) -> list[SessionView]:
    return await app.get_user_sessions(current)


@router.delete(
    "/sessions",
    summary="Terminate all sessions",
    description="Log the signed-in user out of every session, including this one.",
    operation_id="terminateAllSessions",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        204: {"description": "All sessions terminated"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def terminate_all_sessions(app: AppDep, current: ApiSessionDep, response: Response) -> None:
    await app.terminate_all_sessions(current)
    clear_session_cookies(response)
