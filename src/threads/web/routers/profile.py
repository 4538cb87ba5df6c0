from fastapi import APIRouter, status
from fastapi.responses import RedirectResponse

from threads.web.deps import SessionDep

router = APIRouter(tags=["profile"])


@router.get(
    "/profile",
    summary="Open own profile",
    description="Redirect to the signed-in user's profile page, or to the login page.",
    operation_id="openProfile",
    status_code=status.HTTP_303_SEE_OTHER,
    responses={303: {"description": "Redirect to /user/{id} or /login"}},
)
async def open_profile(current: SessionDep) -> RedirectResponse:
    return RedirectResponse(f"/user/{current.user.id}", status_code=status.HTTP_303_SEE_OTHER)
