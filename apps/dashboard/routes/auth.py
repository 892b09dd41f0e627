from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from starlette.concurrency import run_in_threadpool

from ..dependencies import get_auth
from ..models.state import Redirect
from ..services.auth import Auth
from ..services.auth_actions import authenticate

router = APIRouter(tags=["auth"])


@router.post("/login")
async def login(request: Request, auth: Auth = Depends(get_auth)):
    form = await request.form()
    result = await run_in_threadpool(authenticate, None, form, auth=auth)
    if isinstance(result, Redirect):
        return RedirectResponse(result.location, status_code=303)
    return {"message": result}
