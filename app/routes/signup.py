# app/routes/signup.py
from fastapi import APIRouter, Depends, Response, status

from app.core.deps import get_signup_service
from app.models.signup import SignupRequest
from app.services.signup_service import SignupService

router = APIRouter(prefix="/signup", tags=["signup"])


@router.post("/", status_code=status.HTTP_204_NO_CONTENT)
async def signup(payload: SignupRequest, service: SignupService = Depends(get_signup_service)):
    # honeypot hits come back as None and get the same answer as real signups
    await service.signup(payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/confirm/{signup_id}", status_code=status.HTTP_204_NO_CONTENT)
async def confirm(signup_id: str, service: SignupService = Depends(get_signup_service)):
    await service.confirm(signup_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
