from fastapi import APIRouter, status

from app.dependencies import IdentityServiceDep
from app.models import UserLogin, UserRegister
from app.schemas import AuthResponse, UserData

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
async def register(user_data: UserRegister, identity_service: IdentityServiceDep):
    """Create an account and return a token for it"""
    user, token = await identity_service.register(
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
    )
    return AuthResponse(token=token, data=UserData(user=user))


@router.post("/login", response_model=AuthResponse)
async def login(credentials: UserLogin, identity_service: IdentityServiceDep):
    user, token = await identity_service.login(
        email=credentials.email, password=credentials.password
    )
    return AuthResponse(token=token, data=UserData(user=user))
