"""Authentication routes (register, login)."""

from fastapi import APIRouter, Depends, status

from api.dependencies import get_auth_service
from api.envelope import envelope
from api.models import Envelope, LoginRequest, RegisterRequest, UserResponse
from services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])

# Plain def handlers run in the threadpool, keeping bcrypt and pymongo off the event loop


@router.post("/register", response_model=Envelope[UserResponse], status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    """Register a new local account.

    Raises:
        409 Conflict if the username or email is already registered
    """
    user = auth.register(request.username, str(request.email), request.password)
    return envelope(UserResponse.from_domain(user), "User registered", status.HTTP_201_CREATED)


@router.post("/login", response_model=Envelope[UserResponse])
def login(request: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """Check email and password.

    Raises:
        401 if credentials are invalid
    """
    user = auth.login(str(request.email), request.password)
    return envelope(UserResponse.from_domain(user), "Login successful")
