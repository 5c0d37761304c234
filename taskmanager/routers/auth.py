from fastapi import APIRouter, Depends

from ..schemas.user import AuthRequest, AuthResponse
from ..services.auth_service import AuthService
from .deps import get_auth_service


def register(credentials: AuthRequest, auth_service: AuthService = Depends(get_auth_service)) -> AuthResponse:
    """Create an account and return a token for it"""
    token = auth_service.register(credentials.username, credentials.password)
    return AuthResponse(token=token)


def login(credentials: AuthRequest, auth_service: AuthService = Depends(get_auth_service)) -> AuthResponse:
    """Exchange username and password for a token"""
    token = auth_service.login(credentials.username, credentials.password)
    return AuthResponse(token=token)


# (method, path, handler, response model)
ROUTES = [
    ("POST", "/register", register, AuthResponse),
    ("POST", "/login", login, AuthResponse),
]


def build_router() -> APIRouter:
    router = APIRouter(prefix="/auth", tags=["auth"])
    for method, path, endpoint, response_model in ROUTES:
        router.add_api_route(path, endpoint, methods=[method], response_model=response_model)
    return router


router = build_router()
