"""
Auth Router

Registration, login and logout against the client's local user registry.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from vegefood.auth import AuthService, LoginData, RegisterData, validate_login, validate_registration
from vegefood.errors import MESSAGE_LOGGED_OUT, OperationResult
from .deps import get_auth_service
from .models import LoginRequest, RegisterRequest

router = APIRouter(tags=["auth"])


def result_response(result: OperationResult) -> JSONResponse:
    """200 for success, 400 for a business-rule failure; body is the result."""
    return JSONResponse(status_code=200 if result.success else 400, content=result.to_dict())


@router.post("/auth/register")
async def register(request: RegisterRequest, auth: AuthService = Depends(get_auth_service)):
    error = validate_registration(
        request.username, request.email, request.password, request.confirm_password
    )
    if error:
        return result_response(OperationResult.fail(error))

    return result_response(auth.register(RegisterData(
        username=request.username,
        email=request.email,
        password=request.password,
    )))


@router.post("/auth/login")
async def login(request: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    error = validate_login(request.email, request.password)
    if error:
        return result_response(OperationResult.fail(error))

    result = auth.login(LoginData(email=request.email, password=request.password))
    if not result.success:
        return result_response(result)

    return {
        **result.to_dict(),
        "token": auth.token,
        "user": auth.current_user_value.to_dict(),
    }


@router.post("/auth/logout")
async def logout(auth: AuthService = Depends(get_auth_service)):
    auth.logout()
    return OperationResult.ok(MESSAGE_LOGGED_OUT).to_dict()


@router.get("/auth/me")
async def me(auth: AuthService = Depends(get_auth_service)):
    user = auth.current_user_value
    return {
        "authenticated": auth.is_authenticated,
        "user": user.to_dict() if user else None,
    }
