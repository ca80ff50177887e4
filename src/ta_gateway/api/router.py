"""Auth API router: login, current staff user.

All endpoints return ApiResponse. request_id is read from request.state
(injected by RequestLogMiddleware).
"""

from fastapi import APIRouter, Depends, Request, status

from src.ta_common.response import ApiResponse, success_response
from src.ta_gateway.auth.credentials import StaffCredentials, token_expiry
from src.ta_gateway.auth.dependencies import get_auth_service, get_credentials
from src.ta_gateway.middleware.request_log import get_request_id
from src.ta_gateway.user.schemas import LoginRequest, LoginResponse
from src.ta_gateway.user.service import StaffAuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="Staff login",
)
async def login(
    request: Request,
    body: LoginRequest,
    service: StaffAuthService = Depends(get_auth_service),
) -> ApiResponse:
    token, user = await service.login(body.username, body.password)
    expiry = token_expiry(token)

    data = LoginResponse(
        access_token=token,
        expires_at=expiry.isoformat() if expiry else None,
        user=user,
    )
    resp = success_response(data.model_dump(), message="Login successful")
    resp.request_id = get_request_id(request)
    return resp


@router.get(
    "/me",
    response_model=ApiResponse,
    summary="Current staff user",
)
async def me(
    request: Request,
    credentials: StaffCredentials = Depends(get_credentials),
    service: StaffAuthService = Depends(get_auth_service),
) -> ApiResponse:
    user = await service.current_user(credentials)
    resp = success_response(user.model_dump())
    resp.request_id = get_request_id(request)
    return resp
