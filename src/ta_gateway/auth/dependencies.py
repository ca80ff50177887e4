"""FastAPI dependencies: staff credentials and per-request services.

Usage in any protected router:
    from src.ta_gateway.auth.dependencies import get_controller

    @router.get("/protected")
    async def protected(controller: WorkflowController = Depends(get_controller)):
        ...
"""

from fastapi import Depends, Header, Request
from fastapi.security import OAuth2PasswordBearer

from src.ta_client.application.service import ClientService
from src.ta_gateway.auth.credentials import StaffCredentials
from src.ta_gateway.user.service import StaffAuthService
from src.ta_order.application.service import WorkflowController
from src.ta_order.application.state import OrderStore
from src.ta_order.infrastructure.backend_client import BackendClient

# auto_error=False: a missing token surfaces as NotAuthenticatedError (1001)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


async def get_credentials(
    token: str | None = Depends(oauth2_scheme),
    x_wp_nonce: str | None = Header(None),
) -> StaffCredentials:
    """Bearer token plus optional nonce; raises 401 when missing or expired."""
    credentials = StaffCredentials(token, x_wp_nonce)
    credentials.auth_headers()
    return credentials


def get_order_store(request: Request) -> OrderStore:
    return request.app.state.order_store


def get_auth_service(request: Request) -> StaffAuthService:
    return StaffAuthService(request.app.state.auth_http)


def get_controller(
    request: Request,
    credentials: StaffCredentials = Depends(get_credentials),
    store: OrderStore = Depends(get_order_store),
) -> WorkflowController:
    backend = BackendClient(request.app.state.backend_http, credentials)
    return WorkflowController(store, backend)


def get_client_service(
    controller: WorkflowController = Depends(get_controller),
) -> ClientService:
    return ClientService(controller)
