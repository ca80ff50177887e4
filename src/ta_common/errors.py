"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth
  2xxx: Validation
  3xxx: Workflow
  4xxx: Order
  5xxx: Client
  9xxx: Backend/System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth ---

class NotAuthenticatedError(AppError):
    def __init__(self, detail: str = "User not authenticated") -> None:
        super().__init__(1001, detail, 401)


class InvalidCredentialsError(AppError):
    def __init__(self, detail: str = "Invalid username or password") -> None:
        super().__init__(1002, detail, 401)


# --- 2xxx: Validation ---

class ValidationFailedError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2001, f"Validation failed: {detail}", 422)


class FieldNotEditableError(AppError):
    def __init__(self, field: str) -> None:
        super().__init__(2002, f"Field is not editable: {field}", 422)


class InvalidStatusError(AppError):
    def __init__(self, status: str) -> None:
        super().__init__(2003, f"Unknown order status: {status}", 422)


# --- 3xxx: Workflow ---

class IllegalTransitionError(AppError):
    def __init__(self, current: str, target: str) -> None:
        super().__init__(
            3001,
            f"Transition from {current} to {target} is not allowed",
            422,
        )


class StatusUpdateFailedError(AppError):
    def __init__(self, order_id: str, detail: str | None = None) -> None:
        message = f"Status update failed for order {order_id}"
        super().__init__(3002, f"{message}: {detail}" if detail else message, 502)


class ClientArchiveFailedError(AppError):
    """Secondary archive call failed after a successful status transition."""

    def __init__(self, client_id: str, detail: str | None = None) -> None:
        message = f"Archiving client {client_id} failed"
        super().__init__(3003, f"{message}: {detail}" if detail else message, 502)


# --- 4xxx: Order ---

class OrderNotFoundError(AppError):
    def __init__(self, order_id: str) -> None:
        super().__init__(4001, f"Order not found: {order_id}", 404)


# --- 5xxx: Client ---

class ClientNotFoundError(AppError):
    def __init__(self, identifier: str) -> None:
        super().__init__(5001, f"Client not found: {identifier}", 404)


# --- 9xxx: Backend/System ---

class BackendUnavailableError(AppError):
    """Transport failure: connection error, timeout, unreadable response.

    ``detail`` is a fixed description, never transport or body text.
    """

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        message = "Backend unavailable"
        super().__init__(9001, f"{message}: {detail}" if detail else message, 502)


class BackendRejectedError(AppError):
    """Backend answered with a non-2xx status.

    ``detail`` is the backend's structured message, or None when it sent
    none; raw response bodies only go to the log.
    """

    def __init__(self, status_code: int, detail: str | None = None) -> None:
        self.status_code = status_code
        self.detail = detail
        message = f"Backend rejected request ({status_code})"
        super().__init__(9002, f"{message}: {detail}" if detail else message, 502)
