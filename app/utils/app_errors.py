"""Application error types.

Error codes follow the canonical callable-function codes so that an AppError
can be rendered directly into the callable wire envelope:

    {"error": {"status": "ABORTED", "message": "Could not create live stream"}}
"""

import inspect
from enum import Enum, IntEnum
from typing import Any
from uuid import uuid4


class HttpStatusCode(IntEnum):
    OK = 200
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    CONFLICT = 409
    TOO_MANY_REQUESTS = 429
    CLIENT_CLOSED_REQUEST = 499
    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504


class AppErrorCode(str, Enum):
    E_OK = "ok"
    E_CANCELLED = "cancelled"
    E_UNKNOWN = "unknown"
    E_INVALID_ARGUMENT = "invalid-argument"
    E_DEADLINE_EXCEEDED = "deadline-exceeded"
    E_NOT_FOUND = "not-found"
    E_ALREADY_EXISTS = "already-exists"
    E_PERMISSION_DENIED = "permission-denied"
    E_RESOURCE_EXHAUSTED = "resource-exhausted"
    E_FAILED_PRECONDITION = "failed-precondition"
    E_ABORTED = "aborted"
    E_OUT_OF_RANGE = "out-of-range"
    E_UNIMPLEMENTED = "unimplemented"
    E_INTERNAL = "internal"
    E_UNAVAILABLE = "unavailable"
    E_DATA_LOSS = "data-loss"
    E_UNAUTHENTICATED = "unauthenticated"

    @property
    def wire_status(self) -> str:
        """Canonical name as sent on the wire, e.g. ``INVALID_ARGUMENT``."""
        return self.value.upper().replace("-", "_")


# Default HTTP status for each code when the raiser does not pass one
DEFAULT_STATUS_CODES: dict[AppErrorCode, HttpStatusCode] = {
    AppErrorCode.E_OK: HttpStatusCode.OK,
    AppErrorCode.E_CANCELLED: HttpStatusCode.CLIENT_CLOSED_REQUEST,
    AppErrorCode.E_UNKNOWN: HttpStatusCode.INTERNAL_SERVER_ERROR,
    AppErrorCode.E_INVALID_ARGUMENT: HttpStatusCode.BAD_REQUEST,
    AppErrorCode.E_DEADLINE_EXCEEDED: HttpStatusCode.GATEWAY_TIMEOUT,
    AppErrorCode.E_NOT_FOUND: HttpStatusCode.NOT_FOUND,
    AppErrorCode.E_ALREADY_EXISTS: HttpStatusCode.CONFLICT,
    AppErrorCode.E_PERMISSION_DENIED: HttpStatusCode.FORBIDDEN,
    AppErrorCode.E_RESOURCE_EXHAUSTED: HttpStatusCode.TOO_MANY_REQUESTS,
    AppErrorCode.E_FAILED_PRECONDITION: HttpStatusCode.BAD_REQUEST,
    AppErrorCode.E_ABORTED: HttpStatusCode.CONFLICT,
    AppErrorCode.E_OUT_OF_RANGE: HttpStatusCode.BAD_REQUEST,
    AppErrorCode.E_UNIMPLEMENTED: HttpStatusCode.NOT_IMPLEMENTED,
    AppErrorCode.E_INTERNAL: HttpStatusCode.INTERNAL_SERVER_ERROR,
    AppErrorCode.E_UNAVAILABLE: HttpStatusCode.SERVICE_UNAVAILABLE,
    AppErrorCode.E_DATA_LOSS: HttpStatusCode.INTERNAL_SERVER_ERROR,
    AppErrorCode.E_UNAUTHENTICATED: HttpStatusCode.UNAUTHORIZED,
}


class AppError(Exception):
    """Error surfaced to the remote caller.

    Only ``errcode``, ``errmesg`` and ``details`` ever reach the caller. The
    incident id and the raise site are kept for server-side logs.
    """

    def __init__(
        self,
        errcode: AppErrorCode,
        errmesg: str,
        status_code: HttpStatusCode | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(errmesg)
        self.errcode = AppErrorCode(errcode)
        self.errmesg = errmesg
        self.status_code = int(status_code or DEFAULT_STATUS_CODES[self.errcode])
        self.details = details
        self.erresid = uuid4().hex[:10]

        caller_frame = inspect.stack()[1]
        module = inspect.getmodule(caller_frame.frame)
        module_name = (
            module.__name__ if module and getattr(module, "__name__", None) else caller_frame.filename
        )
        self.caller_info = f"{module_name}:{caller_frame.function}:{caller_frame.lineno}"

    def to_wire(self) -> dict[str, Any]:
        error: dict[str, Any] = {"status": self.errcode.wire_status, "message": self.errmesg}
        if self.details is not None:
            error["details"] = self.details
        return {"error": error}
