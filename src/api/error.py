from fastapi import status
from libs.result import Error


class ApiError(Exception):
    """Error rendered as {"error": {"code", "message"}} with a fixed status"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, base_error: Error, message: str = None):
        self.base_error = base_error
        self.message = message or base_error.message
        super().__init__(self.message)

    def body(self) -> dict:
        return {"error": {"code": self.base_error.code, "message": self.message}}


class ClientError(ApiError):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(base_error)
        self.status_code = status_code


class ServerError(ApiError):
    """Details stay in base_error.reason and the logs; clients see message"""

    def __init__(self, base_error: Error, message: str = "Internal server error"):
        super().__init__(base_error, message)
