from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

class APIException(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)

# Client input errors
class MissingImage(APIException):
    def __init__(self):
        super().__init__(status_code=400, detail="Image not provided")

class UnsupportedFormat(APIException):
    def __init__(self):
        super().__init__(status_code=400, detail="Invalid base64 image format")

# Lookup misses
class NotFound(APIException):
    def __init__(self, image_id: str):
        super().__init__(status_code=404, detail="Image not found")
        self.image_id = image_id

class NoRecords(APIException):
    def __init__(self):
        super().__init__(status_code=404, detail="No images found")

# Remote asset host failures
class HostRejected(APIException):
    def __init__(self, reason: str):
        super().__init__(status_code=502, detail=f"Image host rejected the request: {reason}")

class HostUnavailable(APIException):
    def __init__(self, reason: str):
        super().__init__(status_code=503, detail=f"Image host unavailable: {reason}")

# Persistence failures
class StoreFailure(APIException):
    def __init__(self, detail: str = "Failed to access image store"):
        super().__init__(status_code=500, detail=detail)

def create_error_response(error_message: str, status_code: int = 400) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "data": None,
        "error": error_message
    }

async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail, exc.status_code)
    )
