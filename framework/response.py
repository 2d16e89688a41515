from typing import Any, Optional
from pydantic import BaseModel
from framework.repository.pagination import PagedList

class ResponseModel(BaseModel):
    """Envelope for every API response: {code, message, data}."""
    code: int = 200
    message: str = "success"
    data: Optional[Any] = None

    @staticmethod
    def success(data: Any = None):
        return {"code": 200, "message": "success", "data": data}

    @staticmethod
    def page(paged: PagedList):
        """Success envelope around a paged query result."""
        return ResponseModel.success(data=paged.to_response())

    @staticmethod
    def fail(code: int = 400, message: str = "error", data: Any = None):
        return {"code": code, "message": message, "data": data}
