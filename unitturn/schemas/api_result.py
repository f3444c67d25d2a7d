from typing import Any, Optional
from pydantic import BaseModel
from unitturn.schemas.error_type import ErrorType

class ApiResult(BaseModel):
    '''
    Envelope of every JSON response.

    ok: whether the request did what it was asked to
    error_type: structured classification of the failure
    error_message: human readable explanation
    data: payload of a successful call
    '''
    ok: bool

    error_type: Optional[ErrorType] = None
    error_message: Optional[str] = None

    data: Optional[Any] = None

    @classmethod
    def success(cls, data: Any = None) -> "ApiResult":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error_type: ErrorType, message: str) -> "ApiResult":
        return cls(ok=False, error_type=error_type, error_message=message)
