from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


class FieldError(BaseModel):
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    message: str = "Validation failed"
    errors: list[FieldError]
