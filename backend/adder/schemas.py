from pydantic import BaseModel


class AddResponse(BaseModel):
    sum: int


class ErrorResponse(BaseModel):
    error: str
