from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Any, Generic, List, TypeVar

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Uniform success envelope returned by every video operation"""
    status_code: int
    data: T
    message: str = "Success"

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @property
    def success(self) -> bool:
        return self.status_code < 400

    def to_wire(self) -> dict:
        body = self.model_dump(mode="json", by_alias=True)
        body["success"] = self.success
        return body


class ApiErrorResponse(BaseModel):
    """Uniform error envelope"""
    status_code: int
    message: str
    success: bool = False
    errors: List[Any] = []

    class Config:
        alias_generator = to_camel
        populate_by_name = True
