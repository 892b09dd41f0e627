from dataclasses import dataclass, field
from typing import Dict, Generic, List, TypeVar, Union
from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class ValidationSuccess(Generic[T]):
    data: T
    success: bool = field(default=True, init=False)


@dataclass(frozen=True)
class ValidationFailure:
    errors: Dict[str, List[str]]   # form field name -> ordered messages
    message: str
    success: bool = field(default=False, init=False)


ValidationResult = Union[ValidationSuccess[T], ValidationFailure]
