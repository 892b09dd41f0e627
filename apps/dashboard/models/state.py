from dataclasses import dataclass
from typing import Dict, List, Optional
from pydantic import BaseModel


class State(BaseModel):
    """Form state handed back to the client after a failed action.

    `errors` is keyed by form field name (`customerId`, `amount`, `status`).
    A persistence failure only sets `message`.
    """

    errors: Optional[Dict[str, List[str]]] = None
    message: Optional[str] = None

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)


# Terminal outcome of a successful action: the client should navigate to
# `location` and nothing else runs after it is produced.
@dataclass(frozen=True)
class Redirect:
    location: str
