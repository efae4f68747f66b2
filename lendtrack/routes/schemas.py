from pydantic import BaseModel
from typing import Any, Optional

class ActionRequest(BaseModel):
    action: Optional[str] = None
    payload: Optional[Any] = None
