from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class SidebarItemResponse(BaseModel):
    id: int
    name: str
    icon: Optional[str] = None
    user_access: List[int]
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
