from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Project:
    id: int
    name: str
    owner_id: int
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
