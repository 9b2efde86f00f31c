from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Notification:
    user_id: str
    title: str
    body: str
    kind: str = "general"
    channel: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)
