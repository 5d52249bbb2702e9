from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any


# fmt: off
@dataclass(frozen=True)
class URLMapping:
    short_id: str           # Unique fixed-length short identifier
    long_url: str           # Original long URL (immutable after creation)
    created_at: datetime    # Creation timestamp in UTC (immutable)
    access_count: int = 0   # Number of successful resolutions
# fmt: on

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data['created_at'] = self.created_at.isoformat()
        return data
