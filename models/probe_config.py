from dataclasses import dataclass, field
from typing import Dict, Optional

@dataclass(frozen=True)
class ProbeConfig:
    """Request options threaded into the built-in strategies at setup time."""
    method: str = "GET" # HTTP method used by the favicon.ico probe
    headers: Dict[str, str] = field(default_factory=dict)
    timeout: Optional[float] = None # Falls back to fetch.http_client.DEFAULT_TIMEOUT
    retries: Optional[int] = None # Falls back to fetch.http_client.DEFAULT_RETRIES
