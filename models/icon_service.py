from dataclasses import dataclass
from typing import Optional

@dataclass(frozen=True)
class IconService:
    """A third-party favicon service addressed by server name."""
    name: str
    template: str # Contains a single "{server}" placeholder
    description: Optional[str] = None

    def url_for(self, server: str) -> str:
        return self.template.format(server=server)
