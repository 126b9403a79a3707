"""Runtime environment metadata attached to every event."""

from __future__ import annotations

import platform
import sys
from typing import Dict

from pydantic import BaseModel, ConfigDict


class Environment(BaseModel):
    """Operating system, CPU architecture and library version."""

    model_config = ConfigDict(frozen=True)

    os: str
    arch: str
    version: str

    @classmethod
    def detect(cls) -> Environment:
        """Describe the running interpreter."""
        from ga4 import __version__

        return cls(
            os=sys.platform,
            arch=platform.machine().lower() or "unknown",
            version=__version__,
        )

    def as_params(self) -> Dict[str, str]:
        """Return the event parameters injected into each event."""
        return {"os": self.os, "arch": self.arch, "version": self.version}
