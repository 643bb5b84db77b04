import os

from enum import Enum
from pathlib import Path
from typing import Self


ENV_VAR = "TABLEMARKUP_ENV"

class Environment(Enum):
    """Which .env file the settings are read from; selected by TABLEMARKUP_ENV."""
    PRODUCTION  = "production"
    DEVELOPMENT = "development"
    TESTING     = "testing"

    @classmethod
    def from_os(cls) -> Self:
        """The environment named by TABLEMARKUP_ENV, development when unset."""
        name = os.environ.get(ENV_VAR, "").strip().lower() or cls.DEVELOPMENT.value
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"{ENV_VAR}={name!r} is not one of {[e.value for e in cls]}.") from None

    def activate(self) -> Self:
        """Make this the environment later get_settings() calls resolve to."""
        os.environ[ENV_VAR] = self.value
        return self

    def dotenv_path(self, root: Path) -> Path:
        """Development reads the bare `.env`; the others `.env.<name>`."""
        if self is Environment.DEVELOPMENT:
            return root / ".env"
        return root / f".env.{self.value}"
