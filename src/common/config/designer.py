"""Runtime settings for the schema designer.

SCHEMA_DESIGNER_DEFAULT_DIALECT selects the SQL family used when a caller does
not name one (any alias accepted by ``sqlgen.resolve_dialect``).
SCHEMA_DESIGNER_STRICT_PARSE switches the DDL parser from lenient to strict mode.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict

from common.config.env import get_env_bool, get_env_str

logger = logging.getLogger(__name__)

DEFAULT_DIALECT_ENV = "SCHEMA_DESIGNER_DEFAULT_DIALECT"
STRICT_PARSE_ENV = "SCHEMA_DESIGNER_STRICT_PARSE"


class DesignerSettings(BaseModel):
    """Resolved settings snapshot."""

    model_config = ConfigDict(frozen=True)

    default_dialect: str = "postgresql"
    strict_parse: bool = False

    @classmethod
    def from_env(cls) -> "DesignerSettings":
        """Read settings from the environment, falling back to defaults on bad values."""
        dialect = (get_env_str(DEFAULT_DIALECT_ENV, "postgresql") or "postgresql").strip()
        try:
            strict = bool(get_env_bool(STRICT_PARSE_ENV, False))
        except ValueError as exc:
            logger.warning("%s; strict parsing disabled.", exc)
            strict = False
        return cls(default_dialect=dialect or "postgresql", strict_parse=strict)


def get_settings() -> DesignerSettings:
    """Return settings for the current environment."""
    return DesignerSettings.from_env()
