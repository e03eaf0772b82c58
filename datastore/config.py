"""
Configuration for the datastore field layer.

Settings are read from environment variables with the ``DATASTORE_`` prefix.
They only affect process-wide services (identity generation and logging);
field semantics never depend on configuration.

Invariants:
    - All settings have defaults suitable for production use
    - configure() is idempotent for equal settings
"""

from __future__ import annotations

import logging
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from .identity import SequentialIdentity, set_identity_generator, uuid4_identity

logger = logging.getLogger(__name__)


class DatastoreSettings(BaseSettings):
    """Datastore configuration."""

    # Identity generation
    identity_strategy: Literal["uuid4", "sequential"] = Field(
        default="uuid4",
        description="uuid4 for production, sequential for deterministic tests",
    )
    identity_prefix: str = Field(default="field", min_length=1)

    # Logging level for the "datastore" logger
    log_level: str = Field(default="WARNING")

    model_config = {"env_prefix": "DATASTORE_"}


def configure(settings: Optional[DatastoreSettings] = None) -> DatastoreSettings:
    """Apply settings to the process-wide services.

    Args:
        settings: Settings to apply (loaded from the environment if omitted)

    Returns:
        The applied settings
    """
    if settings is None:
        settings = DatastoreSettings()

    logging.getLogger("datastore").setLevel(settings.log_level.upper())

    if settings.identity_strategy == "sequential":
        set_identity_generator(SequentialIdentity(settings.identity_prefix))
    else:
        set_identity_generator(uuid4_identity)

    logger.info(
        f"Datastore configured: identity_strategy={settings.identity_strategy}, "
        f"log_level={settings.log_level}"
    )
    return settings
