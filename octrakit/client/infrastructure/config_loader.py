"""Infrastructure layer: Configuration loading.
"""

from __future__ import annotations

import logging

from octrakit.common import Configurable, setup_logger
from octrakit.common.config import Config
from octrakit.common.models import ClientConfig


class ConfigLoader(Configurable):
    """Resolves client settings from caller overrides and Config defaults."""

    rpc_url: str
    connect_timeout: float
    poll_interval: float
    confirm_timeout: float
    log_level: int

    def __init__(self, client_config: ClientConfig | None = None):
        self.config: Config = Config()
        client_config = client_config or ClientConfig()

        self.apply_overrides(
            client_config.model_dump(exclude_none=True),
            self.config,
            ["rpc_url", "connect_timeout", "poll_interval", "confirm_timeout", "log_level"],
        )
        self.rpc_url = self.rpc_url.rstrip("/")

        # Setup logging for the whole package
        self.logger = logging.getLogger("octrakit")
        setup_logger(self.logger, self.log_level)
