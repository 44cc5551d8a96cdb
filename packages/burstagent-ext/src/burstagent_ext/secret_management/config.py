import logging
import os
from typing import Optional

from burstagent_ext.secret_management.onepassword import OnePasswordManager

logger = logging.getLogger("burstagent-ext")


class SecretConfig:
    """Environment first, 1Password second.

    Without a service account token only the environment is consulted.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        vault_name: str = "",
        integration_name: str = "burst-agent",
        password_manager: Optional[OnePasswordManager] = None,
    ) -> None:
        self.vault_name = vault_name
        if password_manager is None and token:
            password_manager = OnePasswordManager(token, integration_name, "0.1.0", vault_name)
        self.password_manager = password_manager

    async def get_env(self, key: str, default: str = "") -> str:
        env = os.getenv(key)
        if env:
            return env
        if self.password_manager is None:
            return default
        try:
            return await self.password_manager.get_secret(key)
        except Exception as e:
            logger.warning(f"secret {key} not resolved from 1Password, using default: {e}")
            return default
