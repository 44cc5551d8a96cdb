import logging
from typing import Dict, Optional

from onepassword.client import Client

logger = logging.getLogger("burstagent-ext")


class OnePasswordManager:
    def __init__(self, token: str, integration_name: str, integration_version: str, vault: str) -> None:
        self._client: Optional[Client] = None
        self.token = token
        self.integration_name = integration_name
        self.integration_version = integration_version
        self.vault = vault
        self._cache: Dict[str, str] = {}

    async def initialize(self) -> None:
        """Authenticate with the service account token once."""
        if not self._client:
            self._client = await Client.authenticate(
                auth=self.token, integration_name=self.integration_name, integration_version=self.integration_version
            )

    async def get_secret(self, item_title: str, field_label: str = "credential") -> str:
        """
        Resolve ``op://<vault>/<item_title>/<field_label>``.

        Resolved values are cached for the lifetime of the manager, the signing
        key and API tokens do not rotate while the agent is running.

        Raises:
            Exception: whatever the 1Password SDK raises when the reference
                cannot be resolved.
        """
        secret_ref = f"op://{self.vault}/{item_title}/{field_label}"
        if secret_ref in self._cache:
            return self._cache[secret_ref]

        await self.initialize()
        assert self._client is not None
        try:
            secret = await self._client.secrets.resolve(secret_ref)
        except Exception as e:
            logger.error(f"Error resolving secret {item_title} from vault {self.vault}: {e}")
            raise
        self._cache[secret_ref] = secret
        return secret
