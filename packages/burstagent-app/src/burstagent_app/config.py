import logging
from typing import Dict, NamedTuple, Optional

from burstagent_ext.secret_management import SecretConfig
from pydantic_settings import BaseSettings, SettingsConfigDict

from ._constants import DEFAULT_CONFIRMATIONS, DRAFT_TTL_SECONDS, LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


class NetworkConfig(NamedTuple):
    chain_id: int
    rpc_url: str
    explorer_url: str


NETWORKS: Dict[str, NetworkConfig] = {
    "mainnet": NetworkConfig(43114, "https://api.avax.network/ext/bc/C/rpc", "https://snowtrace.io"),
    "testnet": NetworkConfig(43113, "https://api.avax-test.network/ext/bc/C/rpc", "https://testnet.snowtrace.io"),
}

# resolved through 1Password when missing from the environment
SECRET_KEYS = ("AVALANCHE_PRIVATE_KEY", "PINATA_JWT", "OPENAI_API_KEY", "GOOGLE_GEMINI_API_KEY")


class BurstAgentSettings(BaseSettings):
    AGENT_ID: str = "burst-agent"
    AVALANCHE_NETWORK: str = "mainnet"
    AVALANCHE_RPC_URL: Optional[str] = None
    AVALANCHE_PRIVATE_KEY: str = ""
    BURST_FACTORY_ADDRESS: str = ""
    PINATA_JWT: str = ""
    PINATA_API_URL: str = "https://api.pinata.cloud"
    REDIS_URL: Optional[str] = None
    DRAFT_TTL_SECONDS: int = DRAFT_TTL_SECONDS
    CONFIRMATIONS: int = DEFAULT_CONFIRMATIONS
    RPC_TIMEOUT: float = 30
    RECEIPT_TIMEOUT: float = 180
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_API_KEY: str = ""
    GOOGLE_GEMINI_API_KEY: str = ""
    IMAGE_MODEL: str = "imagen-3.0-generate-002"
    HTTP_PORT: int = 9529
    METRICS_PORT: Optional[int] = None
    LOGGING_CONFIG: str = "logging_config.yaml"
    OP_SERVICE_ACCOUNT_TOKEN: Optional[str] = None
    OP_VAULT: str = ""
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def network(self) -> NetworkConfig:
        network = NETWORKS.get(self.AVALANCHE_NETWORK.lower())
        if network is None:
            raise ValueError(f"unknown AVALANCHE_NETWORK {self.AVALANCHE_NETWORK}, expected one of {list(NETWORKS)}")
        return network

    @property
    def rpc_url(self) -> str:
        return self.AVALANCHE_RPC_URL or self.network.rpc_url

    @property
    def explorer_url(self) -> str:
        return self.network.explorer_url


async def load_settings() -> BurstAgentSettings:
    """Settings from the environment (and ``.env``), secrets falling back to 1Password."""
    settings = BurstAgentSettings()
    if not settings.OP_SERVICE_ACCOUNT_TOKEN:
        return settings
    secrets = SecretConfig(token=settings.OP_SERVICE_ACCOUNT_TOKEN, vault_name=settings.OP_VAULT)
    updates: Dict[str, str] = {}
    for key in SECRET_KEYS:
        if getattr(settings, key):
            continue
        value = await secrets.get_env(key)
        if value:
            logger.info(f"{key} resolved from 1Password")
            updates[key] = value
    return settings.model_copy(update=updates)
