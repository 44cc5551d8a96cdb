from .config import SecretConfig

__all__ = ["SecretConfig"]
