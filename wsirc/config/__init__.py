"""Client configuration package."""

from .loader import load_config  # noqa: F401
from .model import ClientConfig, generate_nick  # noqa: F401

__all__ = ["ClientConfig", "generate_nick", "load_config"]
