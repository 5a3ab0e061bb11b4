from .base import Provider
from .nitro import RouterNitroProvider

__all__ = ["Provider", "RouterNitroProvider"]
