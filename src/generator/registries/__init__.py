"""Platform and style registries."""

from .platforms import PLATFORMS, PlatformProfile, get_profile

__all__ = ["PLATFORMS", "PlatformProfile", "get_profile"]
