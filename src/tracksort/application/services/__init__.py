"""Application services."""

from .organize_service import OrganizeMusicService, OrganizeRequest, build_providers

__all__ = ["OrganizeMusicService", "OrganizeRequest", "build_providers"]
