"""Client collaborator for the short link service."""

from .api_client import ClientError, ShortLinkClient
from .recent import MAX_RECENT_LINKS, RecentLink, RecentLinks

__all__ = ["ClientError", "ShortLinkClient", "MAX_RECENT_LINKS", "RecentLink", "RecentLinks"]
