"""
modpak 平台客户端

包含 HTTP 封装以及 Modrinth、CurseForge 两个平台的统一客户端。
"""

from modpak.api.http import HttpClient, HttpResponse
from modpak.api.base import LookupResult, LookupStatus, ProviderClient, pick_best
from modpak.api.modrinth import ModrinthClient
from modpak.api.curseforge import CurseForgeClient

__all__ = [
    "HttpClient",
    "HttpResponse",
    "LookupResult",
    "LookupStatus",
    "ProviderClient",
    "pick_best",
    "ModrinthClient",
    "CurseForgeClient",
]
