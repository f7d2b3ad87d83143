"""Server variants symfttpd knows how to run in the foreground."""
from __future__ import annotations

from .base import Server
from .lighttpd import LighttpdServer
from .models import ServerHandle

__all__ = ["LighttpdServer", "Server", "ServerHandle"]
