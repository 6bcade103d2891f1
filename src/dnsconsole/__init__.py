"""dnsconsole - Console for managing the DNS records of a Cloudflare zone."""

from dnsconsole.client import CloudflareDnsClient
from dnsconsole.controller import ConsoleController
from dnsconsole.session import Session

__all__ = ["CloudflareDnsClient", "ConsoleController", "Session"]
__version__ = "0.1.0"
