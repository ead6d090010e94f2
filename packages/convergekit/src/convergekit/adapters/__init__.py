from ._base import CliAdapter, ManifestProvider, QueryProvider, Resolver
from .dns import DnsClient
from .kubectl import KubectlProvider

__all__ = ["CliAdapter", "ManifestProvider", "DnsClient", "KubectlProvider", "QueryProvider", "Resolver"]
