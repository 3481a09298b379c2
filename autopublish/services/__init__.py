"""Clients for the external collaborators: processes, packages, HTTP."""

from autopublish.services.http_client import HttpClient
from autopublish.services.installer import PackageInstaller
from autopublish.services.process import ProcessRunner

__all__ = [
    "HttpClient",
    "PackageInstaller",
    "ProcessRunner",
]
