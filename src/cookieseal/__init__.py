"""Cookieseal - stateless HMAC-signed session cookies."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cookieseal")
except PackageNotFoundError:
    __version__ = "0.0.0"
