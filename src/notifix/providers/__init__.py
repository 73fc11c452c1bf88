"""Bundled count providers."""

from notifix.providers.build_default_providers import build_default_providers
from notifix.providers.http_count_provider import HttpCountProvider
from notifix.providers.random_count_provider import random_count, unavailable, userless

__all__ = [
    "HttpCountProvider",
    "build_default_providers",
    "random_count",
    "unavailable",
    "userless",
]
