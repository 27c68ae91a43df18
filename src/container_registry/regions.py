"""
Regional endpoints for IBM Cloud Container Registry.

Several legacy region names alias the same registry host
(uk-south/eu-gb, eu-central/eu-de, ap-north/jp-tok, ap-south/au-syd).
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

__all__ = ["REGIONAL_ENDPOINTS", "get_service_url_for_region"]

REGIONAL_ENDPOINTS: Mapping[str, str] = MappingProxyType({
    "global": "https://icr.io",
    "us-south": "https://us.icr.io",
    "uk-south": "https://uk.icr.io",
    "eu-gb": "https://uk.icr.io",
    "eu-central": "https://de.icr.io",
    "eu-de": "https://de.icr.io",
    "ap-north": "https://jp.icr.io",
    "jp-tok": "https://jp.icr.io",
    "ap-south": "https://au.icr.io",
    "au-syd": "https://au.icr.io",
    "jp-osa": "https://jp2.icr.io",
    "ca-tor": "https://ca.icr.io",
    "br-sao": "https://br.icr.io",
})


def get_service_url_for_region(region: str) -> Optional[str]:
    """Return the service URL for region, or None if the region is unknown."""
    return REGIONAL_ENDPOINTS.get(region)
