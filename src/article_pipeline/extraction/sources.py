"""Source-specific selector configuration for major crypto news outlets."""

import functools
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from article_pipeline.urls import hostname_of

_CONFIG_PATH = Path(__file__).resolve().parent / "source_selectors.yaml"


class SourceConfig(BaseModel):
    """Selectors for one outlet, each list in priority order."""

    domain: str
    name: str
    content: list[str] = Field(default_factory=list)
    title: list[str] = Field(default_factory=list)
    description: list[str] = Field(default_factory=list)
    author: list[str] = Field(default_factory=list)
    published_at: list[str] = Field(default_factory=list)


@functools.lru_cache
def load_source_configs() -> dict[str, SourceConfig]:
    """Load per-domain selectors from YAML config file. Result is cached."""
    with open(_CONFIG_PATH) as f:
        data = yaml.safe_load(f)
    return {
        domain: SourceConfig(domain=domain, **config)
        for domain, config in (data.get("sources") or {}).items()
    }


def get_source_config(url: str) -> SourceConfig | None:
    """Return the outlet config for a URL, or None for unknown sites.

    Handles subdomains: markets.coindesk.com matches coindesk.com.
    """
    hostname = hostname_of(url)
    if not hostname:
        return None

    configs = load_source_configs()

    # Check exact match and parent domain (strip subdomains one level at a time)
    parts = hostname.split(".")
    for i in range(len(parts) - 1):
        candidate = ".".join(parts[i:])
        if candidate in configs:
            return configs[candidate]
    return None
