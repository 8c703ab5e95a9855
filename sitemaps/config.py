from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class SitemapSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SITEMAPS_", extra="ignore")

    # Nodes per urlset page; larger sitemaps are served as an index of pages.
    page_size: int = 125

    # Name used by callers that do not ask for a specific sitemap.
    default_name: str = "sitemap"
    default_path: str = "/sitemap"

    # Public root URL used for sitemap links, e.g. "https://www.example.com".
    # When unset, links are built from the Host header of the request that
    # first fills the static cache.
    base_url: Optional[str] = None

    # HTTP caching
    cache_max_age_s: int = 3600
    etag_enabled: bool = True


sitemap_settings = SitemapSettings()
