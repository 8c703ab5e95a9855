class TestSitemapSettings:
    def test_default_settings(self):
        from sitemaps.config import SitemapSettings

        settings = SitemapSettings()

        assert settings.page_size == 125
        assert settings.default_name == "sitemap"
        assert settings.default_path == "/sitemap"
        assert settings.cache_max_age_s == 3600
        assert settings.etag_enabled is True

    def test_env_override(self, monkeypatch):
        from sitemaps.config import SitemapSettings

        monkeypatch.setenv("SITEMAPS_PAGE_SIZE", "50")
        monkeypatch.setenv("SITEMAPS_ETAG_ENABLED", "false")

        settings = SitemapSettings()

        assert settings.page_size == 50
        assert settings.etag_enabled is False
