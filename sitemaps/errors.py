class SitemapError(Exception):
    pass


class InvalidNodeError(SitemapError, ValueError):
    pass


class InvalidPageError(SitemapError, ValueError):
    pass
