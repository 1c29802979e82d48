from .http_client import FetchError, PageFetcher

__all__ = ["FetchError", "PageFetcher"]
