"""
Purpose:
- Stage-level failures that cross the pipeline boundary.
- Per-page scrape problems never surface here; they become ScrapeResult(ok=False).
"""


class ScentFinderError(RuntimeError):
    pass


class ModelCallError(ScentFinderError):
    """The local model could not be reached or returned an unusable envelope."""


class SearchError(ScentFinderError):
    """The search provider could not be reached or answered with an error."""


class SearchConfigError(SearchError):
    """Search credentials are missing; raised before any network call."""
