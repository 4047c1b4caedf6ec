"""Exceptions raised while scraping and storing fund holdings."""


class ScrapeError(Exception):
    """Base class for every failure of a scrape request."""


class InvalidUrlError(ScrapeError):
    """The requested URL is not a well-formed absolute URL."""


class NavigationError(ScrapeError):
    """The browser could not load the page."""


class ExtractionError(ScrapeError):
    """The page does not have the expected shape."""


class NoTableFoundError(ExtractionError):
    pass


class ViewSwitchError(ScrapeError):
    """Switching the table to the Holdings % view failed.

    Raised and handled inside the scraper; callers only see the absence of
    holdings percentages.
    """


class UploadError(ScrapeError):
    """The snapshot could not be written to blob storage."""
