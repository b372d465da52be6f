class GalleryError(Exception):
    """Base class for errors raised by the gallery services."""


class SourceUnavailableError(GalleryError):
    """The artwork source (Airtable) could not be read.

    Covers network errors, authentication and rate-limit responses, missing
    credentials and fetches that exceed their deadline.
    """
