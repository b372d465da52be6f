"""
Client for the Airtable REST API, the gallery's source of artwork and artist data.

Only what the gallery needs is implemented: listing every record of a table,
following Airtable's ``offset`` pagination. Any failure talking to Airtable is
raised as SourceUnavailableError; callers decide whether to retry.
"""

import logging
import time
from urllib.parse import quote
from typing import Any, Callable, Optional
import requests

from gallery.src.config import config
from gallery.src.exceptions import SourceUnavailableError
from gallery.src.models import Artist, Artwork
from gallery.src.services.airtable_records import parse_artist, parse_artworks

logger = logging.getLogger(__name__)

BASE_URL = "https://api.airtable.com/v0"
PAGE_SIZE = 100  # 100 is the maximum allowed by the Airtable API

AirtableRecord = dict[str, Any]


class AirtableClient:
    def __init__(
        self,
        api_key: str,
        base_id: str,
        request_timeout: float = 10.0,
        fetch_timeout: float = 30.0,
        http_session: Optional[requests.Session] = None,
        base_url: str = BASE_URL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.api_key = api_key
        self.base_id = base_id
        self.request_timeout = request_timeout
        self.fetch_timeout = fetch_timeout
        self.http_session = http_session or requests.Session()
        self.base_url = base_url
        self.clock = clock

    def get_table_url(self, table: str) -> str:
        return f"{self.base_url}/{self.base_id}/{quote(table)}"

    def list_records(
        self, table: str, view: str | None = None
    ) -> list[AirtableRecord]:
        """
        Fetch every record of a table, page by page.

        Raises SourceUnavailableError if credentials are missing, any request
        fails, a page is not shaped like ``{"records": [{...}, ...]}``, or the
        pages together take longer than ``fetch_timeout``.
        """
        if not self.api_key:
            raise SourceUnavailableError("AIRTABLE_API_KEY is not set")
        if not self.base_id:
            raise SourceUnavailableError("AIRTABLE_BASE_ID is not set")

        url = self.get_table_url(table)
        headers = {"Authorization": f"Bearer {self.api_key}"}
        params: dict[str, Any] = {"pageSize": PAGE_SIZE}
        if view:
            params["view"] = view

        deadline = self.clock() + self.fetch_timeout
        records: list[AirtableRecord] = []
        page = 0

        while True:
            remaining = deadline - self.clock()
            if remaining <= 0:
                raise SourceUnavailableError(
                    f"Fetching '{table}' from Airtable exceeded {self.fetch_timeout}s"
                )
            page += 1
            try:
                response = self.http_session.get(
                    url,
                    headers=headers,
                    params=params,
                    timeout=min(self.request_timeout, remaining),
                )
                response.raise_for_status()
                data = response.json()
            except requests.exceptions.Timeout as e:
                raise SourceUnavailableError(
                    f"Airtable request for '{table}' timed out (page {page})"
                ) from e
            except requests.exceptions.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                raise SourceUnavailableError(
                    f"Airtable returned HTTP {status} for '{table}'"
                ) from e
            except requests.exceptions.RequestException as e:
                raise SourceUnavailableError(
                    f"Failed to reach Airtable ({e.__class__.__name__})"
                ) from e
            except ValueError as e:
                raise SourceUnavailableError(
                    f"Airtable returned invalid JSON for '{table}'"
                ) from e

            page_records = data.get("records", []) if isinstance(data, dict) else None
            if not isinstance(page_records, list) or not all(
                isinstance(record, dict) for record in page_records
            ):
                raise SourceUnavailableError(
                    f"Airtable returned an unexpected payload for '{table}' (page {page})"
                )
            records.extend(page_records)

            offset = data.get("offset")
            if not offset:
                break
            params["offset"] = offset

        logger.debug(f"Fetched {len(records)} records from '{table}' in {page} page(s)")
        return records


def get_airtable_client() -> AirtableClient:
    return AirtableClient(
        api_key=config.airtable_api_key,
        base_id=config.airtable_base_id,
        request_timeout=config.airtable_request_timeout,
        fetch_timeout=config.airtable_fetch_timeout,
    )


def fetch_artworks_from_airtable(
    client: AirtableClient | None = None,
) -> tuple[Artwork, ...]:
    """Fetch and parse the complete artwork collection."""
    client = client or get_airtable_client()
    start_time = time.time()
    records = client.list_records(
        config.airtable_artworks_table, view=config.airtable_artworks_view
    )
    artworks = parse_artworks(records)
    logger.info(
        f"Fetched {len(artworks)} artworks from Airtable "
        f"in {time.time() - start_time:.2f} seconds"
    )
    return artworks


def fetch_artist_from_airtable(client: AirtableClient | None = None) -> Artist | None:
    """Fetch the gallery's artist profile, or None if the table holds no usable record."""
    client = client or get_airtable_client()
    records = client.list_records(config.airtable_artist_table)
    return parse_artist(records)
