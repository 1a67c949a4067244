"""Iconify registry client."""

import logging
from concurrent.futures import ThreadPoolExecutor

import requests

from .errors import FetchError

logger = logging.getLogger(__name__)

ICONIFY_API = "https://api.iconify.design"


class IconifyClient:
    """Fetches raw SVG markup for ``collection:name`` identifiers."""

    def __init__(
        self,
        base_url: str = ICONIFY_API,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def icon_url(self, identifier: str) -> str:
        collection, _, name = identifier.partition(":")
        return f"{self.base_url}/{collection}/{name}.svg"

    def fetch(self, identifier: str) -> str:
        """Return the SVG for identifier.

        Raises:
            FetchError: On network failure or when the icon does not exist.
        """
        url = self.icon_url(identifier)
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, params={"height": "1em"}, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(f'Failed to fetch "{identifier}": {e}') from e

        # Iconify answers unknown icons with a literal "404" body
        if response.status_code == 404 or response.text.strip() == "404":
            raise FetchError(f'Icon "{identifier}" not found')
        if not response.ok:
            raise FetchError(f'Failed to fetch "{identifier}": HTTP {response.status_code}')
        return response.text

    def fetch_many(self, identifiers: list[str], max_workers: int = 4) -> dict[str, str | FetchError]:
        """Fetch several icons concurrently.

        Results are keyed by identifier in input order; failures are
        returned as FetchError values rather than raised.
        """

        def attempt(identifier: str) -> str | FetchError:
            try:
                return self.fetch(identifier)
            except FetchError as e:
                return e

        unique = list(dict.fromkeys(identifiers))
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(attempt, unique))
        return dict(zip(unique, results))
