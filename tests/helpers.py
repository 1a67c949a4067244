"""Shared test helpers: sample registry markup and fake registries."""

from icon_merge.errors import FetchError

HOME_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="1em" height="1em" viewBox="0 0 24 24">'
    '<path fill="currentColor" d="M10 20v-6h4v6h5v-8h3L12 3L2 12h3v8z"/></svg>'
)

CHECK_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="1em" height="1em" viewBox="0 0 24 24">'
    '<path fill="currentColor" d="M21 7L9 19l-5.5-5.5l1.41-1.41L9 16.17L19.59 5.59z"/></svg>'
)

STAR_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="1em" height="1em" viewBox="0 0 24 24">'
    '<path fill="currentColor" fill-rule="evenodd" d="M12 17.27L18.18 21l-1.64-7.03L22 9.24z"/></svg>'
)

MALFORMED_SVG = '<svg xmlns="http://www.w3.org/2000/svg"><path d="M0 0"></svg>'

# Valid markup whose text and style need escaping in JSX
SMILE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24"><desc>smile :)</desc>'
    '<path d="M1 1h2"/></svg>'
)

BLEND_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">'
    '<path style="fill:red;mix-blend-mode:multiply" d="M1 1h2"/></svg>'
)

REGISTRY = {
    "mdi:home": HOME_SVG,
    "mdi:check": CHECK_SVG,
    "mdi:star": STAR_SVG,
    "mdi:broken": MALFORMED_SVG,
}


class FakeFetcher:
    """Registry stand-in serving markup from a dict and recording calls."""

    def __init__(self, icons: dict[str, str]):
        self.icons = dict(icons)
        self.calls: list[str] = []

    def __call__(self, identifier: str) -> str:
        self.calls.append(identifier)
        try:
            return self.icons[identifier]
        except KeyError:
            raise FetchError(f'Icon "{identifier}" not found') from None


class FakeClient:
    """IconifyClient stand-in for project and CLI tests."""

    def __init__(self, *args, **kwargs):
        self.fetch = FakeFetcher(REGISTRY)
        self.batches: list[list[str]] = []

    def fetch_many(self, identifiers, max_workers=4):
        self.batches.append(list(identifiers))
        results = {}
        for identifier in identifiers:
            try:
                results[identifier] = self.fetch(identifier)
            except FetchError as e:
                results[identifier] = e
        return results
