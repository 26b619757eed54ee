"""
Test helpers: sample pages and an in-memory fetcher
"""

from typing import Dict, List, Union

from pageinsight.fetchers import PageFetcher
from pageinsight.models import ExtractedRecord

SAMPLE_HTML = """
<html>
  <head>
    <title> Example Domain </title>
    <meta name="description" content="An example page">
  </head>
  <body>
    <h1> Example Domain </h1>
    <p>This domain is for use in illustrative examples.</p>
    <h2>More</h2>
    <script>var hidden = "not visible";</script>
    <a href="/one">One</a>
    <a href="https://www.iana.org/domains/example">More information</a>
    <img src="/logo.png">
    <h3>Footer</h3>
  </body>
</html>
"""

Outcome = Union[ExtractedRecord, Exception]


def make_record(url: str = "https://example.com/", **overrides) -> ExtractedRecord:
    fields = dict(
        url=url,
        title="Example Domain",
        content="This domain is for use in illustrative examples",
        links=2,
        images=1,
        headings=["Example Domain", "More"],
        meta_description="An example page",
        timestamp="2026-01-01T00:00:00.000Z"
    )
    fields.update(overrides)
    return ExtractedRecord(**fields)


class FakeFetcher(PageFetcher):
    """Returns scripted outcomes per URL; the last outcome repeats"""

    def __init__(self, outcomes: Dict[str, Union[Outcome, List[Outcome]]] = None):
        self.outcomes = outcomes or {}
        self.calls: List[str] = []
        self.started = False
        self.closed = False

    async def start(self):
        self.started = True

    async def fetch(self, url: str) -> ExtractedRecord:
        self.calls.append(url)
        scripted = self.outcomes.get(url)
        if scripted is None:
            return make_record(url)

        if isinstance(scripted, list):
            attempt = sum(1 for called in self.calls if called == url) - 1
            outcome = scripted[min(attempt, len(scripted) - 1)]
        else:
            outcome = scripted

        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def close(self):
        self.closed = True
