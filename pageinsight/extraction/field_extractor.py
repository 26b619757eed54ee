"""
Field Extractor - Reads the fixed set of page fields into an ExtractedRecord
"""

import logging
from bs4 import BeautifulSoup
from playwright.async_api import Page, Error as PlaywrightError

from ..errors import ExtractionError
from ..models import ExtractedRecord, utc_timestamp

logger = logging.getLogger(__name__)

MAX_CONTENT_LENGTH = 5000
HEADING_SELECTOR = 'h1, h2, h3'

# Runs inside the page; mirrors extract_fields_from_html below
EXTRACT_SCRIPT = """
(maxContentLength) => {
    const description = document.querySelector('meta[name="description"]');
    return {
        url: window.location.href,
        title: document.title,
        content: document.body ? document.body.innerText.substring(0, maxContentLength) : '',
        links: document.querySelectorAll('a').length,
        images: document.querySelectorAll('img').length,
        headings: Array.from(document.querySelectorAll('h1, h2, h3')).map(h => h.textContent.trim()),
        metaDescription: (description && description.content) || '',
        timestamp: new Date().toISOString()
    };
}
"""


async def extract_fields(page: Page) -> ExtractedRecord:
    """Read fields from an already loaded Playwright page

    Args:
        page: Page that has passed the readiness wait

    Returns:
        ExtractedRecord with no enrichment attached

    Raises:
        ExtractionError: if the in-page script fails
    """
    try:
        data = await page.evaluate(EXTRACT_SCRIPT, MAX_CONTENT_LENGTH)
    except PlaywrightError as e:
        raise ExtractionError(f"DOM read failed: {e}") from e

    if not isinstance(data, dict):
        raise ExtractionError(f"DOM read returned {type(data).__name__}, expected an object")

    return ExtractedRecord.from_page_data(data)


def extract_fields_from_html(html: str, url: str) -> ExtractedRecord:
    """Read the same fields from raw HTML (used by the HTTP fetcher)"""
    soup = BeautifulSoup(html, 'html.parser')

    title = ''
    if soup.title and soup.title.string:
        title = soup.title.string.strip()

    content = ''
    if soup.body:
        for hidden in soup.body.find_all(['script', 'style', 'noscript', 'template']):
            hidden.decompose()
        content = soup.body.get_text('\n', strip=True)[:MAX_CONTENT_LENGTH]

    headings = [h.get_text().strip() for h in soup.select(HEADING_SELECTOR)]

    meta = soup.find('meta', attrs={'name': 'description'})
    meta_description = (meta.get('content') or '') if meta else ''

    return ExtractedRecord(
        url=url,
        title=title,
        content=content,
        links=len(soup.find_all('a')),
        images=len(soup.find_all('img')),
        headings=headings,
        meta_description=meta_description,
        timestamp=utc_timestamp()
    )
