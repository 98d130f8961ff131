import logging
import re
import xml.etree.ElementTree as ET
from datetime import date

import requests
from django.conf import settings
from research_pipeline.services.enums import ArxivURLs, AtomNS, PaperData

logger = logging.getLogger(__name__)

WHITESPACE_RE = re.compile(r"\s+")


def _clean(text: str | None) -> str:
    return WHITESPACE_RE.sub(" ", text or "").strip()


class ArxivClient:
    """
    Queries the arXiv Atom API and turns feed entries into PaperData records.
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None, max_results: int | None = None):
        self.base_url = base_url or settings.ARXIV_API_URL
        self.timeout = timeout if timeout is not None else settings.ARXIV_TIMEOUT_SECONDS
        self.max_results = max_results or settings.ARXIV_MAX_RESULTS

    @staticmethod
    def parse_published_date(entry_element) -> date | None:
        """Date part of the entry's <published> timestamp, or None when absent or malformed."""
        published = _clean(entry_element.findtext("atom:published", namespaces=AtomNS.MAP))
        if not published:
            return None
        try:
            return date.fromisoformat(published.split("T")[0])
        except ValueError:
            logger.debug(f"Unparseable published date: {published}")
            return None

    @staticmethod
    def parse_pdf_link(entry_element) -> str | None:
        for link in entry_element.findall("atom:link", AtomNS.MAP):
            if link.get("title") == "pdf" and link.get("href"):
                return link.get("href")
        return None

    @staticmethod
    def parse_category(entry_element) -> str | None:
        """
        Prefer arxiv:primary_category, falling back to the first atom:category term.
        """
        primary = entry_element.find("arxiv:primary_category", AtomNS.MAP)
        if primary is not None and primary.get("term"):
            return primary.get("term")

        category = entry_element.find("atom:category", AtomNS.MAP)
        if category is not None and category.get("term"):
            return category.get("term")
        return None

    def parse_feed(self, xml_text: str) -> list[PaperData]:
        """Parse an Atom feed body. Raises ET.ParseError on malformed XML."""
        root = ET.fromstring(xml_text)
        results: list[PaperData] = []
        for entry in root.findall("atom:entry", AtomNS.MAP):
            title = _clean(entry.findtext("atom:title", namespaces=AtomNS.MAP))
            if not title:
                continue

            authors = [
                _clean(author.findtext("atom:name", namespaces=AtomNS.MAP))
                for author in entry.findall("atom:author", AtomNS.MAP)
            ]

            results.append(
                PaperData(
                    title=title,
                    abstract=_clean(entry.findtext("atom:summary", namespaces=AtomNS.MAP)),
                    authors=[name for name in authors if name],
                    url=self.parse_pdf_link(entry),
                    published_date=self.parse_published_date(entry),
                    category=self.parse_category(entry),
                )
            )
        return results

    def fetch(self, query: str, limit: int | None = None) -> list[PaperData]:
        """Fetches one page of relevance-sorted results for a query."""
        params = {
            "search_query": f"all:{query}",
            "start": 0,
            "max_results": limit or self.max_results,
            "sortBy": "relevance",
            "sortOrder": "descending",
        }

        logger.info(f"Fetching arXiv papers for query: {query}")

        resp = requests.get(self.base_url, params=params, timeout=self.timeout)
        logger.debug(f"arXiv response: {resp.status_code}")
        resp.raise_for_status()

        results = self.parse_feed(resp.text)
        logger.info(f"Fetched {len(results)} papers for query: {query}")
        return results

    def search(self, query: str, limit: int | None = None) -> list[PaperData]:
        """Like fetch, but any transport, HTTP or parse failure yields an empty list."""
        try:
            return self.fetch(query, limit=limit)
        except requests.Timeout:
            logger.warning(f"arXiv request timed out for query: {query}")
        except requests.RequestException as e:
            logger.error(f"arXiv request failed for query {query}: {str(e)}")
        except ET.ParseError as e:
            logger.error(f"Malformed arXiv response for query {query}: {str(e)}")
        return []
