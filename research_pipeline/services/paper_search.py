import logging
from concurrent.futures import ThreadPoolExecutor

from django.conf import settings
from research_pipeline.services.arxiv_client import ArxivClient
from research_pipeline.services.enums import PaperData
from research_pipeline.services.lookups import (
    APPLICATION_CONTEXTS,
    GENERIC_CONTEXTS,
    MAX_QUERIES,
    METHODOLOGY_TERMS,
)

logger = logging.getLogger(__name__)


def build_queries(topic: str, domain: str) -> list[str]:
    """Raw topic, then topic + methodology terms, then topic + application contexts."""
    topic = topic.strip()
    contexts = APPLICATION_CONTEXTS.get(domain, GENERIC_CONTEXTS)
    candidates = [topic]
    candidates += [f"{topic} {term}" for term in METHODOLOGY_TERMS]
    candidates += [f"{topic} {context}" for context in contexts]

    queries: list[str] = []
    for query in candidates:
        if query not in queries:
            queries.append(query)
    return queries[:MAX_QUERIES]


def merge_results(result_sets: list[list[PaperData]]) -> list[PaperData]:
    """Merge per-query results keyed by exact title; the first occurrence wins."""
    merged: dict[str, PaperData] = {}
    for papers in result_sets:
        for paper in papers:
            merged.setdefault(paper.title, paper)
    return list(merged.values())


def search_papers(topic: str, domain: str, client: ArxivClient | None = None) -> list[PaperData]:
    """
    Run every query against arXiv concurrently and return the deduplicated papers.
    Individual query failures count as zero results.
    """
    client = client or ArxivClient()
    queries = build_queries(topic, domain)
    workers = max(1, min(settings.ARXIV_MAX_CONCURRENCY, len(queries)))

    logger.info("Searching arXiv with %d queries for topic %r", len(queries), topic)

    # map() keeps query order so the merge is deterministic
    with ThreadPoolExecutor(max_workers=workers) as executor:
        result_sets = list(executor.map(client.search, queries))

    papers = merge_results(result_sets)
    logger.info(
        "Found %d unique papers (%d raw hits) for topic %r",
        len(papers),
        sum(len(r) for r in result_sets),
        topic,
    )
    return papers
