import logging

from research_pipeline.services.enums import PaperData
from research_pipeline.services.lookups import DOMAIN_CATEGORIES

logger = logging.getLogger(__name__)

TITLE_WEIGHT = 10
ABSTRACT_WEIGHT = 5
MATCH_BONUS = 3
DOMAIN_BONUS = 15
MIN_SCORE = 5
MAX_PAPERS = 12


def tokenize_topic(topic: str) -> list[str]:
    return [token for token in topic.lower().split() if len(token) > 2]


def matches_domain(category: str | None, domain: str) -> bool:
    if not category:
        return False
    return any(category.startswith(prefix) for prefix in DOMAIN_CATEGORIES.get(domain, ()))


def score_paper(paper: PaperData, tokens: list[str], domain: str) -> int:
    title = paper.title.lower()
    abstract = paper.abstract.lower()

    score = 0
    matched = set()
    for token in tokens:
        if token in title:
            score += TITLE_WEIGHT
            matched.add(token)
        if token in abstract:
            score += ABSTRACT_WEIGHT
            matched.add(token)
    score += MATCH_BONUS * len(matched)

    if matches_domain(paper.category, domain):
        score += DOMAIN_BONUS
    return score


def filter_papers(papers: list[PaperData], topic: str, domain: str, limit: int = MAX_PAPERS) -> list[PaperData]:
    """
    Score candidates against the topic, keep those above MIN_SCORE and return
    the top ``limit`` in descending score order. Output order is the salience
    order used by every later stage.
    """
    tokens = tokenize_topic(topic)
    scored = [
        paper.model_copy(update={"relevance_score": score_paper(paper, tokens, domain)})
        for paper in papers
    ]
    kept = [paper for paper in scored if paper.relevance_score > MIN_SCORE]
    # sorted() is stable, so ties keep search order
    kept = sorted(kept, key=lambda paper: paper.relevance_score, reverse=True)[:limit]

    logger.info("Relevance filter kept %d of %d papers", len(kept), len(papers))
    return kept
