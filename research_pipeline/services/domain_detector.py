import logging

from research_pipeline.services.lookups import DOMAIN_TRIGGERS, GENERAL_DOMAIN

logger = logging.getLogger(__name__)


def count_triggers(text: str) -> dict[str, int]:
    """Number of trigger phrases of each domain found in ``text``."""
    lowered = text.lower()
    return {
        domain: sum(1 for phrase in phrases if phrase in lowered)
        for domain, phrases in DOMAIN_TRIGGERS.items()
    }


def detect_domain(text: str) -> str:
    """Pick the domain with the most trigger hits; ties keep the earlier domain."""
    best_domain, best_count = GENERAL_DOMAIN, 0
    for domain, count in count_triggers(text).items():
        if count > best_count:
            best_domain, best_count = domain, count

    logger.debug("Detected domain %s (%s hits) for %r", best_domain, best_count, text)
    return best_domain
