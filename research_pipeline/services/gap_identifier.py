import logging

from research_pipeline.services import templates
from research_pipeline.services.enums import Analysis, GapData, PaperData

logger = logging.getLogger(__name__)


def identify_gaps(papers: list[PaperData], analyses: list[Analysis], topic: str) -> list[GapData]:
    """
    Enumerate the fixed set of templated research gaps for a topic.

    Every run yields the same seven gaps in the same priority order; only the
    topic, the aggregate counts and the supporting paper windows vary.
    """
    method_count = len({a.methodology for a in analyses})
    data_count = len({a.data_type for a in analyses})
    context = {"topic": topic.lower(), "method_count": method_count, "data_count": data_count}

    gaps = [
        GapData(
            description=template.format(**context),
            priority=priority,
            supporting_papers=[paper.title for paper in papers[window]],
        )
        for (priority, template), window in zip(templates.GAP_TEMPLATES, templates.GAP_SUPPORT_WINDOWS)
    ]
    logger.info("Identified %d research gaps for %r", len(gaps), topic)
    return gaps
