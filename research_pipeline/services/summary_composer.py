import logging

from research_pipeline.services import templates
from research_pipeline.services.enums import Analysis

logger = logging.getLogger(__name__)

MAX_PROBLEMS = 5
MAX_METHODS = 5
MAX_DATA_TYPES = 5
MAX_FINDINGS = 4
MAX_LIMITATIONS = 5


def unique(values: list[str]) -> list[str]:
    seen: list[str] = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return seen


def _section(heading: str, lines: list[str]) -> str:
    return "\n".join([heading, *lines]) + "\n"


def compose_summary(analyses: list[Analysis], topic: str, domain: str) -> str:
    """Render the analyzed papers as a fixed-section plain-text literature summary."""
    if not analyses:
        return templates.SUMMARY_NOT_FOUND.format(topic=topic)

    average = sum(a.relevance_score for a in analyses) / len(analyses)

    problems = [
        templates.SUMMARY_ATTRIBUTED_ITEM.format(index=i, title=a.paper_title, text=a.problem)
        for i, a in enumerate(analyses[:MAX_PROBLEMS], start=1)
    ]
    methods = [
        templates.SUMMARY_ATTRIBUTED_ITEM.format(index=i, title=a.paper_title, text=a.methodology)
        for i, a in enumerate(analyses[:MAX_METHODS], start=1)
    ]
    data_types = [
        templates.SUMMARY_ITEM.format(index=i, text=text)
        for i, text in enumerate(unique([a.data_type for a in analyses])[:MAX_DATA_TYPES], start=1)
    ]
    findings = [
        templates.SUMMARY_ATTRIBUTED_ITEM.format(index=i, title=a.paper_title, text=a.key_results)
        for i, a in enumerate(analyses[:MAX_FINDINGS], start=1)
    ]
    limitations = [
        templates.SUMMARY_ITEM.format(index=i, text=text)
        for i, text in enumerate(unique([a.limitations for a in analyses])[:MAX_LIMITATIONS], start=1)
    ]

    sections = [
        templates.SUMMARY_HEADER.format(domain=domain, topic=topic),
        templates.SUMMARY_LANDSCAPE.format(count=len(analyses), topic=topic, average=average),
        _section(templates.SUMMARY_PROBLEMS_HEADING, problems),
        _section(templates.SUMMARY_METHODS_HEADING, methods),
        _section(templates.SUMMARY_DATA_HEADING, data_types),
        _section(templates.SUMMARY_FINDINGS_HEADING, findings),
        _section(templates.SUMMARY_LIMITATIONS_HEADING, limitations),
    ]
    summary = "\n".join(sections).rstrip() + "\n"
    logger.info("Composed summary of %d analyses (%d chars)", len(analyses), len(summary))
    return summary
