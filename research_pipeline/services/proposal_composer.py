import logging

from research_pipeline.services import templates
from research_pipeline.services.enums import GapData, PaperData, ProposalDraft

logger = logging.getLogger(__name__)

MAX_KEY_PAPERS = 5
MAX_LISTED_AUTHORS = 3
LANDSCAPE_HEADING = templates.SUMMARY_LANDSCAPE.split("\n", 1)[0]


def landscape_paragraph(summary: str) -> str:
    """The landscape paragraph of a composed summary, or the whole text if it has none."""
    for paragraph in summary.split("\n\n"):
        if paragraph.startswith(LANDSCAPE_HEADING):
            return paragraph[len(LANDSCAPE_HEADING):].strip()
    return summary.strip()


def format_authors(authors: list[str]) -> str:
    if not authors:
        return ""
    listed = ", ".join(authors[:MAX_LISTED_AUTHORS])
    if len(authors) > MAX_LISTED_AUTHORS:
        listed += " et al."
    return f" ({listed})"


def _background(papers: list[PaperData], summary: str) -> str:
    if not papers:
        overview = f"{summary.strip()} {templates.PROPOSAL_BACKGROUND_EMPTY}"
        return templates.PROPOSAL_BACKGROUND.format(overview=overview)

    key_papers = "\n".join(
        templates.PROPOSAL_KEY_PAPER.format(index=i, title=paper.title, authors=format_authors(paper.authors))
        for i, paper in enumerate(papers[:MAX_KEY_PAPERS], start=1)
    )
    overview = f"{landscape_paragraph(summary)}\n\n{templates.PROPOSAL_KEY_PAPERS_HEADING}\n{key_papers}"
    return templates.PROPOSAL_BACKGROUND.format(overview=overview)


def _gaps(gaps: list[GapData]) -> str:
    items = "\n\n".join(
        templates.PROPOSAL_GAP_ITEM.format(index=i, priority=gap.priority.upper(), description=gap.description)
        for i, gap in enumerate(gaps, start=1)
    )
    return f"{templates.PROPOSAL_GAPS_HEADING}\n{items}\n"


def compose_proposal(
    topic: str,
    papers: list[PaperData],
    gaps: list[GapData],
    summary: str,
    domain: str,
) -> ProposalDraft:
    """Render a multi-section markdown research proposal."""
    title = templates.PROPOSAL_TITLE.format(topic=topic)
    lowered = topic.lower()
    high_count = sum(1 for gap in gaps if gap.priority == "high")

    sections = [
        f"# {title}\n",
        templates.PROPOSAL_EXECUTIVE_SUMMARY.format(
            topic=lowered, count=len(papers), domain=domain, high_count=high_count
        ),
        _background(papers, summary),
        _gaps(gaps),
        templates.PROPOSAL_OBJECTIVES.format(topic=lowered),
        templates.PROPOSAL_METHODOLOGY,
        templates.PROPOSAL_CONTRIBUTIONS.format(topic=lowered),
        templates.PROPOSAL_TIMELINE,
        templates.PROPOSAL_CONCLUSION.format(topic=lowered),
    ]
    content = "\n".join(sections)
    logger.info("Composed proposal %r (%d chars)", title, len(content))
    return ProposalDraft(title=title, content=content)
