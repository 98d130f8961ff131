import logging
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.db.models import Q
from django.utils import timezone
from research_pipeline.models import TERMINAL_STATUSES, Paper, Proposal, ResearchGap, Summary, Topic, TopicStatus
from research_pipeline.services.abstract_analyzer import analyze_papers
from research_pipeline.services.arxiv_client import ArxivClient
from research_pipeline.services.domain_detector import detect_domain
from research_pipeline.services.enums import Analysis, GapData, PaperData, PipelineResult
from research_pipeline.services.gap_identifier import identify_gaps
from research_pipeline.services.paper_search import search_papers
from research_pipeline.services.proposal_composer import compose_proposal
from research_pipeline.services.relevance_filter import filter_papers
from research_pipeline.services.research_orchestrator.errors import PipelineStageError, TopicInProgressError
from research_pipeline.services.summary_composer import compose_summary

logger = logging.getLogger(__name__)


class ResearchOrchestrator:
    """
    Runs the research pipeline for one topic:
    search -> filter -> analyze -> summarize -> identify gaps -> compose proposal.

    Each stage persists its rows before the topic status advances, so the
    status always names the stage currently in progress. Stages are not
    transactional with each other; on failure the rows already written are
    kept and the topic is marked failed.
    """

    def __init__(self, client: ArxivClient | None = None):
        self.client = client or ArxivClient()

    def reset_artifacts(self, topic: Topic) -> None:
        """Drop rows left by an earlier run of the same topic."""
        with transaction.atomic():
            Paper.objects.filter(topic=topic).delete()
            Summary.objects.filter(topic=topic).delete()
            ResearchGap.objects.filter(topic=topic).delete()
            Proposal.objects.filter(topic=topic).delete()

    def search_stage(self, topic: Topic, domain: str) -> list[PaperData]:
        candidates = search_papers(topic.text, domain, client=self.client)
        papers = filter_papers(candidates, topic.text, domain)

        with transaction.atomic():
            Paper.objects.bulk_create(
                Paper(
                    topic=topic,
                    title=paper.title,
                    authors=paper.authors,
                    abstract=paper.abstract,
                    url=paper.url,
                    published_date=paper.published_date,
                    source=paper.source,
                    category=paper.category,
                    relevance_score=paper.relevance_score,
                    position=position,
                )
                for position, paper in enumerate(papers)
            )
        logger.info("Saved %d papers for topic %s", len(papers), topic.pk)
        return papers

    def analyze_stage(self, topic: Topic, papers: list[PaperData], domain: str) -> tuple[list[Analysis], str]:
        analyses = analyze_papers(papers)
        summary = compose_summary(analyses, topic.text, domain)

        with transaction.atomic():
            Summary.objects.update_or_create(topic=topic, defaults={"content": summary})
        logger.info("Saved summary for topic %s", topic.pk)
        return analyses, summary

    def refine_stage(
        self,
        topic: Topic,
        papers: list[PaperData],
        analyses: list[Analysis],
        summary: str,
        domain: str,
    ) -> list[GapData]:
        gaps = identify_gaps(papers, analyses, topic.text)
        proposal = compose_proposal(topic.text, papers, gaps, summary, domain)

        with transaction.atomic():
            ResearchGap.objects.filter(topic=topic).delete()
            ResearchGap.objects.bulk_create(
                ResearchGap(
                    topic=topic,
                    description=gap.description,
                    priority=gap.priority,
                    supporting_papers=gap.supporting_papers,
                    position=position,
                )
                for position, gap in enumerate(gaps)
            )
            Proposal.objects.update_or_create(
                topic=topic,
                defaults={"title": proposal.title, "content": proposal.content},
            )
        logger.info("Saved %d gaps and proposal for topic %s", len(gaps), topic.pk)
        return gaps

    def claim(self, topic: Topic, domain: str) -> None:
        """
        Atomically move the topic into searching. Only one run may hold a
        topic at a time; an in-progress topic is claimable again once stale.
        Raises TopicInProgressError when another run holds it.
        """
        now = timezone.now()
        cutoff = now - timedelta(minutes=settings.RESEARCH_STALE_AFTER_MINUTES)
        claimable = Q(status__in=(TopicStatus.PENDING, *TERMINAL_STATUSES)) | Q(updated_at__lt=cutoff)

        claimed = Topic.objects.filter(claimable, pk=topic.pk).update(
            status=TopicStatus.SEARCHING, domain=domain, updated_at=now
        )
        if not claimed:
            logger.warning("Topic %s is already being processed (status %s)", topic.pk, topic.status)
            raise TopicInProgressError(topic.pk)

        topic.status = TopicStatus.SEARCHING
        topic.domain = domain
        topic.updated_at = now

    def mark_failed(self, topic: Topic) -> None:
        try:
            topic.set_status(TopicStatus.FAILED)
        except Exception as e:  # the store itself may be what failed
            logger.error("Could not mark topic %s as failed: %s", topic.pk, str(e))

    def run(self, topic_id) -> PipelineResult:
        """
        Process a topic end to end. Raises Topic.DoesNotExist for unknown ids,
        TopicInProgressError when another run holds the topic and
        PipelineStageError when any stage fails.
        """
        topic = Topic.objects.get(pk=topic_id)
        domain = detect_domain(topic.text)
        self.claim(topic, domain)
        stage = TopicStatus.SEARCHING

        logger.info("Starting research pipeline for topic %s: %r", topic.pk, topic.text)
        try:
            self.reset_artifacts(topic)
            papers = self.search_stage(topic, domain)

            stage = TopicStatus.ANALYZING
            topic.set_status(stage)
            analyses, summary = self.analyze_stage(topic, papers, domain)

            stage = TopicStatus.REFINING
            topic.set_status(stage)
            gaps = self.refine_stage(topic, papers, analyses, summary, domain)

            topic.set_status(TopicStatus.COMPLETED)
        except Exception as e:
            logger.error("Research pipeline failed for topic %s during %s: %s", topic.pk, stage, str(e))
            self.mark_failed(topic)
            raise PipelineStageError(str(stage), e) from e

        logger.info("Completed research pipeline for topic %s with %d papers", topic.pk, len(papers))
        return PipelineResult(
            topic_id=str(topic.pk),
            status=str(topic.status),
            domain=domain,
            papers_found=len(papers),
            gaps_identified=len(gaps),
        )
