import argparse
import logging

from research_pipeline.models import Topic, TopicStatus
from research_pipeline.services.research_orchestrator.agent import ResearchOrchestrator
from research_pipeline.services.research_orchestrator.errors import PipelineStageError, TopicInProgressError
from django.core.management.base import BaseCommand
from tqdm import tqdm

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Run the research pipeline synchronously for pending topics"

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "--topic-id",
            action="append",
            dest="topic_ids",
            default=[],
            help="Only process this topic (repeatable)",
        )
        parser.add_argument(
            "--include-failed",
            action="store_true",
            help="Also re-run topics whose last run failed",
        )

    def get_topics(self, topic_ids, include_failed):
        if topic_ids:
            return Topic.objects.filter(pk__in=topic_ids).order_by("created_at")

        statuses = [TopicStatus.PENDING]
        if include_failed:
            statuses.append(TopicStatus.FAILED)
        return Topic.objects.filter(status__in=statuses).order_by("created_at")

    def process_topic(self, orchestrator: ResearchOrchestrator, topic: Topic) -> bool:
        """Run a single topic; the orchestrator has already marked it failed on error."""
        try:
            result = orchestrator.run(topic.pk)
            logger.info("Topic %s completed with %d papers", topic.pk, result.papers_found)
            return True
        except TopicInProgressError as e:
            logger.warning("Skipping topic %s: %s", topic.pk, str(e))
            self.stdout.write(self.style.WARNING(f"Skipped topic {topic.pk}: already being processed"))
            return False
        except PipelineStageError as e:
            logger.error("Error processing topic %s: %s", topic.pk, str(e))
            self.stdout.write(self.style.ERROR(f"Failed on topic {topic.pk}: {e}"))
            return False

    def handle(self, *args, **options):
        orchestrator = ResearchOrchestrator()
        topics = self.get_topics(options["topic_ids"], options["include_failed"])
        total = topics.count()

        if not total:
            msg = "No topics found requiring processing"
            logger.info(msg)
            self.stdout.write(self.style.SUCCESS(msg))
            return

        self.stdout.write(f"Processing {total} topics...")
        successful = 0
        for topic in tqdm(list(topics), total=total, desc="Running pipeline"):
            if self.process_topic(orchestrator, topic):
                successful += 1

        logger.info("Completed pipeline runs. Success: %s/%s", successful, total)
        self.stdout.write(self.style.SUCCESS(f"Pipeline complete: {successful}/{total} topics processed"))
