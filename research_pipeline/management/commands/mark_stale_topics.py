import logging
from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand
from django.utils import timezone
from research_pipeline.models import TERMINAL_STATUSES, Topic, TopicStatus

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Mark topics that stopped advancing as failed"

    def add_arguments(self, parser):
        parser.add_argument(
            "--minutes",
            type=int,
            default=None,
            help="Minutes without a status update before a topic counts as stale",
        )

    def handle(self, *args, **options):
        minutes = options["minutes"]
        if minutes is None:
            minutes = settings.RESEARCH_STALE_AFTER_MINUTES
        cutoff = timezone.now() - timedelta(minutes=minutes)

        stale = Topic.objects.exclude(status__in=TERMINAL_STATUSES).filter(updated_at__lt=cutoff)
        marked = 0
        for topic in stale:
            logger.warning("Topic %s stuck in %s since %s, marking failed", topic.pk, topic.status, topic.updated_at)
            topic.set_status(TopicStatus.FAILED)
            marked += 1

        self.stdout.write(self.style.SUCCESS(f"Marked {marked} stale topics as failed"))
