import uuid
from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone


class TopicStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    SEARCHING = "searching", "Searching"
    ANALYZING = "analyzing", "Analyzing"
    REFINING = "refining", "Refining"
    COMPLETED = "completed", "Completed"
    FAILED = "failed", "Failed"


TERMINAL_STATUSES = (TopicStatus.COMPLETED, TopicStatus.FAILED)


class Topic(models.Model):
    id          = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner       = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="research_topics")
    text        = models.TextField()
    domain      = models.CharField(max_length=64, blank=True, default="")
    status      = models.CharField(max_length=16, choices=TopicStatus.choices, default=TopicStatus.PENDING)
    created_at  = models.DateTimeField(auto_now_add=True)
    updated_at  = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ("-created_at",)

    def __str__(self):
        return self.text

    def set_status(self, status: str, **fields) -> None:
        """Write a new status and bump updated_at; extra fields are saved alongside."""
        self.status = status
        self.updated_at = timezone.now()
        for name, value in fields.items():
            setattr(self, name, value)
        self.save(update_fields=["status", "updated_at", *fields])

    def is_stale(self, now=None, minutes: int | None = None) -> bool:
        """A non-terminal topic that has not advanced within the staleness window."""
        if self.status in TERMINAL_STATUSES:
            return False
        now = now or timezone.now()
        if minutes is None:
            minutes = settings.RESEARCH_STALE_AFTER_MINUTES
        return now - self.updated_at > timedelta(minutes=minutes)


class Paper(models.Model):
    id              = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    topic           = models.ForeignKey(Topic, on_delete=models.CASCADE, related_name="papers")
    title           = models.TextField()
    authors         = models.JSONField(default=list)   # ordered author names
    abstract        = models.TextField(blank=True, default="")
    url             = models.URLField(max_length=500, null=True, blank=True)
    published_date  = models.DateField(null=True, blank=True)
    source          = models.CharField(max_length=32, default="arXiv")
    category        = models.CharField(max_length=32, null=True, blank=True)
    relevance_score = models.IntegerField(default=0)
    position        = models.PositiveIntegerField(default=0)
    created_at      = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("position",)

    def __str__(self):
        return self.title


class Summary(models.Model):
    id          = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    topic       = models.OneToOneField(Topic, on_delete=models.CASCADE, related_name="summary")
    content     = models.TextField()
    created_at  = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = "Summaries"


class GapPriority(models.TextChoices):
    HIGH = "high", "High"
    MEDIUM = "medium", "Medium"
    LOW = "low", "Low"


class ResearchGap(models.Model):
    id                = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    topic             = models.ForeignKey(Topic, on_delete=models.CASCADE, related_name="gaps")
    description       = models.TextField()
    priority          = models.CharField(max_length=8, choices=GapPriority.choices, default=GapPriority.MEDIUM)
    supporting_papers = models.JSONField(default=list)   # paper titles
    position          = models.PositiveIntegerField(default=0)
    created_at        = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("position",)


class Proposal(models.Model):
    id          = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    topic       = models.OneToOneField(Topic, on_delete=models.CASCADE, related_name="proposal")
    title       = models.TextField()
    content     = models.TextField()
    created_at  = models.DateTimeField(auto_now_add=True)
