from django.contrib import admin
from .models import Paper, Proposal, ResearchGap, Summary, Topic


class PaperInline(admin.TabularInline):
    model = Paper
    fields = ("position", "title", "relevance_score", "category", "published_date")
    readonly_fields = fields
    extra = 0
    can_delete = False


class ResearchGapInline(admin.TabularInline):
    model = ResearchGap
    fields = ("position", "priority", "description")
    readonly_fields = fields
    extra = 0
    can_delete = False


@admin.register(Topic)
class TopicAdmin(admin.ModelAdmin):
    list_display = ("text", "owner", "domain", "status", "updated_at")
    search_fields = ("text", "owner__username")
    list_filter = ("status", "domain")
    readonly_fields = ("created_at", "updated_at")
    inlines = (PaperInline, ResearchGapInline)


@admin.register(Paper)
class PaperAdmin(admin.ModelAdmin):
    list_display = ("title", "topic", "relevance_score", "published_date", "source")
    search_fields = ("title", "topic__text")
    list_filter = ("source", "published_date")


@admin.register(Summary)
class SummaryAdmin(admin.ModelAdmin):
    list_display = ("topic", "created_at", "content_snippet")
    search_fields = ("topic__text", "content")
    list_filter = ("created_at",)

    def content_snippet(self, obj):
        return obj.content[:75] + ("…" if len(obj.content) > 75 else "")

    content_snippet.short_description = "Summary Text"


@admin.register(ResearchGap)
class ResearchGapAdmin(admin.ModelAdmin):
    list_display = ("topic", "priority", "position")
    search_fields = ("topic__text", "description")
    list_filter = ("priority",)


@admin.register(Proposal)
class ProposalAdmin(admin.ModelAdmin):
    list_display = ("title", "topic", "created_at")
    readonly_fields = ("created_at", "content")
    search_fields = ("title", "content")
    date_hierarchy = "created_at"
