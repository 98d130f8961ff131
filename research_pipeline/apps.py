from django.apps import AppConfig


class ResearchPipelineConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "research_pipeline"
    verbose_name = "Research pipeline"
