from django.urls import path

from research_pipeline import views

app_name = "research_pipeline"

urlpatterns = [
    path("research-workflow/", views.research_workflow, name="research-workflow"),
    path("topics/", views.topic_list, name="topic-list"),
    path("topics/<uuid:topic_id>/", views.topic_detail, name="topic-detail"),
]
