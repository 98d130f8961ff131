import json

import pytest
from django.test import Client
from django.urls import reverse
from research_pipeline import views
from research_pipeline.models import Paper, Proposal, ResearchGap, Summary, Topic, TopicStatus
from research_pipeline.services.enums import PipelineResult
from research_pipeline.services.research_orchestrator.agent import ResearchOrchestrator
from research_pipeline.services.research_orchestrator.errors import PipelineStageError

WORKFLOW_URL = "/api/research-workflow/"
TOPICS_URL = "/api/topics/"


def post_json(client, url, payload):
    return client.post(url, data=json.dumps(payload), content_type="application/json")


@pytest.fixture
def fake_run(monkeypatch):
    """Stub the orchestrator to complete instantly with a fixed paper count."""

    def _run(self, topic_id):
        Topic.objects.filter(pk=topic_id).update(status=TopicStatus.COMPLETED)
        return PipelineResult(
            topic_id=str(topic_id), status="completed", domain="general", papers_found=4, gaps_identified=7
        )

    monkeypatch.setattr(ResearchOrchestrator, "run", _run)


# === Trigger endpoint ===


@pytest.mark.django_db
def test_workflow_reports_papers_found(client, user, make_topic, fake_run) -> None:
    topic = make_topic()
    client.force_login(user)

    response = post_json(client, WORKFLOW_URL, {"topicId": str(topic.pk)})

    assert response.status_code == 200
    assert response.json() == {"success": True, "papersFound": 4}


@pytest.mark.django_db
@pytest.mark.parametrize("body", [{}, {"topicId": ""}, {"topic_id": None}])
def test_workflow_rejects_missing_topic_id(client, user, body) -> None:
    client.force_login(user)
    response = post_json(client, WORKFLOW_URL, body)

    assert response.status_code == 400
    assert response.json() == {"error": "Topic ID is required"}


@pytest.mark.django_db
def test_workflow_rejects_malformed_body(client, user) -> None:
    client.force_login(user)
    response = client.post(WORKFLOW_URL, data="not json", content_type="application/json")

    assert response.status_code == 400


@pytest.mark.django_db
@pytest.mark.parametrize("topic_id", ["00000000-0000-0000-0000-000000000000", "not-a-uuid"])
def test_workflow_unknown_topic_is_404(client, user, topic_id) -> None:
    client.force_login(user)
    response = post_json(client, WORKFLOW_URL, {"topicId": topic_id})

    assert response.status_code == 404
    assert response.json() == {"error": "Topic not found"}


@pytest.mark.django_db
def test_workflow_pipeline_error_is_500(client, user, make_topic, monkeypatch, caplog) -> None:
    topic = make_topic()
    client.force_login(user)

    def failing_run(self, topic_id):
        raise PipelineStageError("searching", RuntimeError("database is locked"))

    monkeypatch.setattr(ResearchOrchestrator, "run", failing_run)
    caplog.set_level("ERROR")

    response = post_json(client, WORKFLOW_URL, {"topicId": str(topic.pk)})

    assert response.status_code == 500
    assert response.json() == {"error": "searching stage failed: database is locked"}
    assert "Error in research workflow" in caplog.text


@pytest.mark.django_db
def test_workflow_answers_cors_preflight(client) -> None:
    response = client.options(
        WORKFLOW_URL,
        HTTP_ORIGIN="http://localhost:5173",
        HTTP_ACCESS_CONTROL_REQUEST_METHOD="POST",
        HTTP_ACCESS_CONTROL_REQUEST_HEADERS="content-type, authorization",
    )

    assert response.status_code == 200
    assert response["Access-Control-Allow-Origin"] == "*"
    assert "POST" in response["Access-Control-Allow-Methods"]


def test_workflow_rejects_get(client) -> None:
    assert client.get(WORKFLOW_URL).status_code == 405


@pytest.fixture
def completed_topic(make_topic):
    """A finished topic owned by ``user`` with a paper and a summary."""
    topic = make_topic(status=TopicStatus.COMPLETED)
    Paper.objects.create(topic=topic, title="Owner's paper")
    Summary.objects.create(topic=topic, content="owner's summary")
    return topic


def assert_untouched(topic, status=TopicStatus.COMPLETED) -> None:
    topic.refresh_from_db()
    assert topic.status == status
    assert list(topic.papers.values_list("title", flat=True)) == ["Owner's paper"]
    assert Summary.objects.get(topic=topic).content == "owner's summary"


@pytest.mark.django_db
def test_workflow_requires_login(client, completed_topic) -> None:
    response = post_json(client, WORKFLOW_URL, {"topicId": str(completed_topic.pk)})

    assert response.status_code == 401
    assert_untouched(completed_topic)


@pytest.mark.django_db
def test_workflow_other_user_gets_404(client, other_user, completed_topic) -> None:
    client.force_login(other_user)

    response = post_json(client, WORKFLOW_URL, {"topicId": str(completed_topic.pk)})

    assert response.status_code == 404
    assert response.json() == {"error": "Topic not found"}
    assert_untouched(completed_topic)


@pytest.mark.django_db
def test_workflow_refuses_topic_already_running(client, user, completed_topic) -> None:
    """A second trigger while a run holds the topic is rejected and changes nothing."""
    # Arrange
    Topic.objects.filter(pk=completed_topic.pk).update(status=TopicStatus.ANALYZING)
    client.force_login(user)

    # Act
    response = post_json(client, WORKFLOW_URL, {"topicId": str(completed_topic.pk)})

    # Assert
    assert response.status_code == 409
    assert "already being processed" in response.json()["error"]
    assert_untouched(completed_topic, status=TopicStatus.ANALYZING)


# === Topic endpoints ===


@pytest.mark.django_db
def test_topic_endpoints_require_login(client, make_topic) -> None:
    topic = make_topic()

    assert client.get(TOPICS_URL).status_code == 401
    assert client.delete(reverse("research_pipeline:topic-detail", args=[topic.pk])).status_code == 401
    assert Topic.objects.filter(pk=topic.pk).exists()


@pytest.mark.django_db
def test_create_topic_dispatches_pipeline(client, user, monkeypatch, django_capture_on_commit_callbacks) -> None:
    dispatched = []
    monkeypatch.setattr(views, "dispatch_pipeline", dispatched.append)
    client.force_login(user)

    with django_capture_on_commit_callbacks(execute=True):
        response = post_json(client, TOPICS_URL, {"topic": "  Graph neural networks  "})

    assert response.status_code == 201
    data = response.json()
    assert data["topic"] == "Graph neural networks"
    assert data["status"] == "pending"
    topic = Topic.objects.get(pk=data["id"])
    assert topic.owner == user
    assert dispatched == [topic.pk]


@pytest.mark.django_db
def test_create_topic_rejects_blank_text(client, user) -> None:
    client.force_login(user)

    response = post_json(client, TOPICS_URL, {"topic": "   "})

    assert response.status_code == 400
    assert Topic.objects.count() == 0


@pytest.mark.django_db
def test_create_topic_waits_for_commit_before_dispatch(
    client, user, monkeypatch, django_capture_on_commit_callbacks
) -> None:
    dispatched = []
    monkeypatch.setattr(views, "dispatch_pipeline", dispatched.append)
    client.force_login(user)

    with django_capture_on_commit_callbacks(execute=False) as callbacks:
        response = post_json(client, TOPICS_URL, {"topic": "quantum computing"})

    assert response.status_code == 201
    assert dispatched == []
    assert len(callbacks) == 1

    callbacks[0]()
    assert dispatched == [Topic.objects.get().pk]


@pytest.mark.django_db
def test_create_topic_runs_inline(client, user, fake_run, django_capture_on_commit_callbacks) -> None:
    client.force_login(user)

    with django_capture_on_commit_callbacks(execute=True):
        response = post_json(client, TOPICS_URL, {"topic": "quantum computing"})

    # the run starts once the request transaction commits
    assert response.status_code == 201
    assert response.json()["status"] == "pending"
    assert Topic.objects.get().status == TopicStatus.COMPLETED


@pytest.mark.django_db
def test_session_views_enforce_csrf(user, make_topic) -> None:
    topic = make_topic()
    csrf_client = Client(enforce_csrf_checks=True)
    csrf_client.force_login(user)

    assert post_json(csrf_client, TOPICS_URL, {"topic": "graph neural networks"}).status_code == 403
    assert csrf_client.delete(reverse("research_pipeline:topic-detail", args=[topic.pk])).status_code == 403
    assert Topic.objects.count() == 1


@pytest.mark.django_db
def test_list_only_returns_own_topics(client, user, other_user, make_topic) -> None:
    mine = make_topic("mine")
    make_topic("theirs", owner=other_user)
    client.force_login(user)

    response = client.get(TOPICS_URL)

    assert response.status_code == 200
    assert [topic["id"] for topic in response.json()["topics"]] == [str(mine.pk)]


@pytest.mark.django_db
def test_topic_detail_includes_derived_rows(client, user, make_topic) -> None:
    topic = make_topic(status=TopicStatus.COMPLETED)
    Paper.objects.create(topic=topic, title="A paper", authors=["A. Author"], relevance_score=20)
    Summary.objects.create(topic=topic, content="summary text")
    ResearchGap.objects.create(topic=topic, description="gap", priority="high", supporting_papers=["A paper"])
    Proposal.objects.create(topic=topic, title="Research Proposal: Advancing quantum computing", content="# ...")
    client.force_login(user)

    data = client.get(reverse("research_pipeline:topic-detail", args=[topic.pk])).json()

    assert data["status"] == "completed"
    assert data["stale"] is False
    assert data["papers"][0]["title"] == "A paper"
    assert data["papers"][0]["published_date"] is None
    assert data["summary"]["content"] == "summary text"
    assert data["gaps"][0]["supporting_papers"] == ["A paper"]
    assert data["proposal"]["title"] == "Research Proposal: Advancing quantum computing"


@pytest.mark.django_db
def test_topic_detail_before_any_stage(client, user, make_topic) -> None:
    topic = make_topic()
    client.force_login(user)

    data = client.get(reverse("research_pipeline:topic-detail", args=[topic.pk])).json()

    assert data["papers"] == [] and data["gaps"] == []
    assert data["summary"] is None and data["proposal"] is None


@pytest.mark.django_db
def test_owner_delete_cascades(client, user, make_topic) -> None:
    topic = make_topic()
    Paper.objects.create(topic=topic, title="A paper")
    Summary.objects.create(topic=topic, content="summary")
    ResearchGap.objects.create(topic=topic, description="gap")
    Proposal.objects.create(topic=topic, title="t", content="c")
    client.force_login(user)

    response = client.delete(reverse("research_pipeline:topic-detail", args=[topic.pk]))

    assert response.status_code == 200
    assert not Topic.objects.exists()
    assert Paper.objects.count() == Summary.objects.count() == ResearchGap.objects.count() == Proposal.objects.count() == 0


@pytest.mark.django_db
def test_other_user_cannot_read_or_delete(client, other_user, make_topic) -> None:
    topic = make_topic()
    Paper.objects.create(topic=topic, title="A paper")
    client.force_login(other_user)
    url = reverse("research_pipeline:topic-detail", args=[topic.pk])

    assert client.get(url).status_code == 404
    assert client.delete(url).status_code == 404
    assert Topic.objects.filter(pk=topic.pk).exists()
    assert Paper.objects.filter(topic=topic).count() == 1
