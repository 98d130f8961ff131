import logging
from functools import partial, wraps

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods
from pydantic import ValidationError
from research_pipeline.models import Topic
from research_pipeline.services.dispatch import dispatch_pipeline
from research_pipeline.services.enums import TopicRequest, TriggerRequest
from research_pipeline.services.research_orchestrator.agent import ResearchOrchestrator
from research_pipeline.services.research_orchestrator.errors import TopicInProgressError

logger = logging.getLogger(__name__)


def error_response(message: str, status: int) -> JsonResponse:
    return JsonResponse({"error": message}, status=status)


def api_login_required(view):
    """Like login_required, but answers 401 JSON instead of redirecting.

    CORS preflights carry no credentials and are let through.
    """

    @wraps(view)
    def wrapper(request, *args, **kwargs):
        if request.method != "OPTIONS" and not request.user.is_authenticated:
            return error_response("Authentication required", 401)
        return view(request, *args, **kwargs)

    return wrapper


def serialize_topic(topic: Topic) -> dict:
    return {
        "id": str(topic.pk),
        "topic": topic.text,
        "domain": topic.domain,
        "status": topic.status,
        "stale": topic.is_stale(),
        "created_at": topic.created_at.isoformat(),
        "updated_at": topic.updated_at.isoformat(),
    }


def serialize_topic_detail(topic: Topic) -> dict:
    data = serialize_topic(topic)
    data["papers"] = [
        {
            "id": str(paper.pk),
            "title": paper.title,
            "authors": paper.authors,
            "abstract": paper.abstract,
            "url": paper.url,
            "published_date": paper.published_date.isoformat() if paper.published_date else None,
            "source": paper.source,
            "category": paper.category,
            "relevance_score": paper.relevance_score,
        }
        for paper in topic.papers.all()
    ]
    summary = getattr(topic, "summary", None)
    data["summary"] = {"id": str(summary.pk), "content": summary.content} if summary else None
    data["gaps"] = [
        {
            "id": str(gap.pk),
            "description": gap.description,
            "priority": gap.priority,
            "supporting_papers": gap.supporting_papers,
        }
        for gap in topic.gaps.all()
    ]
    proposal = getattr(topic, "proposal", None)
    data["proposal"] = (
        {"id": str(proposal.pk), "title": proposal.title, "content": proposal.content} if proposal else None
    )
    return data


@csrf_exempt
@require_http_methods(["POST", "OPTIONS"])
@api_login_required
def research_workflow(request):
    """Run the whole pipeline for {"topicId": ...} and report how many papers were kept."""
    if request.method == "OPTIONS":
        return HttpResponse(status=200)

    try:
        payload = TriggerRequest.model_validate_json(request.body or b"{}")
    except ValidationError:
        return error_response("Topic ID is required", 400)

    try:
        topic = Topic.objects.get(pk=payload.topic_id, owner=request.user)
    except (Topic.DoesNotExist, DjangoValidationError):
        return error_response("Topic not found", 404)

    try:
        result = ResearchOrchestrator().run(topic.pk)
    except TopicInProgressError as e:
        return error_response(str(e), 409)
    except Exception as e:
        logger.exception("Error in research workflow for topic %s", payload.topic_id)
        return error_response(str(e), 500)

    return JsonResponse({"success": True, "papersFound": result.papers_found})


@require_http_methods(["GET", "POST"])
@api_login_required
def topic_list(request):
    if request.method == "GET":
        topics = Topic.objects.filter(owner=request.user)
        return JsonResponse({"topics": [serialize_topic(topic) for topic in topics]})

    try:
        payload = TopicRequest.model_validate_json(request.body or b"{}")
    except ValidationError:
        return error_response("Topic text is required", 400)

    topic = Topic.objects.create(owner=request.user, text=payload.topic)
    logger.info("Created topic %s for user %s", topic.pk, request.user.pk)
    # the worker must not start before the topic row is committed
    transaction.on_commit(partial(dispatch_pipeline, topic.pk))

    topic.refresh_from_db()
    return JsonResponse(serialize_topic(topic), status=201)


@require_http_methods(["GET", "DELETE"])
@api_login_required
def topic_detail(request, topic_id):
    try:
        topic = Topic.objects.get(pk=topic_id, owner=request.user)
    except Topic.DoesNotExist:
        return error_response("Topic not found", 404)

    if request.method == "DELETE":
        topic.delete()
        logger.info("Deleted topic %s for user %s", topic_id, request.user.pk)
        return JsonResponse({"success": True})

    return JsonResponse(serialize_topic_detail(topic))
