import logging
from concurrent.futures import Future, ThreadPoolExecutor

from django.conf import settings
from django.db import connection
from research_pipeline.services.research_orchestrator.agent import ResearchOrchestrator
from research_pipeline.services.research_orchestrator.errors import PipelineStageError, TopicInProgressError

logger = logging.getLogger(__name__)

_executor: ThreadPoolExecutor | None = None


def _get_executor() -> ThreadPoolExecutor:
    """Get or create the process-wide pipeline worker pool."""
    global _executor
    if _executor is None:
        _executor = ThreadPoolExecutor(
            max_workers=settings.RESEARCH_MAX_WORKERS,
            thread_name_prefix="research-pipeline",
        )
    return _executor


def run_pipeline(topic_id) -> bool:
    """Run one topic to completion. Failures are already recorded on the topic."""
    try:
        ResearchOrchestrator().run(topic_id)
        return True
    except TopicInProgressError as e:
        logger.warning("Skipping pipeline run: %s", str(e))
        return False
    except PipelineStageError as e:
        logger.error("Pipeline for topic %s failed: %s", topic_id, str(e))
        return False


def _run_in_worker(topic_id) -> bool:
    try:
        return run_pipeline(topic_id)
    except Exception:
        # nobody reads the future, so this is the only place the error surfaces
        logger.exception("Unexpected error running pipeline for topic %s", topic_id)
        return False
    finally:
        # worker threads get their own connection; don't leak it
        connection.close()


def dispatch_pipeline(topic_id) -> Future | None:
    """
    Start the pipeline for a topic without waiting for it. With
    RESEARCH_RUN_INLINE the run happens synchronously instead.
    """
    if settings.RESEARCH_RUN_INLINE:
        run_pipeline(topic_id)
        return None

    logger.info("Dispatching research pipeline for topic %s", topic_id)
    return _get_executor().submit(_run_in_worker, topic_id)
