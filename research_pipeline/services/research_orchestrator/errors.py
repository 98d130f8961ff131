class PipelineStageError(Exception):
    """Raised when a pipeline stage fails; carries the stage the topic was in."""

    def __init__(self, stage: str, original_error: Exception):
        self.stage = stage
        self.original_error = original_error
        super().__init__(f"{stage} stage failed: {original_error}")


class TopicInProgressError(Exception):
    """Raised when a topic is already being processed by another run."""

    def __init__(self, topic_id):
        self.topic_id = topic_id
        super().__init__(f"Topic {topic_id} is already being processed")
