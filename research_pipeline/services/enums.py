from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PaperData(BaseModel):
    title: str
    abstract: str = ""
    authors: list[str] = Field(default_factory=list)
    url: str | None = None
    published_date: date | None = None
    category: str | None = None
    source: str = "arXiv"
    relevance_score: int = 0


class Analysis(BaseModel):
    paper_title: str
    problem: str
    methodology: str
    data_type: str
    key_results: str
    limitations: str
    relevance_score: int = 0


class GapData(BaseModel):
    description: str
    priority: str
    supporting_papers: list[str] = Field(default_factory=list)


class ProposalDraft(BaseModel):
    title: str
    content: str


class PipelineResult(BaseModel):
    topic_id: str
    status: str
    domain: str
    papers_found: int
    gaps_identified: int


class TriggerRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    topic_id: str = Field(alias="topicId", min_length=1)


class TopicRequest(BaseModel):
    topic: str

    @field_validator("topic")
    @classmethod
    def topic_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Topic text is required")
        return value


class ArxivURLs:
    QUERY_URL = "https://export.arxiv.org/api/query"


class AtomNS:
    ATOM = "http://www.w3.org/2005/Atom"
    ARXIV = "http://arxiv.org/schemas/atom"
    MAP = {"atom": ATOM, "arxiv": ARXIV}
