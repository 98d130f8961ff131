from datetime import date

import pytest
from research_pipeline.models import Topic
from research_pipeline.services.enums import PaperData

FEED_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom" xmlns:arxiv="http://arxiv.org/schemas/atom">
  <title type="html">ArXiv Query</title>
  {entries}
</feed>"""


def build_entry(
    title,
    abstract="",
    authors=("Ada Lovelace",),
    pdf_url="http://arxiv.org/pdf/2101.00001v1",
    published="2021-01-05T18:00:00Z",
    category="cs.LG",
):
    parts = [
        "<entry>",
        "<id>http://arxiv.org/abs/2101.00001v1</id>",
        f"<title>{title}</title>",
        f"<summary>{abstract}</summary>",
    ]
    if published:
        parts.append(f"<published>{published}</published>")
    parts += [f"<author><name>{name}</name></author>" for name in authors]
    parts.append('<link href="http://arxiv.org/abs/2101.00001v1" rel="alternate" type="text/html"/>')
    if pdf_url:
        parts.append(f'<link title="pdf" href="{pdf_url}" rel="related" type="application/pdf"/>')
    if category:
        parts.append(f'<arxiv:primary_category term="{category}" scheme="http://arxiv.org/schemas/atom"/>')
        parts.append(f'<category term="{category}" scheme="http://arxiv.org/schemas/atom"/>')
    parts.append("</entry>")
    return "\n".join(parts)


@pytest.fixture
def arxiv_feed():
    """Build an arXiv Atom feed body from entry dicts."""

    def _feed(*entries):
        return FEED_TEMPLATE.format(entries="\n".join(build_entry(**entry) for entry in entries))

    return _feed


@pytest.fixture(autouse=True)
def pipeline_settings(settings):
    settings.RESEARCH_RUN_INLINE = True
    settings.ARXIV_API_URL = "https://export.arxiv.org/api/query"
    settings.ARXIV_TIMEOUT_SECONDS = 5
    settings.ARXIV_MAX_CONCURRENCY = 2
    settings.RESEARCH_STALE_AFTER_MINUTES = 15
    return settings


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username="researcher", password="secret")


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user(username="intruder", password="secret")


@pytest.fixture
def make_topic(user):
    def _make(text="quantum computing", owner=None, **fields):
        return Topic.objects.create(owner=owner or user, text=text, **fields)

    return _make


@pytest.fixture
def sample_papers():
    return [
        PaperData(
            title="Quantum error correction with surface codes",
            abstract=(
                "We address the problem of logical error rates in noisy quantum hardware. "
                "Our approach uses a decoder based on minimum weight matching. "
                "Experiments on a simulation benchmark show a tenfold improvement in fidelity. "
                "Scaling to larger code distances remains future work."
            ),
            authors=["Alice Smith", "Bob Jones", "Carol White", "Dan Brown"],
            url="http://arxiv.org/pdf/2101.00001v1",
            published_date=date(2021, 1, 5),
            category="quant-ph",
            relevance_score=43,
        ),
        PaperData(
            title="Variational algorithms for quantum chemistry",
            abstract=(
                "Variational quantum eigensolvers are a promising tool for near-term devices. "
                "We develop an ansatz using hardware-efficient layers. "
                "Results on molecular hydrogen demonstrate chemical accuracy."
            ),
            authors=["Eve Black"],
            url=None,
            published_date=None,
            category="quant-ph",
            relevance_score=28,
        ),
    ]
