"""Heuristic extraction of five structured fields from a paper abstract.

Matching is literal: keyword tables and first-match order define the output.
"""

import logging
import re

from research_pipeline.services import templates
from research_pipeline.services.enums import Analysis, PaperData

logger = logging.getLogger(__name__)

SENTENCE_SPLIT_RE = re.compile(r"[.!?]")
MIN_SENTENCE_LENGTH = 10
DATA_TYPE_WINDOW = 100

PROBLEM_KEYWORDS = ("problem", "challenge", "address", "propose", "develop")
METHODOLOGY_KEYWORDS = ("method", "approach", "algorithm", "model", "framework", "technique", "using", "based on")
DATA_TYPE_KEYWORDS = (
    "dataset", "benchmark", "corpus", "data", "real-world", "simulation", "synthetic", "image", "text", "time series",
)
RESULTS_KEYWORDS = ("result", "achieve", "improve", "outperform", "show", "demonstrate", "find", "observe")
LIMITATIONS_KEYWORDS = ("limitation", "challenge", "future", "remain", "not address", "extend", "scope")


def split_sentences(abstract: str) -> list[str]:
    sentences = (part.strip() for part in SENTENCE_SPLIT_RE.split(abstract or ""))
    return [sentence for sentence in sentences if len(sentence) > MIN_SENTENCE_LENGTH]


def first_sentence_with(sentences: list[str], keywords: tuple[str, ...]) -> str | None:
    for sentence in sentences:
        lowered = sentence.lower()
        if any(keyword in lowered for keyword in keywords):
            return sentence
    return None


def extract_problem(sentences: list[str]) -> str:
    match = first_sentence_with(sentences, PROBLEM_KEYWORDS)
    if match:
        return match
    return sentences[0] if sentences else templates.PROBLEM_FALLBACK


def extract_methodology(sentences: list[str]) -> str:
    match = first_sentence_with(sentences, METHODOLOGY_KEYWORDS)
    if match:
        return match
    return sentences[1] if len(sentences) > 1 else templates.METHODOLOGY_FALLBACK


def extract_data_type(abstract: str) -> str:
    # match on the original text; lower() can change the length of some characters
    for keyword in DATA_TYPE_KEYWORDS:
        match = re.search(re.escape(keyword), abstract, re.IGNORECASE)
        if match:
            window = abstract[match.start():match.start() + DATA_TYPE_WINDOW].strip()
            if window:
                return window
    return templates.DATA_TYPE_FALLBACK


def extract_results(sentences: list[str]) -> str:
    match = first_sentence_with(sentences, RESULTS_KEYWORDS)
    if match:
        return match
    return sentences[-1] if sentences else templates.RESULTS_FALLBACK


def extract_limitations(abstract: str) -> str:
    # names the keyword only, not the sentence it came from
    lowered = abstract.lower()
    for keyword in LIMITATIONS_KEYWORDS:
        if keyword in lowered:
            return templates.LIMITATIONS_TEMPLATE.format(keyword=keyword)
    return templates.LIMITATIONS_FALLBACK


def analyze_abstract(paper: PaperData) -> Analysis:
    abstract = paper.abstract or ""
    sentences = split_sentences(abstract)
    return Analysis(
        paper_title=paper.title,
        problem=extract_problem(sentences),
        methodology=extract_methodology(sentences),
        data_type=extract_data_type(abstract),
        key_results=extract_results(sentences),
        limitations=extract_limitations(abstract),
        relevance_score=paper.relevance_score,
    )


def analyze_papers(papers: list[PaperData]) -> list[Analysis]:
    analyses = [analyze_abstract(paper) for paper in papers]
    logger.info("Analyzed %d abstracts", len(analyses))
    return analyses
