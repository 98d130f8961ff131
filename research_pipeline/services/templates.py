"""Literal text templates for the generated documents.

Templates use Python format strings for variable substitution. Keep wording
changes here; the composers only choose which templates to render.
"""

# =============================================================================
# Abstract analysis fallbacks
# =============================================================================

PROBLEM_FALLBACK = "Problem not clearly stated"
METHODOLOGY_FALLBACK = "Methodology not specified"
DATA_TYPE_FALLBACK = "Data type not specified"
RESULTS_FALLBACK = "Results not specified"
LIMITATIONS_FALLBACK = "Limitations not explicitly mentioned"
LIMITATIONS_TEMPLATE = "The authors acknowledge open issues related to '{keyword}' that warrant further work"

# =============================================================================
# Literature summary
# =============================================================================

SUMMARY_NOT_FOUND = (
    'No papers were found for the research topic: "{topic}". '
    "Consider refining your search query or trying different keywords."
)

SUMMARY_HEADER = "Literature Summary ({domain})\nTopic: {topic}\n"

SUMMARY_LANDSCAPE = (
    "Research Landscape:\n"
    "This summary synthesizes {count} papers retrieved from arXiv for \"{topic}\". "
    "The papers have an average relevance score of {average:.1f}.\n"
)

SUMMARY_PROBLEMS_HEADING = "Problems Addressed:"
SUMMARY_METHODS_HEADING = "Methodological Approaches:"
SUMMARY_DATA_HEADING = "Data and Evaluation Settings:"
SUMMARY_FINDINGS_HEADING = "Empirical Findings:"
SUMMARY_LIMITATIONS_HEADING = "Reported Limitations:"

SUMMARY_ITEM = "{index}. {text}"
SUMMARY_ATTRIBUTED_ITEM = "{index}. {title}: {text}"

# =============================================================================
# Research gaps
# =============================================================================

GAP_TEMPLATES = (
    (
        "high",
        "Limited cross-domain transfer: current work on {topic} is concentrated in a narrow set of "
        "application settings, leaving its behaviour in adjacent domains largely unexplored.",
    ),
    (
        "high",
        "Methodological fragmentation: the reviewed literature relies on {method_count} distinct "
        "methodological approaches with little head-to-head comparison under shared conditions.",
    ),
    (
        "high",
        "Scalability to real-world settings: few studies on {topic} evaluate whether proposed "
        "approaches hold up at production scale or under realistic resource constraints.",
    ),
    (
        "medium",
        "Narrow evaluation data: only {data_count} distinct data settings are reported, which limits "
        "confidence that findings on {topic} generalize beyond the benchmarks used.",
    ),
    (
        "medium",
        "Reproducibility and standardization: research on {topic} lacks shared benchmarks, open "
        "artifacts and reporting standards that would make results directly comparable.",
    ),
    (
        "medium",
        "Theory-practice gap: the translation of {topic} research into deployed systems, including "
        "cost, integration and maintenance concerns, receives limited attention.",
    ),
    (
        "low",
        "Long-term impact: longitudinal studies of the sustainability and downstream effects of "
        "{topic} solutions are largely absent.",
    ),
)

# fixed windows over the relevance-ordered paper list, one per gap
GAP_SUPPORT_WINDOWS = (
    slice(0, 3),
    slice(2, 5),
    slice(4, 7),
    slice(6, 9),
    slice(8, 11),
    slice(1, 4),
    slice(3, 6),
)

# =============================================================================
# Research proposal
# =============================================================================

PROPOSAL_TITLE = "Research Proposal: Advancing {topic}"

PROPOSAL_EXECUTIVE_SUMMARY = (
    "## 1. Executive Summary\n\n"
    "This proposal outlines a research programme to advance {topic} by addressing gaps identified "
    "in the current literature. It builds on an analysis of {count} relevant publications in the "
    "{domain} domain and targets {high_count} high-priority gaps.\n"
)

PROPOSAL_BACKGROUND = (
    "## 2. Background and Literature Review\n\n"
    "{overview}\n"
)

PROPOSAL_BACKGROUND_EMPTY = (
    "No prior publications were retrieved for this topic, which itself suggests an under-explored "
    "area. The first phase of the project will therefore establish a baseline literature map."
)

PROPOSAL_KEY_PAPERS_HEADING = "Key publications informing this proposal:\n"
PROPOSAL_KEY_PAPER = "{index}. {title}{authors}"

PROPOSAL_GAPS_HEADING = (
    "## 3. Identified Research Gaps\n\n"
    "Systematic analysis of the literature surfaced the following gaps:\n"
)
PROPOSAL_GAP_ITEM = "{index}. **{priority} PRIORITY:** {description}"

PROPOSAL_OBJECTIVES = (
    "## 4. Research Objectives\n\n"
    "The primary objectives of this research are:\n\n"
    "- To develop solutions that address scalability challenges in {topic}\n"
    "- To create standardized benchmarks for evaluating approaches in this domain\n"
    "- To demonstrate practical applications across multiple settings\n"
    "- To evaluate the long-term impact and sustainability of the proposed solutions\n"
)

PROPOSAL_METHODOLOGY = (
    "## 5. Proposed Methodology\n\n"
    "This research will employ a mixed-methods approach:\n\n"
    "- **Phase 1 (Months 1-3):** Comprehensive literature review and gap analysis\n"
    "- **Phase 2 (Months 4-8):** Development of novel approaches and frameworks\n"
    "- **Phase 3 (Months 9-12):** Implementation and empirical evaluation\n"
    "- **Phase 4 (Months 13-15):** Analysis, refinement, and documentation\n"
)

PROPOSAL_CONTRIBUTIONS = (
    "## 6. Expected Contributions\n\n"
    "This research will contribute to the field by:\n\n"
    "- Providing new theoretical frameworks for {topic}\n"
    "- Developing practical tools and methodologies for real-world applications\n"
    "- Establishing standardized evaluation benchmarks\n"
    "- Demonstrating scalability and long-term viability\n"
)

PROPOSAL_TIMELINE = (
    "## 7. Timeline and Milestones\n\n"
    "- **Month 3:** Complete literature review and finalize research design\n"
    "- **Month 8:** Complete development of proposed solutions\n"
    "- **Month 12:** Finish implementation and initial evaluations\n"
    "- **Month 15:** Submit findings for publication and present at conferences\n"
)

PROPOSAL_CONCLUSION = (
    "## 8. Conclusion\n\n"
    "This proposal addresses critical gaps in {topic} and offers a comprehensive plan to advance "
    "the field. By bridging theoretical research with practical implementation, this work will "
    "provide valuable contributions to both academia and industry.\n"
)
