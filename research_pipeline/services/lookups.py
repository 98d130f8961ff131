"""Fixed lookup tables shared by the search and scoring stages.

Loaded once at import; all mappings are read-only.
"""

from types import MappingProxyType

GENERAL_DOMAIN = "general"

# domain tag -> lowercase trigger phrases, in detection priority order
DOMAIN_TRIGGERS = MappingProxyType({
    "machine-learning": (
        "machine learning", "deep learning", "neural network", "reinforcement learning",
        "artificial intelligence", "transformer", "supervised", "unsupervised",
    ),
    "computer-vision": (
        "computer vision", "image", "object detection", "segmentation", "video", "visual",
    ),
    "natural-language-processing": (
        "natural language", "nlp", "language model", "text", "translation", "speech",
    ),
    "robotics": (
        "robot", "robotics", "autonomous", "manipulation", "navigation", "control system",
    ),
    "quantum-computing": (
        "quantum", "qubit", "quantum computing", "entanglement", "quantum algorithm",
    ),
    "biomedical": (
        "healthcare", "medical", "clinical", "disease", "genomics", "protein", "drug", "patient",
    ),
    "climate-science": (
        "climate", "weather", "carbon", "emission", "renewable energy", "sustainability",
    ),
    "cybersecurity": (
        "security", "privacy", "attack", "malware", "cryptography", "intrusion",
    ),
    "finance": (
        "finance", "financial", "economic", "market", "trading", "stock",
    ),
    "astrophysics": (
        "astrophysics", "galaxy", "cosmology", "dark matter", "black hole", "stellar",
    ),
})

# domain tag -> arXiv category prefixes a paper's category must start with
DOMAIN_CATEGORIES = MappingProxyType({
    "machine-learning": ("cs.LG", "stat.ML", "cs.AI", "cs.NE"),
    "computer-vision": ("cs.CV", "eess.IV"),
    "natural-language-processing": ("cs.CL",),
    "robotics": ("cs.RO", "eess.SY"),
    "quantum-computing": ("quant-ph",),
    "biomedical": ("q-bio", "physics.med-ph"),
    "climate-science": ("physics.ao-ph", "physics.geo-ph"),
    "cybersecurity": ("cs.CR",),
    "finance": ("q-fin", "econ"),
    "astrophysics": ("astro-ph", "gr-qc"),
})

METHODOLOGY_TERMS = ("framework", "method", "approach")

# domain tag -> application contexts appended to the topic when searching
APPLICATION_CONTEXTS = MappingProxyType({
    "machine-learning": ("applications", "benchmark", "optimization"),
    "computer-vision": ("recognition", "detection", "medical imaging"),
    "natural-language-processing": ("language understanding", "generation", "dialogue"),
    "robotics": ("control", "planning", "human-robot interaction"),
    "quantum-computing": ("error correction", "simulation", "hardware"),
    "biomedical": ("diagnosis", "treatment", "clinical trials"),
    "climate-science": ("modeling", "prediction", "mitigation"),
    "cybersecurity": ("detection", "defense", "vulnerability"),
    "finance": ("risk", "forecasting", "portfolio"),
    "astrophysics": ("observation", "simulation", "survey"),
})

GENERIC_CONTEXTS = ("applications", "survey", "challenges")

MAX_QUERIES = 7
