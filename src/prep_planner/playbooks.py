"""Discover markdown playbooks on disk and extract their metadata."""
import logging
import re
from pathlib import Path

from prep_planner.config import PLAYBOOKS_DIR
from prep_planner.models import Playbook

logger = logging.getLogger(__name__)

# Keyword mapping for auto-categorization
CATEGORY_KEYWORDS = {
    "Deep Learning": ["transformer", "attention", "backprop"],
    "LLM Applications": ["rag", "chatbot", "retrieval"],
    "Model Training": ["lora", "finetuning", "fine-tuning"],
    "Evaluation": ["evaluation", "benchmark"],
    "Prompt Engineering": ["prompt"],
    "Cloud & Infrastructure": ["cloud", "iam"],
    "DevOps": ["docker", "k8s", "kubernetes"],
    "Model Optimization": ["quantization", "pruning", "distillation"],
    "MLOps": ["monitoring", "mlflow"],
    "System Design": ["system_design", "system design"],
    "Career": ["portfolio", "resume"],
}

TECHNOLOGIES = [
    "pytorch", "tensorflow", "numpy", "pandas", "matplotlib", "scikit-learn",
    "langchain", "openai", "pinecone", "docker", "kubernetes", "aws", "gcp",
    "mlflow", "wandb", "transformers", "huggingface", "python", "fastapi",
    "flask", "redis", "postgresql",
]


def categorize_playbook(filename: str, text: str) -> str:
    """Pick the category whose keywords appear most; the filename counts double."""
    name = filename.lower()
    body = text.lower()
    scores = {
        category: sum(2 * (kw in name) + (kw in body) for kw in keywords)
        for category, keywords in CATEGORY_KEYWORDS.items()
    }
    best = max(scores, key=scores.get)
    return best if scores[best] > 0 else "General"


def parse_playbook(stem: str, content: str) -> Playbook:
    lines = content.splitlines()
    title_idx = next((i for i, line in enumerate(lines) if line.startswith("# ")), None)
    if title_idx is None:
        title = re.sub(r"^\d+_", "", stem).replace("_", " ")
        rest = lines
    else:
        title = lines[title_idx][2:].strip()
        rest = lines[title_idx + 1:]
    description = next(
        (line.strip() for line in rest if line.strip() and not line.startswith("#")),
        "No description available",
    )

    hours = re.search(r"(\d+)[\s-]*hours?", content, re.IGNORECASE)
    week = re.match(r"^(\d+)_", stem)
    lowered = content.lower()
    if "beginner" in lowered or "basic" in lowered:
        difficulty = "Beginner"
    elif "advanced" in lowered or "expert" in lowered:
        difficulty = "Advanced"
    else:
        difficulty = "Intermediate"

    return Playbook(
        id=stem,
        name=f"{stem}.md",
        title=title,
        description=description,
        category=categorize_playbook(stem, content),
        week=int(week.group(1)) if week else None,
        estimated_hours=int(hours.group(1)) if hours else 6,
        difficulty=difficulty,
        technologies=[t for t in TECHNOLOGIES if t in lowered],
        content=content,
    )


def load_playbook(stem: str, directory: Path = PLAYBOOKS_DIR) -> Playbook | None:
    path = Path(directory) / f"{stem.removesuffix('.md')}.md"
    if not path.is_file():
        logger.debug("Playbook not found: %s", path)
        return None
    return parse_playbook(path.stem, path.read_text(encoding="utf-8"))


def list_playbooks(directory: Path = PLAYBOOKS_DIR) -> list[Playbook]:
    """All playbooks, numbered ones by week first, then the rest by title."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    playbooks = [
        parse_playbook(p.stem, p.read_text(encoding="utf-8"))
        for p in sorted(directory.glob("*.md"))
        if not p.name.startswith(".")
    ]
    return sorted(
        playbooks,
        key=lambda pb: (pb.week is None, pb.week or 0, pb.title.lower()),
    )
