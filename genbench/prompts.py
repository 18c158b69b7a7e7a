"""
Prompt batches for the benchmark.
"""

from pathlib import Path
from typing import List

from genbench.core.errors import InvalidArgument

BASE_PROMPTS = [
    "My name is Thomas and my main",
    "The quick brown fox",
    "Once upon a time in a distant land",
    "Technology has revolutionized the way we",
    "In the depths of the ocean",
    "The scientist looked at the data and",
    "Climate change is affecting",
    "Artificial intelligence will transform",
    "The old library contained secrets",
    "Space exploration has revealed",
]


def build_prompts(base=None, repeat: int = 3) -> List[str]:
    """
    Repeat a base prompt set to get a bigger batch (30 prompts by default).
    """
    if base is None:
        base = BASE_PROMPTS
    if repeat < 1:
        raise InvalidArgument(f"repeat must be >= 1, got {repeat}")
    return list(base) * repeat


def load_prompts(path) -> List[str]:
    """
    Read prompts from a text file, one per line. Blank lines are skipped.
    """
    text = Path(path).read_text(encoding="utf-8")
    prompts = [line.strip() for line in text.splitlines() if line.strip()]
    if not prompts:
        raise InvalidArgument(f"No prompts found in {path}")
    return prompts
