# aptag/types.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Literal, Sequence, Tuple

__all__ = [
    "START",
    "END",
    "TaggedWord",
    "TaggedSentence",
    "Weights",
    "Features",
    "TaggerState",
    "TagDictionary",
]

START = ("-START-", "-START2-")
END = ("-END-", "-END2-")

TaggedWord = Tuple[str, str]
TaggedSentence = Sequence[TaggedWord]

Weights = Dict[str, Dict[str, float]]
Features = Dict[str, int]

TaggerState = Literal["untrained", "trained"]


@dataclass
class TagDictionary:
    """
    The result of a one-time scan over the training corpus.

    Attributes:
        classes: Every label seen in the corpus, in the order it was first
                 observed.
        tags: Fast-path mapping from frequent, nearly unambiguous words to
              their dominant label.
    """
    classes: List[str] = field(default_factory=list)
    tags: Dict[str, str] = field(default_factory=dict)
