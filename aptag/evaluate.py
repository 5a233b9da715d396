# aptag/evaluate.py
"""Compares predicted tags against a reference corpus.

`compare_tags` aligns generated and reference sentences token by token and
reports overall accuracy, precision/recall/F1 per tag and the full list of
disagreements, which is the main input for error analysis.
"""
from __future__ import annotations
from typing import Any, Dict, List, Sequence

import numpy as np
import pandas as pd

from .types import TaggedSentence

COLUMNS = ["sentence", "index", "token", "generated", "reference"]


def _safe_divide(num: np.ndarray, den: np.ndarray) -> np.ndarray:
    return np.divide(num, den, out=np.zeros(len(num), dtype=float), where=den > 0)


def compare_tags(generated: Sequence[TaggedSentence], reference: Sequence[TaggedSentence]) -> Dict[str, Any]:
    """
    Scores generated tags against reference tags.

    Args:
        generated: The tagger's output, as `(word, tag)` sentences.
        reference: The gold sentences, aligned with `generated`.

    Returns:
        A dictionary with the token `accuracy`, per-tag `scores` (precision,
        recall, f1 and support) and the list of `disagreements`.

    Raises:
        ValueError: If the two corpora do not contain the same sentences and
                    words, or if they are empty.
    """
    if len(generated) != len(reference):
        raise ValueError(
            f"Generated corpus has {len(generated)} sentences but the reference has {len(reference)}."
        )

    rows: List[tuple] = []
    for s_idx, (gen, ref) in enumerate(zip(generated, reference)):
        if len(gen) != len(ref):
            raise ValueError(f"Sentence {s_idx} has {len(gen)} generated tokens but {len(ref)} reference tokens.")
        for t_idx, ((gen_word, gen_tag), (ref_word, ref_tag)) in enumerate(zip(gen, ref)):
            if gen_word != ref_word:
                raise ValueError(
                    f"Token {t_idx} of sentence {s_idx} differs: {gen_word!r} vs reference {ref_word!r}."
                )
            rows.append((s_idx, t_idx, gen_word, gen_tag, ref_tag))

    df = pd.DataFrame(rows, columns=COLUMNS)
    if df.empty:
        raise ValueError("There are no tokens to compare.")

    correct = df["generated"] == df["reference"]
    labels = sorted(set(df["generated"]) | set(df["reference"]))

    counts = pd.DataFrame({
        "tp": df[correct].groupby("reference").size(),
        "predicted": df.groupby("generated").size(),
        "support": df.groupby("reference").size(),
    }).reindex(labels).fillna(0)

    tp = counts["tp"].to_numpy(dtype=float)
    precision = _safe_divide(tp, counts["predicted"].to_numpy(dtype=float))
    recall = _safe_divide(tp, counts["support"].to_numpy(dtype=float))
    f1 = _safe_divide(2 * precision * recall, precision + recall)

    scores = {
        label: {
            "precision": float(precision[i]),
            "recall": float(recall[i]),
            "f1": float(f1[i]),
            "support": int(counts["support"].iloc[i]),
        }
        for i, label in enumerate(labels)
    }

    return {
        "accuracy": float(correct.mean()),
        "scores": scores,
        "disagreements": df.loc[~correct, COLUMNS].to_dict("records"),
    }
