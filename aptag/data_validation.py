# aptag/data_validation.py

from __future__ import annotations
from typing import Any, Dict, List, Optional, Sequence

from .errors import InputContractError
from .types import TaggedSentence


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _word_issue(word: Any, where: str, **location: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(word, str):
        return {
            "type": "malformed_word_error",
            **location,
            "message": f"Word {word!r} at {where} is not a string.",
        }
    if not word:
        return {
            "type": "empty_word_error",
            **location,
            "message": f"Empty word at {where}.",
        }
    return None


def validate_tagged_corpus(sentences: Sequence[TaggedSentence]) -> Dict[str, Any]:
    """
    Performs sanity checks on a training corpus without modifying it.

    The corpus must hold at least one sentence, every sentence at least one
    pair, and every pair exactly two non-empty strings: the word and its tag.

    Args:
        sentences: The candidate training corpus.

    Returns:
        A dictionary summarizing the validation results, containing the total
        `issue_count` and a list of `issues`, where each issue is a dictionary
        detailing the problem.
    """
    issues: List[Dict[str, Any]] = []

    if not _is_sequence(sentences):
        issues.append({
            "type": "malformed_corpus_error",
            "message": f"Expected a sequence of sentences, got {type(sentences).__name__}.",
        })
        return {"issue_count": len(issues), "issues": issues}

    if not sentences:
        issues.append({"type": "empty_corpus_error", "message": "The training corpus has no sentences."})

    for i, sentence in enumerate(sentences):
        if not _is_sequence(sentence):
            issues.append({
                "type": "malformed_sentence_error",
                "sentence": i,
                "message": f"Sentence {i} is not a sequence of (word, tag) pairs.",
            })
            continue
        if not sentence:
            issues.append({
                "type": "empty_sentence_error",
                "sentence": i,
                "message": f"Sentence {i} is empty.",
            })
            continue

        for j, pair in enumerate(sentence):
            if not _is_sequence(pair) or len(pair) != 2:
                issues.append({
                    "type": "malformed_pair_error",
                    "sentence": i,
                    "idx": j,
                    "message": f"Item {j} of sentence {i} is not a (word, tag) pair: {pair!r}.",
                })
                continue

            word, tag = pair
            issue = _word_issue(word, f"index {j} of sentence {i}", sentence=i, idx=j)
            if issue:
                issues.append(issue)
            if not isinstance(tag, str) or not tag:
                issues.append({
                    "type": "empty_label_error",
                    "sentence": i,
                    "idx": j,
                    "message": f"Word {word!r} at index {j} of sentence {i} has an invalid tag {tag!r}.",
                })

    return {"issue_count": len(issues), "issues": issues}


def validate_words(words: Sequence[str]) -> Dict[str, Any]:
    """
    Performs sanity checks on a tokenized sentence passed for tagging.

    Args:
        words: The words to tag. An empty sentence is valid.

    Returns:
        A dictionary with the `issue_count` and the list of `issues`.
    """
    issues: List[Dict[str, Any]] = []

    if not _is_sequence(words):
        issues.append({
            "type": "malformed_sentence_error",
            "message": f"Expected a sequence of words, got {type(words).__name__}.",
        })
    else:
        for i, word in enumerate(words):
            issue = _word_issue(word, f"index {i}", idx=i)
            if issue:
                issues.append(issue)

    return {"issue_count": len(issues), "issues": issues}


def _raise_first(report: Dict[str, Any]) -> None:
    if report["issue_count"]:
        first = report["issues"][0]
        more = report["issue_count"] - 1
        suffix = f" ({more} more issue{'s' if more != 1 else ''})" if more else ""
        raise InputContractError(first["message"] + suffix)


def check_tagged_corpus(sentences: Sequence[TaggedSentence]) -> None:
    """Raises `InputContractError` unless the training corpus is valid."""
    _raise_first(validate_tagged_corpus(sentences))


def check_words(words: Sequence[str]) -> None:
    """Raises `InputContractError` unless the sentence can be tagged."""
    _raise_first(validate_words(words))
