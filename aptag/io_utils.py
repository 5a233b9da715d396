# aptag/io_utils.py
"""Provides utility functions for loading and saving corpora and models.

Tagged corpora are read either from JSON, where the sentence list is stored
under a "sentences" key and every token is a `[word, tag]` pair, or from plain
text with one sentence per line and `word/TAG` tokens. Untagged input follows
the same layout without the tags. Trained models are stored as the JSON form
of `AveragedPerceptronTagger.to_dict`.
"""
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

from .config import Config
from .tagger import AveragedPerceptronTagger
from .types import TaggedSentence


def _read_json(path: str, kind: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"{kind} file not found at: {path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Error decoding JSON from {path}: {e}")


def _read_lines(path: str, kind: str) -> List[str]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return [line for line in f.read().splitlines() if line.strip()]
    except FileNotFoundError:
        raise FileNotFoundError(f"{kind} file not found at: {path}")


def _sentence_items(data: Any, path: str) -> list:
    items = data.get("sentences") if isinstance(data, dict) else None
    if not isinstance(items, list):
        raise TypeError(f"Expected a 'sentences' key with a list of sentences in {path}")
    return items


def load_tagged_sentences(path: str) -> List[List[Tuple[str, str]]]:
    """
    Loads a tagged corpus from a JSON or plain text file.

    Args:
        path: The path to the corpus. Files ending in `.json` are parsed as
              JSON; anything else is read as `word/TAG` text.

    Returns:
        A list of sentences, each a list of `(word, tag)` tuples.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the JSON is invalid or a text token has no tag.
        TypeError: If the JSON structure is incorrect.
    """
    if Path(path).suffix.lower() == ".json":
        out = []
        for i, sentence in enumerate(_sentence_items(_read_json(path, "Corpus"), path)):
            if not isinstance(sentence, list):
                raise TypeError(f"Sentence at index {i} in {path} is not a list.")
            pairs = []
            for j, pair in enumerate(sentence):
                if not isinstance(pair, list) or len(pair) != 2:
                    raise TypeError(f"Token {j} of sentence {i} in {path} is not a [word, tag] pair.")
                pairs.append((pair[0], pair[1]))
            out.append(pairs)
        return out

    out = []
    for line_no, line in enumerate(_read_lines(path, "Corpus"), start=1):
        pairs = []
        for token in line.split():
            word, sep, tag = token.rpartition("/")
            if not sep or not word or not tag:
                raise ValueError(f"Token {token!r} on line {line_no} of {path} is not in word/TAG form.")
            pairs.append((word, tag))
        out.append(pairs)
    return out


def save_tagged_sentences(path: str, sentences: Sequence[TaggedSentence]) -> None:
    """
    Saves tagged sentences to a JSON file.

    The root of the JSON is a dictionary with a single key, "sentences",
    holding one list of `[word, tag]` pairs per sentence.

    Args:
        path: The destination path for the output JSON file.
        sentences: The tagged sentences to save.
    """
    data = {"sentences": [[[word, tag] for word, tag in sentence] for sentence in sentences]}
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)


def load_sentences(path: str) -> List[List[str]]:
    """
    Loads untagged, already tokenized sentences.

    Args:
        path: A `.json` file with a "sentences" list of word lists, or a text
              file with one whitespace-tokenized sentence per line.

    Returns:
        A list of sentences, each a list of words.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the JSON is invalid.
        TypeError: If the JSON structure is incorrect.
    """
    if Path(path).suffix.lower() == ".json":
        out = []
        for i, sentence in enumerate(_sentence_items(_read_json(path, "Input"), path)):
            if not isinstance(sentence, list):
                raise TypeError(f"Sentence at index {i} in {path} is not a list of words.")
            out.append(list(sentence))
        return out

    return [line.split() for line in _read_lines(path, "Input")]


def save_model(path: str, tagger: AveragedPerceptronTagger) -> None:
    """Writes a trained tagger's model to a JSON file."""
    data = tagger.to_dict()
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False)


def load_model(path: str, cfg: Optional[Config] = None) -> AveragedPerceptronTagger:
    """
    Loads a trained tagger from a model JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON.
        TypeError: If the JSON does not describe a tagger model.
    """
    return AveragedPerceptronTagger.from_dict(_read_json(path, "Model"), cfg)
