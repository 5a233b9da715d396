# aptag/config.py
"""Manages the loading and validation of tagger configuration.

This module defines the `Config` dataclass, which serves as a centralized,
type-safe container for the training settings of the tagger. It also provides
the `load_config` function, which reads these settings from a `config.yaml`
file and falls back to the documented defaults for any missing key.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from numbers import Real
from typing import Optional
import yaml

from .errors import ConfigurationError

DEFAULT_ITERATIONS = 5
DEFAULT_FREQUENCY_THRESHOLD = 20
DEFAULT_AMBIGUITY_THRESHOLD = 0.97


@dataclass
class Config:
    """
    A typed configuration object that holds all settings for the tagger.

    Attributes:
        iterations: The number of training epochs over the corpus.
        frequency_threshold: The minimum number of occurrences a word needs
                             before it may enter the tag dictionary.
        ambiguity_threshold: The minimum share of a word's occurrences that its
                             dominant label must hold for the word to enter the
                             tag dictionary.
        seed: Optional seed for the default random source used to shuffle
              sentences between epochs. `None` seeds from the platform.
        show_progress: Whether training displays an epoch progress bar.
        paths: A dictionary containing the relative paths to model files.
    """
    iterations: int = DEFAULT_ITERATIONS
    frequency_threshold: int = DEFAULT_FREQUENCY_THRESHOLD
    ambiguity_threshold: float = DEFAULT_AMBIGUITY_THRESHOLD
    seed: Optional[int] = None
    show_progress: bool = True
    paths: dict[str, str] = field(default_factory=dict)

    def validate(self) -> "Config":
        """
        Checks every setting and returns the config unchanged when valid.

        Raises:
            ConfigurationError: If a setting is out of range or of the wrong type.
        """
        if isinstance(self.iterations, bool) or not isinstance(self.iterations, int) or self.iterations < 1:
            raise ConfigurationError(f"iterations must be a positive integer, got {self.iterations!r}.")
        if (
            isinstance(self.frequency_threshold, bool)
            or not isinstance(self.frequency_threshold, int)
            or self.frequency_threshold < 1
        ):
            raise ConfigurationError(
                f"frequency_threshold must be a positive integer, got {self.frequency_threshold!r}."
            )
        if (
            isinstance(self.ambiguity_threshold, bool)
            or not isinstance(self.ambiguity_threshold, Real)
            or not 0.0 < self.ambiguity_threshold <= 1.0
        ):
            raise ConfigurationError(
                f"ambiguity_threshold must be a number in (0, 1], got {self.ambiguity_threshold!r}."
            )
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ConfigurationError(f"seed must be an integer or null, got {self.seed!r}.")
        return self


def load_config(path: str = "config.yaml") -> Config:
    """
    Loads and validates a configuration file into a single Config object.

    The YAML file may omit any key; missing keys fall back to the defaults of
    the `Config` dataclass. Dictionary thresholds live under a
    `tag_dictionary` mapping.

    Args:
        path: The path to the `config.yaml` file.

    Returns:
        A fully populated and validated `Config` object.

    Raises:
        FileNotFoundError: If the specified `config.yaml` file cannot be found.
        ValueError: If there is an error parsing the YAML file.
        TypeError: If the root of the YAML file is not a dictionary.
        ConfigurationError: If a setting is invalid.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            y = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found at: {path}")
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML file at {path}: {e}")

    # An empty file is an empty mapping
    if y is None:
        y = {}
    if not isinstance(y, dict):
        raise TypeError(f"Configuration file {path} must be a dictionary.")

    tag_dictionary = y.get("tag_dictionary") or {}
    if not isinstance(tag_dictionary, dict):
        raise TypeError(f"'tag_dictionary' in {path} must be a dictionary.")

    return Config(
        iterations=y.get("iterations", DEFAULT_ITERATIONS),
        frequency_threshold=tag_dictionary.get("frequency_threshold", DEFAULT_FREQUENCY_THRESHOLD),
        ambiguity_threshold=tag_dictionary.get("ambiguity_threshold", DEFAULT_AMBIGUITY_THRESHOLD),
        seed=y.get("seed"),
        show_progress=bool(y.get("show_progress", True)),
        paths=dict(y.get("paths") or {}),
    ).validate()
