"""Configuration loading for chat-graph.

Reads settings from environment variables (with .env support via
python-dotenv).  Every setting has a default, so an empty environment is
valid; values that are present are validated and all problems are reported
together.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from chat_graph.log import level_number
from chat_graph.models.annotation import TURN_NUMBER_RE


class ConfigError(Exception):
    """Raised when configuration values are invalid."""


@dataclass(frozen=True)
class AnnotationScheme:
    """Literal markers used by the response-coding scheme.

    Attributes:
        initiation_markers: Annotation values meaning "starts a new topic".
            Compared case-insensitively.
        ambiguous_markers: Annotation values meaning "target unknown".
            A blank annotation is always ambiguous.
        compound_separator: Token joining several targets in one annotation.
    """

    initiation_markers: tuple[str, ...] = ("I",)
    ambiguous_markers: tuple[str, ...] = ("?", "-")
    compound_separator: str = "+"


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        log_level: Logging level (default ``"INFO"``).
        initiation_markers: See :class:`AnnotationScheme`.
        ambiguous_markers: See :class:`AnnotationScheme`.
        compound_separator: See :class:`AnnotationScheme`.
        min_edge_weight: Default edge-filter threshold for output
            (default ``1``, i.e. keep every edge).
    """

    log_level: str = "INFO"
    initiation_markers: tuple[str, ...] = ("I",)
    ambiguous_markers: tuple[str, ...] = ("?", "-")
    compound_separator: str = "+"
    min_edge_weight: int = 1

    @property
    def scheme(self) -> AnnotationScheme:
        """The parser-facing subset of these settings."""
        return AnnotationScheme(
            initiation_markers=self.initiation_markers,
            ambiguous_markers=self.ambiguous_markers,
            compound_separator=self.compound_separator,
        )


def _split_markers(raw: str) -> tuple[str, ...]:
    """Split a comma-separated marker list, dropping blank entries."""
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def load_settings() -> Settings:
    """Load and validate settings from environment variables.

    Calls :func:`dotenv.load_dotenv` so a ``.env`` file in the working
    directory is picked up automatically.

    Returns:
        A validated :class:`Settings` instance.

    Raises:
        ConfigError: If any value is invalid.  The message names **all**
            offending variables.
    """
    load_dotenv()

    values: dict[str, object] = {}
    problems: list[str] = []

    log_level = os.environ.get("LOG_LEVEL", "").strip()
    if log_level:
        try:
            level_number(log_level)
        except ValueError:
            problems.append(f"LOG_LEVEL={log_level!r} is not a logging level")
        else:
            values["log_level"] = log_level.upper()

    initiation = os.environ.get("CHAT_GRAPH_INITIATION_MARKERS", "")
    if initiation.strip():
        values["initiation_markers"] = _split_markers(initiation)

    ambiguous = os.environ.get("CHAT_GRAPH_AMBIGUOUS_MARKERS", "")
    if ambiguous.strip():
        values["ambiguous_markers"] = _split_markers(ambiguous)

    # An empty separator is only detectable when the variable is set.
    if "CHAT_GRAPH_COMPOUND_SEPARATOR" in os.environ:
        separator = os.environ["CHAT_GRAPH_COMPOUND_SEPARATOR"].strip()
        if not separator:
            problems.append("CHAT_GRAPH_COMPOUND_SEPARATOR must not be empty")
        elif TURN_NUMBER_RE.match(separator):
            problems.append("CHAT_GRAPH_COMPOUND_SEPARATOR must not be numeric")
        else:
            values["compound_separator"] = separator

    min_weight = os.environ.get("CHAT_GRAPH_MIN_EDGE_WEIGHT", "").strip()
    if min_weight:
        try:
            parsed = int(min_weight)
        except ValueError:
            problems.append(f"CHAT_GRAPH_MIN_EDGE_WEIGHT={min_weight!r} is not an integer")
        else:
            if parsed < 1:
                problems.append("CHAT_GRAPH_MIN_EDGE_WEIGHT must be at least 1")
            else:
                values["min_edge_weight"] = parsed

    settings = Settings(**values)  # type: ignore[arg-type]
    problems.extend(_check_markers(settings))

    if problems:
        raise ConfigError("Invalid configuration: " + "; ".join(problems))

    return settings


def _check_markers(settings: Settings) -> list[str]:
    """Return descriptions of marker sets that would make parsing ambiguous."""
    problems: list[str] = []
    initiation = {m.casefold() for m in settings.initiation_markers}
    ambiguous = {m.casefold() for m in settings.ambiguous_markers}

    # A marker that reads as a turn number would shadow that reference.
    numeric = sorted(m for m in initiation | ambiguous if TURN_NUMBER_RE.match(m))
    if numeric:
        problems.append(f"markers must not be numeric: {', '.join(numeric)}")

    overlap = sorted(initiation & ambiguous)
    if overlap:
        problems.append(
            f"markers used for both initiation and ambiguity: {', '.join(overlap)}"
        )
    return problems
