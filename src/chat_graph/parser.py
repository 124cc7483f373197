"""Transcript parser for response-annotated chat transcripts.

Parses a table with the columns ``speaker``, ``turn_id`` and
``raw_annotation`` into structured
:class:`~chat_graph.models.transcript.TranscriptParseResult` objects.
The table may come from CSV text, a CSV file, or in-memory rows.
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from chat_graph.config import AnnotationScheme
from chat_graph.exceptions import MalformedAnnotationError, TranscriptFormatError
from chat_graph.models.annotation import (
    TURN_NUMBER_RE,
    Ambiguous,
    Annotation,
    CompoundTarget,
    Initiation,
    SingleTarget,
)
from chat_graph.models.transcript import ParseWarning, TranscriptParseResult, Turn

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: tuple[str, ...] = ("speaker", "turn_id", "raw_annotation")

_DEFAULT_SCHEME = AnnotationScheme()


def normalize_turn_id(value: Any) -> str:
    """Return the canonical string form of a turn id.

    Integral values lose leading zeros and a trailing ``.0`` so that
    ``5``, ``"05"`` and ``"5.0"`` all become ``"5"``.  Any other value is
    returned trimmed.
    """
    text = str(value).strip()
    match = TURN_NUMBER_RE.match(text)
    if match:
        return str(int(match.group(1)))
    return text


def parse_annotation(raw: str, scheme: AnnotationScheme = _DEFAULT_SCHEME) -> Annotation:
    """Parse one raw annotation cell.

    Args:
        raw: The annotation text.
        scheme: Markers and separator of the coding scheme.

    Returns:
        The parsed :data:`~chat_graph.models.annotation.Annotation`.  A
        blank cell is :class:`Ambiguous`.

    Raises:
        MalformedAnnotationError: If *raw* is neither a marker, a turn
            number, nor a separator-joined list of turn numbers.
    """
    text = raw.strip()
    if not text:
        return Ambiguous()

    folded = text.casefold()
    if folded in {m.casefold() for m in scheme.initiation_markers}:
        return Initiation()
    if folded in {m.casefold() for m in scheme.ambiguous_markers}:
        return Ambiguous()

    parts = [part.strip() for part in text.split(scheme.compound_separator)]
    targets: list[str] = []
    for part in parts:
        if not TURN_NUMBER_RE.match(part):
            raise MalformedAnnotationError(
                f"Unrecognised annotation {raw!r}", raw_annotation=raw
            )
        targets.append(normalize_turn_id(part))

    if len(targets) == 1:
        return SingleTarget(turn_id=targets[0])
    return CompoundTarget(turn_ids=tuple(targets))


def parse_transcript_rows(
    rows: Iterable[Mapping[str, Any]],
    scheme: AnnotationScheme = _DEFAULT_SCHEME,
    source: str = "<string>",
) -> TranscriptParseResult:
    """Parse in-memory transcript rows.

    Args:
        rows: Mappings with the keys ``speaker``, ``turn_id`` and
            ``raw_annotation``, and optionally ``line_number``.  A missing
            or ``None`` annotation is treated as blank.
        scheme: Markers and separator of the coding scheme.
        source: Label for the transcript origin.

    Returns:
        A :class:`TranscriptParseResult`.  Rows lacking a speaker or turn
        id are skipped with a warning; malformed annotations are recorded
        as :class:`Ambiguous` with a warning.
    """
    turns: list[Turn] = []
    warnings: list[ParseWarning] = []
    malformed = 0

    for row in rows:
        line_number = int(row.get("line_number") or 0)
        raw_line = _describe_row(row)

        speaker = _cell_text(row.get("speaker")).strip()
        turn_id_value = row.get("turn_id")
        turn_id = normalize_turn_id(turn_id_value) if turn_id_value is not None else ""

        if not speaker or not turn_id:
            missing = "speaker" if not speaker else "turn_id"
            warnings.append(
                ParseWarning(
                    line_number=line_number,
                    message=f"Row has no {missing}; skipped",
                    raw_line=raw_line,
                )
            )
            logger.warning("Skipping row at line %d: no %s", line_number, missing)
            continue

        raw_annotation = _cell_text(row.get("raw_annotation"))
        try:
            annotation = parse_annotation(raw_annotation, scheme)
        except MalformedAnnotationError as exc:
            malformed += 1
            annotation = Ambiguous()
            warnings.append(
                ParseWarning(
                    line_number=line_number,
                    message=f"{exc}; treated as ambiguous",
                    raw_line=raw_line,
                )
            )
            logger.warning(
                "Malformed annotation %r on turn %s by %s; treated as ambiguous",
                raw_annotation,
                turn_id,
                speaker,
            )

        turns.append(
            Turn(
                turn_id=turn_id,
                speaker=speaker,
                annotation=annotation,
                raw_annotation=raw_annotation.strip(),
                position=len(turns),
                line_number=line_number,
            )
        )

    speakers = list(dict.fromkeys(t.speaker for t in turns))

    logger.debug(
        "Parsed %d turn(s) from %s with %d warning(s)", len(turns), source, len(warnings)
    )

    return TranscriptParseResult(
        turns=turns,
        speakers=speakers,
        warnings=warnings,
        malformed_count=malformed,
        source=source,
    )


def parse_transcript(
    text: str,
    scheme: AnnotationScheme = _DEFAULT_SCHEME,
    source: str = "<string>",
) -> TranscriptParseResult:
    """Parse CSV transcript text with a header row.

    Header names are matched case-insensitively after trimming, so
    ``Speaker`` and `` TURN_ID `` are accepted.  Extra columns are ignored.

    Args:
        text: The CSV text.
        scheme: Markers and separator of the coding scheme.
        source: Label for the transcript origin (e.g. a file path).

    Returns:
        A :class:`TranscriptParseResult`.

    Raises:
        TranscriptFormatError: If the header lacks a required column.
    """
    if not text or not text.strip():
        return TranscriptParseResult(source=source)

    reader = csv.reader(io.StringIO(text))
    header = next(reader)
    columns = {name.strip().casefold(): idx for idx, name in enumerate(header)}

    missing = [name for name in REQUIRED_COLUMNS if name not in columns]
    if missing:
        raise TranscriptFormatError(
            f"{source}: missing required column(s): {', '.join(missing)}"
        )

    def _rows() -> Iterable[dict[str, Any]]:
        for cells in reader:
            # Blank lines between rows are not data.
            if not any(cell.strip() for cell in cells):
                continue
            row: dict[str, Any] = {
                name: cells[columns[name]] if columns[name] < len(cells) else ""
                for name in REQUIRED_COLUMNS
            }
            row["line_number"] = reader.line_num
            yield row

    return parse_transcript_rows(_rows(), scheme=scheme, source=source)


def parse_transcript_file(
    file_path: str | Path,
    scheme: AnnotationScheme = _DEFAULT_SCHEME,
) -> TranscriptParseResult:
    """Parse a CSV transcript file.

    Reads the file as UTF-8 (a leading byte-order mark is ignored) and
    delegates to :func:`parse_transcript`.

    Raises:
        FileNotFoundError: If *file_path* does not exist.
        TranscriptFormatError: If the file is not valid UTF-8 or the header
            lacks a required column.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Transcript file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise TranscriptFormatError(
            f"{path}: not valid UTF-8 (bad byte at offset {exc.start})"
        ) from exc
    return parse_transcript(text, scheme=scheme, source=str(path))


def _describe_row(row: Mapping[str, Any]) -> str:
    """Render a row as comma-joined cells for warnings."""
    return ",".join(_cell_text(row.get(name)) for name in REQUIRED_COLUMNS)


def _cell_text(value: Any) -> str:
    """Return a cell as text.  Only a missing value is blank, so ``0`` stays ``"0"``."""
    return "" if value is None else str(value)
