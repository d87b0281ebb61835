"""
Log segmenter for Unity3D Editor and Player logs.

Unity separates every log statement from the next with a blank line:

<message>
UnityEngine.Debug:Log(Object)
<caller frames>

The segmenter splits the raw text on those blank lines, classifies each
block, trims engine/wrapper frames and optionally collapses duplicates.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from .frames import StackFrame, parse_frames


logger = logging.getLogger(__name__)

LOG_KEYWORD = "UnityEngine.Debug:Log"
EMPTY_NEWLINE = "\n\n"

# Substrings that mark a user-defined logging wrapper frame
WRAPPER_HINTS = ("Debug", "Log")

COLLAPSE_ORDERS = ("sorted", "first_seen")


class Severity(Enum):
    """Severity of a log entry."""
    LOG = "Log"
    WARNING = "Warning"
    ERROR = "Error"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


SEVERITY_RANK = {severity: rank for rank, severity in enumerate(Severity)}


class UnrecognizedInputError(TypeError):
    """Raised when the engine is handed something that is not text."""

    def __init__(self, value: Any, source: str = "<input>"):
        self.label = "Unrecognized type in stream"
        self.detail = "'unity' given non-string info by this"
        self.source = source
        self.value_type = type(value).__name__
        super().__init__(f"{self.label}: {self.detail} ({self.value_type} at {source})")

    def to_dict(self) -> Dict[str, str]:
        return {
            "error": self.label,
            "detail": self.detail,
            "source": self.source,
            "type": self.value_type,
        }


def split_lines(text: str) -> List[str]:
    """Split on LF only; a trailing newline does not start an extra line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def first_line(text: str) -> str:
    return text.split("\n", 1)[0]


@dataclass(frozen=True)
class SegmenterOptions:
    """Per-invocation engine options."""
    summary_lines: int = 3
    collapse: bool = True
    collapse_order: str = "sorted"

    def __post_init__(self):
        if isinstance(self.summary_lines, bool) or not isinstance(self.summary_lines, int):
            raise ValueError(f"summary_lines must be an integer, got {self.summary_lines!r}")
        if self.summary_lines < 1:
            raise ValueError(f"summary_lines must be positive, got {self.summary_lines}")
        if self.collapse_order not in COLLAPSE_ORDERS:
            raise ValueError(
                f"Unknown collapse order: {self.collapse_order}. Use one of {list(COLLAPSE_ORDERS)}"
            )


@dataclass
class LogEntry:
    """A single log statement extracted from a block."""
    severity: Severity
    message: str
    callstack: str
    trimmed_callstack: str

    def same(self, other: "LogEntry") -> bool:
        """Two entries are duplicates when severity and message match."""
        return self.severity == other.severity and self.message == other.message

    @property
    def key(self) -> tuple:
        return (self.severity, self.message)

    def summary(self, summary_lines: int = 3) -> str:
        """First lines of the trimmed callstack, stripped and run together."""
        return "".join(line.strip() for line in split_lines(self.trimmed_callstack)[:summary_lines])

    def frames(self) -> List[StackFrame]:
        return parse_frames(self.trimmed_callstack)

    def to_record(self, summary_lines: int = 3, include_frames: bool = False) -> Optional[Dict[str, Any]]:
        """
        Build the output record for this entry.

        Returns:
            Dict with ``type``, ``message`` and ``short`` keys, or None
            when nothing could be put into the record.
        """
        record: Dict[str, Any] = {}
        record["type"] = str(self.severity)
        record["message"] = self.message
        record["short"] = self.summary(summary_lines)
        if include_frames:
            record["frames"] = [frame.to_dict() for frame in self.frames()]

        if not record:
            return None
        return record


class LogSegmenter:
    """Turns raw Unity log text into an ordered list of LogEntry."""

    def __init__(self, options: Optional[SegmenterOptions] = None):
        self.options = options or SegmenterOptions()

    @staticmethod
    def normalize(text: str) -> str:
        """Rewrite CRLF and lone CR line endings to LF."""
        return text.replace("\r\n", "\n").replace("\r", "\n")

    @staticmethod
    def split_blocks(text: str) -> List[str]:
        """
        Split normalized text on blank lines.

        A trailing empty block (text ending in the delimiter) is dropped;
        empty text yields no blocks at all.
        """
        blocks = text.split(EMPTY_NEWLINE)
        if blocks and blocks[-1] == "":
            blocks.pop()
        return blocks

    @staticmethod
    def classify(tail: str) -> Severity:
        """Severity from the text following the engine log marker."""
        type_line = tail
        while type_line.startswith(LOG_KEYWORD):
            type_line = type_line[len(LOG_KEYWORD):]

        if type_line.startswith("Error"):
            return Severity.ERROR
        elif type_line.startswith("Warning"):
            return Severity.WARNING
        return Severity.LOG

    @staticmethod
    def trim_wrapper(user_log: str) -> str:
        """Drop the first frame when it looks like a custom logging helper."""
        custom_method = first_line(user_log)
        if any(hint in custom_method for hint in WRAPPER_HINTS):
            parts = user_log.split("\n", 1)
            if len(parts) == 2:
                return parts[1]
        return user_log

    def parse_block(self, block: str) -> Optional[LogEntry]:
        """
        Parse a block containing the engine log marker.

        Returns:
            LogEntry, or None when the block lacks the expected structure
        """
        index = block.rfind(LOG_KEYWORD)
        if index < 0:
            return None

        tail = block[index:]
        parts = tail.split("\n", 1)
        if len(parts) < 2:
            return None
        user_log = parts[1]

        message = first_line(block)
        if index == 0:
            # Marker leads the block, the message follows the engine call line
            message = first_line(user_log)
            rest = user_log.split("\n", 1)
            user_log = rest[1] if len(rest) == 2 else ""

        return LogEntry(
            severity=self.classify(tail),
            message=message,
            callstack=block,
            trimmed_callstack=self.trim_wrapper(user_log),
        )

    @staticmethod
    def parse_fallback_block(block: str) -> Optional[LogEntry]:
        """Parse any block without relying on the marker."""
        if not block.strip():
            return None

        parts = block.split("\n", 1)
        if len(parts) < 2:
            return None

        return LogEntry(
            severity=Severity.UNKNOWN,
            message=parts[0],
            callstack=block,
            trimmed_callstack=parts[1],
        )

    def extract(self, text: str) -> List[LogEntry]:
        """Normalize, split and parse, falling back to plain blocks when needed."""
        blocks = self.split_blocks(self.normalize(text))

        entries = []
        for block in blocks:
            if LOG_KEYWORD not in block:
                continue
            entry = self.parse_block(block)
            if entry is not None:
                entries.append(entry)

        logger.debug("Split %d blocks, %d matched the engine log marker", len(blocks), len(entries))

        if not entries:
            entries = [e for e in (self.parse_fallback_block(b) for b in blocks) if e is not None]
            if entries:
                logger.debug("No engine log calls found, parsed %d plain blocks", len(entries))

        return entries

    def collapse(self, entries: List[LogEntry]) -> List[LogEntry]:
        """Remove entries sharing severity and message with a retained one."""
        if self.options.collapse_order == "first_seen":
            seen = set()
            collapsed = []
            for entry in entries:
                if entry.key in seen:
                    continue
                seen.add(entry.key)
                collapsed.append(entry)
        else:
            ordered = sorted(entries, key=lambda e: (e.message, SEVERITY_RANK[e.severity]))
            collapsed = []
            for entry in ordered:
                if collapsed and collapsed[-1].same(entry):
                    continue
                collapsed.append(entry)

        logger.debug("Collapsed %d entries into %d", len(entries), len(collapsed))
        return collapsed

    def segment(self, text: str, source: str = "<input>") -> List[LogEntry]:
        """
        Run extraction and, when enabled, collapsing.

        Raises:
            UnrecognizedInputError: If text is not a string
        """
        if not isinstance(text, str):
            raise UnrecognizedInputError(text, source)

        entries = self.extract(text)
        if self.options.collapse:
            entries = self.collapse(entries)
        return entries

    def to_records(self, entries: List[LogEntry], include_frames: bool = False) -> List[Optional[Dict[str, Any]]]:
        return [
            entry.to_record(self.options.summary_lines, include_frames=include_frames)
            for entry in entries
        ]

    def process(self, value: Any, source: str = "<input>", include_frames: bool = False) -> List[Optional[Dict[str, Any]]]:
        """
        Full pipeline from an arbitrary input value to output records.

        Args:
            value: Raw log text
            source: Where the value came from, used in error reports
            include_frames: Also emit the parsed stack frames

        Returns:
            List of records (``None`` marks an empty record)

        Raises:
            UnrecognizedInputError: If value is not a string
        """
        return self.to_records(self.segment(value, source), include_frames=include_frames)


def parse_log(text: str, summary_lines: int = 3, collapse: bool = True,
              collapse_order: str = "sorted") -> List[Optional[Dict[str, Any]]]:
    """Convenience wrapper around LogSegmenter.process."""
    options = SegmenterOptions(
        summary_lines=summary_lines,
        collapse=collapse,
        collapse_order=collapse_order,
    )
    return LogSegmenter(options).process(text)
