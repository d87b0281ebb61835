"""Unity3D Editor/Player log reader."""
from .segmenter import (
    LogSegmenter, LogEntry, Severity, SegmenterOptions,
    UnrecognizedInputError, parse_log, LOG_KEYWORD
)
from .frames import StackFrame, parse_frame, parse_frames
from .query import filter_entries, group_by_severity, compute_statistics, parse_severities
from .config import get_settings, Settings, load_config
from .report_generator import ReportGenerator

__all__ = [
    'LogSegmenter',
    'LogEntry',
    'Severity',
    'SegmenterOptions',
    'UnrecognizedInputError',
    'parse_log',
    'LOG_KEYWORD',
    'StackFrame',
    'parse_frame',
    'parse_frames',
    'filter_entries',
    'group_by_severity',
    'compute_statistics',
    'parse_severities',
    'get_settings',
    'Settings',
    'load_config',
    'ReportGenerator',
]
