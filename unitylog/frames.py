"""
Stack frame parsing for Unity managed call stacks.

Handles the two layouts Unity writes:

Game.Player:Start () (at Assets/Scripts/Player.cs:12)
  at Game.Player.Start () [0x00001] in <filename unknown>:0
"""
import re
from dataclasses import dataclass, asdict
from typing import Dict, List


@dataclass
class StackFrame:
    """Represents a single call stack line."""
    method: str
    parameters: str
    location: str
    raw: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


# Editor style: Namespace.Type:Method (Args) (at Assets/File.cs:12)
EDITOR_FRAME_PATTERN = re.compile(
    r'^(?P<method>[^\s(][^(]*?)\s*\((?P<parameters>[^)]*)\)(?:\s*\(at (?P<location>[^)]*)\))?\s*$'
)

# Mono style: at Namespace.Type.Method (Args) [0x00000] in File.cs:12
MONO_FRAME_PATTERN = re.compile(
    r'^at\s+(?P<method>[^(]+?)\s*\((?P<parameters>[^)]*)\)(?:\s*\[0x[0-9a-fA-F]+\])?(?:\s+in\s+(?P<location>.+))?$'
)


def parse_frame(line: str) -> StackFrame:
    """
    Parse one call stack line.

    Lines that match neither layout keep their stripped text as the method.
    """
    stripped = line.strip()
    for pattern in (MONO_FRAME_PATTERN, EDITOR_FRAME_PATTERN):
        match = pattern.match(stripped)
        if match:
            return StackFrame(
                method=match.group('method').strip(),
                parameters=match.group('parameters').strip(),
                location=(match.group('location') or '').strip(),
                raw=line,
            )
    return StackFrame(method=stripped, parameters='', location='', raw=line)


def parse_frames(callstack: str) -> List[StackFrame]:
    """Parse every non-blank line of a call stack."""
    return [parse_frame(line) for line in callstack.split('\n') if line.strip()]
