"""Result rendering for vtrack."""

import json
import logging
from typing import Any, Dict, List

from .repository import InitializeSummary, RecordOutcome, RecordStatus, StatusReport

logger = logging.getLogger(__name__)

RED = "\033[31m"
RESET = "\033[0m"


class ResultSerializer:
    """Renders repository results as JSON envelopes or console text."""

    def __init__(self, color: bool = True):
        """Initialize with text rendering options."""
        self.color = color

    def create_success_envelope(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Create success envelope around payload."""
        logger.debug("Creating success envelope")
        return {"ok": True, "data": payload}

    def create_error_envelope(
        self, error_code: str, error_message: str, details: Dict[str, Any] = None
    ) -> Dict[str, Any]:
        """Create error envelope."""
        logger.debug("Creating error envelope", extra={"code": error_code})
        error_data = {
            "code": error_code,
            "message": error_message,
        }
        if details:
            error_data["details"] = details

        return {"ok": False, "error": error_data}

    def to_json_string(self, payload: Dict[str, Any]) -> str:
        """Convert payload to pretty-printed JSON string."""
        return json.dumps(payload, ensure_ascii=False, sort_keys=True, indent=2)

    def render_status(self, report: StatusReport) -> str:
        """Render modified and unmodified paths as two console lines."""
        modified = "Modified files: " + self._join(report.modified)
        unmodified = "Unmodified files: " + self._join(report.unmodified)
        if self.color:
            modified = f"{RED}{modified}{RESET}"
        return f"{modified}\n{unmodified}"

    def render_outcome(self, outcome: RecordOutcome) -> str:
        """Render the result of recording one file."""
        if outcome.status is RecordStatus.ADDED:
            return f"Added {outcome.path} with hash {outcome.digest}"
        if outcome.status is RecordStatus.UNCHANGED:
            return f"{outcome.path} has no changes."
        return f"No content in the file!! : {outcome.path}"

    def render_summary(self, summary: InitializeSummary) -> str:
        """Render the aggregate confirmation of a full scan."""
        return (
            "Scanned and stored initial file versions. "
            f"({summary.tracked} tracked, {summary.skipped} skipped, "
            f"{summary.objects} objects)"
        )

    def render_history(self, path: str, digests: List[str]) -> str:
        """Render a path's digests, newest first."""
        lines = [f"History of {path} ({len(digests)} versions):"]
        for position, digest in reversed(list(enumerate(digests, start=1))):
            lines.append(f"  {position:>3}  {digest}")
        return "\n".join(lines)

    def _join(self, paths: List[str]) -> str:
        return " ".join(paths) if paths else "(none)"
