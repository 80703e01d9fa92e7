"""JSON export of a resolution run.

Why JSON:
- Lets other tools (or a CI check) see which placeholders resolved and what was
  injected, without parsing the rendered HTML.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from apiary.core.services.pipeline import ResolveResult


def build_report(result: ResolveResult) -> dict[str, Any]:
    return {
        "metadata": result.metadata.model_dump(mode="json", exclude={"api_key"}),
        "root_url": result.root_url,
        "requests_issued": result.requests_issued,
        "resolutions": [r.model_dump(mode="json") for r in result.resolutions],
        "unresolved": [p.name for p in result.unresolved],
    }


def export_resolutions_json(*, result: ResolveResult, output_path: Path) -> Path:
    """Export the run as stable, UTF-8 JSON."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(build_report(result), ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
