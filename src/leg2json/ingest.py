"""Ingestion driver: fetch, parse and store a list of acts."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from leg2json.constants import MIN_BODY_CHARS
from leg2json.fetcher import RegisterClient
from leg2json.models import ActIndexEntry, VersionInfo
from leg2json.parser import parse_australian_html
from leg2json.store import LegislationStore

logger = logging.getLogger(__name__)


@dataclass
class ActResult:
    act: str
    provisions: int
    status: str  # "ok", "cached", "HTTP 404", "empty response", "error: ..."


@dataclass
class IngestionSummary:
    processed: int = 0
    skipped: int = 0
    failed: int = 0
    total_provisions: int = 0
    results: List[ActResult] = field(default_factory=list)

    def record(self, act: ActIndexEntry, provisions: int, status: str) -> None:
        self.results.append(ActResult(act=act.title, provisions=provisions, status=status))
        self.total_provisions += provisions
        self.processed += 1
        if status == "cached":
            self.skipped += 1
        elif status != "ok":
            self.failed += 1

    def report(self) -> str:
        lines = [
            "=" * 60,
            "Ingestion Summary",
            "=" * 60,
            f"  Processed: {self.processed}",
            f"  Skipped (cached): {self.skipped}",
            f"  Failed: {self.failed}",
            f"  Total provisions: {self.total_provisions}",
            "",
            "Per-act results:",
        ]
        for r in self.results:
            prov = f"{r.provisions} provisions" if r.provisions > 0 else "FAILED"
            lines.append(f"  {r.act:<50} {prov:<20} [{r.status}]")
        return "\n".join(lines)


def _load_markup(
    act: ActIndexEntry,
    source_file: Path,
    skip_fetch: bool,
    client: RegisterClient,
) -> tuple[Optional[str], Optional[VersionInfo], Optional[str]]:
    """Return (html, version_info, failure_status)."""
    if skip_fetch and source_file.exists():
        logger.info(f"Using cached markup for {act.id}")
        return source_file.read_text(encoding="utf-8"), None, None

    logger.info(f"Fetching {act.title} ({act.title_id})")
    result = client.fetch_legislation_html(act.title_id)

    if result.status != 200:
        return None, result.version_info, f"HTTP {result.status}"

    if not result.body or len(result.body) < MIN_BODY_CHARS:
        logger.warning(f"{act.id}: empty or too small response ({len(result.body or '')} chars)")
        return None, result.version_info, "empty response"

    source_file.write_text(result.body, encoding="utf-8")
    return result.body, result.version_info, None


def ingest_acts(
    acts: Sequence[ActIndexEntry],
    source_dir: Path,
    seed_dir: Path,
    *,
    skip_fetch: bool = False,
    store: Optional[LegislationStore] = None,
    client: Optional[RegisterClient] = None,
) -> IngestionSummary:
    """
    Fetch and parse each act, writing ``{id}.html`` and ``{id}.json`` seed files.

    Failures are reported per act and never stop the run.

    Args:
        acts: Acts to ingest, in order
        source_dir: Directory for raw XHTML
        seed_dir: Directory for parsed JSON
        skip_fetch: Reuse existing seed files and cached markup
        store: Optional store to write parsed acts into
        client: Register client (a default one is created if omitted)

    Returns:
        IngestionSummary with per-act results
    """
    source_dir.mkdir(parents=True, exist_ok=True)
    seed_dir.mkdir(parents=True, exist_ok=True)
    client = client or RegisterClient()
    summary = IngestionSummary()

    for act in acts:
        source_file = source_dir / f"{act.id}.html"
        seed_file = seed_dir / f"{act.id}.json"

        if skip_fetch and seed_file.exists():
            existing = json.loads(seed_file.read_text(encoding="utf-8"))
            count = len(existing.get("provisions") or [])
            logger.info(f"Skipping {act.title} (cached, {count} provisions)")
            summary.record(act, count, "cached")
            continue

        try:
            html, version_info, failure = _load_markup(act, source_file, skip_fetch, client)
            if failure:
                logger.warning(f"{act.id}: {failure}")
                summary.record(act, 0, failure)
                continue

            parsed = parse_australian_html(html, act, version_info)
            seed_file.write_text(parsed.to_json(), encoding="utf-8")
            if store is not None:
                store.write_act(parsed)
            logger.info(
                f"{act.id}: {len(parsed.provisions)} provisions, {len(parsed.definitions)} definitions"
            )
            summary.record(act, len(parsed.provisions), "ok")
        except Exception as e:
            logger.exception(f"Failed to ingest {act.id}")
            summary.record(act, 0, f"error: {str(e)[:80]}")

    return summary
