"""Per-request diagnostic report."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class TranslationReport:
    """Collects what happened while translating one post.

    Soft problems (nothing to translate, a failed run in unbatched mode)
    land in `errors`; a fatal failure sets `error`.
    """

    to: str = ""
    status: object = None  # document id
    edit: object = None  # document edited timestamp
    batch: bool = True
    tld: str = ""
    backend: str = ""

    total_nodes: int = 0
    total_runs: int = 0
    nodes_translated: int = 0
    bypassed: int = 0
    from_cache: bool = False

    content: str | None = None
    error: str | None = None
    errors: list[str] = field(default_factory=list)

    started_at: datetime = field(default_factory=datetime.now)
    finished_at: datetime | None = None

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def finish(self) -> None:
        self.finished_at = datetime.now()

    def to_dict(self) -> dict:
        data: dict = {
            "to": self.to,
            "status": self.status,
            "edit": self.edit,
            "batch": self.batch,
            "tld": self.tld,
            "backend": self.backend,
            "total_nodes": self.total_nodes,
            "total_runs": self.total_runs,
            "nodes_translated": self.nodes_translated,
            "bypassed": self.bypassed,
            "from_cache": self.from_cache,
            "duration_seconds": self.duration_seconds,
        }
        if self.errors:
            data["errors"] = list(self.errors)
        if self.error is not None:
            data["error"] = self.error
        if self.content is not None:
            data["content"] = self.content
        return data
