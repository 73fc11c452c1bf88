"""Render result model and its template view."""

from __future__ import annotations

from pydantic import BaseModel

_COUNT_SUFFIX = "Count"


def highlight_field_name(counter_name: str) -> str:
    """Map ``alfrescoCount`` to ``alfrescoHighlightCount``."""
    if counter_name.endswith(_COUNT_SUFFIX) and len(counter_name) > len(_COUNT_SUFFIX):
        return f"{counter_name[: -len(_COUNT_SUFFIX)]}Highlight{_COUNT_SUFFIX}"
    return f"{counter_name}Highlight{_COUNT_SUFFIX}"


class RenderResult(BaseModel):
    """Counts, highlight advisories and poll interval for one page render."""

    counts: dict[str, int | None]
    highlights: dict[str, bool]
    refresh_interval_ms: int

    def to_view(self) -> dict[str, object]:
        """Flatten into the ``interval``/``<name>Count``/``<name>HighlightCount`` record."""
        view: dict[str, object] = {"interval": self.refresh_interval_ms}
        for name, value in self.counts.items():
            view[name] = value
            view[highlight_field_name(name)] = self.highlights.get(name, False)
        return view
