"""Server-rendered HTML frontend for the PeopleFinder web UI."""

from __future__ import annotations

from functools import lru_cache
from importlib.resources import files
from typing import Any, Sequence

from fastapi.responses import HTMLResponse
from jinja2 import Environment, Template

from peoplefinder.models import MatchResult, SearchCriteria


def _load_template() -> str:
    template = files("peoplefinder.web").joinpath("templates", "index.html")
    return template.read_text(encoding="utf-8")


@lru_cache(maxsize=1)
def _get_template() -> Template:
    env = Environment(autoescape=True)
    return env.from_string(_load_template())


def _payload_fields(data: Any) -> list[tuple[str, Any]] | None:
    if isinstance(data, dict):
        return [(str(key), value) for key, value in data.items()]
    return None


def render_index(
    *,
    results: Sequence[MatchResult] = (),
    images: Sequence[str] = (),
    criteria: SearchCriteria | None = None,
    error: str | None = None,
) -> HTMLResponse:
    """Render the search form with the given results and images."""
    rows = [
        {"source": result.source, "fields": _payload_fields(result.data), "data": result.data}
        for result in results
    ]
    html = _get_template().render(
        results=rows,
        images=list(images),
        form=(criteria or SearchCriteria()).to_wire(),
        error=error,
    )
    return HTMLResponse(content=html)
