"""FastAPI application backing the PeopleFinder web UI."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import FileResponse, HTMLResponse
from pydantic import BaseModel, ConfigDict, Field

from peoplefinder import __version__
from peoplefinder.config import AppConfig
from peoplefinder.errors import DirectoryError
from peoplefinder.models import MatchResult, SearchCriteria, SearchResults
from peoplefinder.search.searcher import Searcher
from peoplefinder.utils.files import is_image
from peoplefinder.web.frontend import render_index

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="PeopleFinder Web", version=__version__)


class SearchPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    email: str = ""
    phone_number: str = Field("", alias="phoneNumber")
    address: str = ""
    country: str = ""
    state: str = ""
    username: str = ""

    def to_criteria(self) -> SearchCriteria:
        return SearchCriteria(**self.model_dump())


class SearchResponse(BaseModel):
    results: List[MatchResult]
    images: List[str]
    failed_files: List[str]


def _get_config(request: Request) -> AppConfig:
    config = getattr(request.app.state, "config", None)
    return config if config is not None else AppConfig()


def _resolve_data_dir(config: AppConfig) -> Path:
    return config.resolve_data_dir(Path.cwd())


async def _run_search(config: AppConfig, criteria: SearchCriteria) -> SearchResults:
    searcher = Searcher(_resolve_data_dir(config), max_workers=config.max_workers)
    return await asyncio.to_thread(searcher.search, criteria)


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    return render_index()


@app.post("/search", response_class=HTMLResponse)
async def search_form(
    request: Request,
    first_name: str = Form("", alias="firstName"),
    last_name: str = Form("", alias="lastName"),
    email: str = Form(""),
    phone_number: str = Form("", alias="phoneNumber"),
    address: str = Form(""),
    country: str = Form(""),
    state: str = Form(""),
    username: str = Form(""),
) -> HTMLResponse:
    criteria = SearchCriteria(
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone_number=phone_number,
        address=address,
        country=country,
        state=state,
        username=username,
    )
    try:
        found = await _run_search(_get_config(request), criteria)
    except DirectoryError as exc:
        LOGGER.error("Error reading data folder: %s", exc)
        return render_index(criteria=criteria, error="The data folder could not be read.")

    error = None
    if found.failed_files:
        error = "Some files could not be searched: " + ", ".join(found.failed_files)
    return render_index(
        results=found.results,
        images=found.images,
        criteria=criteria,
        error=error,
    )


@app.post("/api/search")
async def search_api(payload: SearchPayload, request: Request) -> SearchResponse:
    try:
        found = await _run_search(_get_config(request), payload.to_criteria())
    except DirectoryError as exc:
        LOGGER.error("Error reading data folder: %s", exc)
        raise HTTPException(status_code=503, detail="Data folder is not readable") from exc
    return SearchResponse(
        results=found.results,
        images=found.images,
        failed_files=found.failed_files,
    )


@app.get("/images/{name}")
async def get_image(name: str, request: Request) -> FileResponse:
    """Serve an image file that sits directly in the data folder."""
    data_dir = _resolve_data_dir(_get_config(request))
    candidate = Path(name)
    if candidate.name != name or not is_image(candidate):
        raise HTTPException(status_code=404, detail="Image not found")

    path = data_dir / name
    if not path.is_file():
        raise HTTPException(status_code=404, detail="Image not found")
    return FileResponse(path)
