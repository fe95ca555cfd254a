from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Response
from pydantic import BaseModel

from markupbook.notebook import ETagMismatch, NoSections, NotFound, SectionNotFound

from api.dependencies import get_store, parse_if_match, quote_etag

router = APIRouter(tags=["pages"])


class SavePageRequest(BaseModel):
    html: str
    new_title: Optional[str] = None


class NewPageRequest(BaseModel):
    title: str


class RenamePageRequest(BaseModel):
    old_title: str
    new_title: str


def _get_store():
    return get_store()


def _etag_response(response: Response) -> str:
    etag = _get_store().compute_etag()
    response.headers["ETag"] = quote_etag(etag)
    return etag


@router.get("/pages")
def list_pages(response: Response):
    pages = _get_store().list_pages()
    return {"pages": pages, "etag": _etag_response(response)}


# Titles are free text, so they may contain "/" or be empty; page routes
# take the whole remaining path as the title.
@router.get("/pages/{title:path}")
def load_page(title: str, response: Response):
    try:
        content = _get_store().load_page(title)
    except NotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return {"title": title, "content": content, "etag": _etag_response(response)}


@router.put("/pages/{title:path}")
def save_page(
    title: str,
    payload: SavePageRequest,
    response: Response,
    if_match: Optional[str] = Header(None, alias="If-Match"),
):
    new_title = payload.new_title if payload.new_title is not None else title
    try:
        _get_store().save_page_if_match(title, new_title, payload.html, parse_if_match(if_match))
    except ETagMismatch as exc:
        raise HTTPException(status_code=412, detail=str(exc))
    except NoSections as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    except SectionNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return {"title": new_title, "etag": _etag_response(response)}


@router.post("/pages", status_code=201)
def new_page(payload: NewPageRequest, response: Response):
    _get_store().insert_new_section(payload.title)
    return {"title": payload.title, "etag": _etag_response(response)}


@router.post("/pages/rename")
def rename_page(payload: RenamePageRequest, response: Response):
    try:
        _get_store().rename_section(payload.old_title, payload.new_title)
    except SectionNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return {"title": payload.new_title, "etag": _etag_response(response)}


@router.get("/etag")
def get_etag(response: Response):
    return {"etag": _etag_response(response)}
