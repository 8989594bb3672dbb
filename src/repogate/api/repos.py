# Repos router: read/write proxy onto the GitHub REST API.
# Created: 2026-10-12
#
# Every route needs a stored credential (router-level dependency) and mirrors
# one upstream endpoint. Query strings are forwarded untouched; upstream
# failures surface as UpstreamError/TransportError and are rendered by the
# app's exception handlers.

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request

from repogate.api.deps import get_github, get_settings, require_credential
from repogate.api.schemas.contents import ContentEncoding, FileWriteRequest, SpecUpdateRequest
from repogate.credentials import Credential
from repogate.errors import BadRequestError, TransportError, UpstreamError
from repogate.github.client import GitHubClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Repos"], dependencies=[Depends(require_credential)])

PAGE_SIZE = 100
_PAGING_PARAMS = frozenset({"page", "per_page"})


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def repo_path(owner: str, repo: str, *rest: str) -> str:
    """Build ``/repos/{owner}/{repo}/...`` with each segment percent-encoded."""
    parts = [quote(owner, safe=""), quote(repo, safe="")]
    parts.extend(rest)
    return "/repos/" + "/".join(parts)


def contents_path(owner: str, repo: str, path: str = "") -> str:
    path = path.strip("/")
    if not path:
        return repo_path(owner, repo, "contents")
    return repo_path(owner, repo, "contents", quote(path, safe="/"))


def forwarded_params(request: Request) -> list[tuple[str, str]]:
    return request.query_params.multi_items()


def encode_content(content: str, encoding: ContentEncoding) -> str:
    """Return *content* in the base64 form the contents API expects."""
    if encoding == "base64":
        compact = "".join(content.split())
        try:
            base64.b64decode(compact, validate=True)
        except (binascii.Error, ValueError) as e:
            raise BadRequestError("content is not valid base64") from e
        return compact
    return base64.b64encode(content.encode("utf-8")).decode("ascii")


async def collect_pages(
    github: GitHubClient,
    token: str,
    path: str,
    params: list[tuple[str, str]] | None = None,
) -> list[Any]:
    """Fetch every page of a list endpoint, in order.

    Stops at the first page holding fewer than ``PAGE_SIZE`` items. Caller
    supplied ``page``/``per_page`` values are replaced.
    """
    base = [(k, v) for k, v in (params or []) if k not in _PAGING_PARAMS]
    items: list[Any] = []
    page = 1
    while True:
        batch = await github.request(
            token,
            "GET",
            path,
            params=[*base, ("per_page", str(PAGE_SIZE)), ("page", str(page))],
        )
        if not isinstance(batch, list):
            logger.warning("Expected a list from %s page %d, got %s", path, page, type(batch).__name__)
            break
        items.extend(batch)
        if len(batch) < PAGE_SIZE:
            break
        page += 1
    return items


async def lookup_existing_sha(
    github: GitHubClient,
    token: str,
    owner: str,
    repo: str,
    path: str,
    branch: str | None = None,
) -> str | None:
    """Best-effort probe for the blob sha of an existing file.

    Any failure (404, other upstream status, network error) or a directory
    listing counts as "no existing file": the write goes ahead without a sha
    and GitHub decides.
    """
    params = {"ref": branch} if branch else None
    try:
        existing = await github.request(token, "GET", contents_path(owner, repo, path), params=params)
    except (UpstreamError, TransportError) as e:
        logger.debug("No existing sha for %s/%s:%s (%s)", owner, repo, path, e)
        return None

    if isinstance(existing, dict):
        return existing.get("sha")
    return None


async def write_file(
    request: Request,
    credential: Credential,
    owner: str,
    repo: str,
    path: str,
    *,
    message: str,
    content: str,
    encoding: ContentEncoding | None,
    branch: str | None = None,
    sha: str | None = None,
    committer: dict[str, Any] | None = None,
) -> Any:
    github = get_github(request)
    payload: dict[str, Any] = {
        "message": message,
        "content": encode_content(content, encoding or get_settings(request).default_content_encoding),
    }
    if branch:
        payload["branch"] = branch
    if committer:
        payload["committer"] = committer

    if not sha:
        sha = await lookup_existing_sha(github, credential.token, owner, repo, path, branch)
    if sha:
        payload["sha"] = sha

    return await github.request(credential.token, "PUT", contents_path(owner, repo, path), payload)


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.get("/me")
async def get_me(request: Request, credential: Credential = Depends(require_credential)):
    """Profile of the logged-in user."""
    return await get_github(request).request(credential.token, "GET", "/user")


@router.get("/repos")
async def list_repos(request: Request, credential: Credential = Depends(require_credential)):
    """All repositories visible to the user, every page merged."""
    return await collect_pages(
        get_github(request), credential.token, "/user/repos", forwarded_params(request)
    )


@router.get("/repos/{owner}/{repo}/branches")
async def list_branches(
    owner: str,
    repo: str,
    request: Request,
    credential: Credential = Depends(require_credential),
):
    return await get_github(request).request(
        credential.token, "GET", repo_path(owner, repo, "branches"), params=forwarded_params(request)
    )


@router.get("/repos/{owner}/{repo}/contents")
async def get_root_contents(
    owner: str,
    repo: str,
    request: Request,
    credential: Credential = Depends(require_credential),
):
    return await get_github(request).request(
        credential.token, "GET", contents_path(owner, repo), params=forwarded_params(request)
    )


@router.get("/repos/{owner}/{repo}/contents/{path:path}")
async def get_contents(
    owner: str,
    repo: str,
    path: str,
    request: Request,
    credential: Credential = Depends(require_credential),
):
    return await get_github(request).request(
        credential.token, "GET", contents_path(owner, repo, path), params=forwarded_params(request)
    )


@router.get("/repos/{owner}/{repo}/commits")
async def list_commits(
    owner: str,
    repo: str,
    request: Request,
    credential: Credential = Depends(require_credential),
):
    return await get_github(request).request(
        credential.token, "GET", repo_path(owner, repo, "commits"), params=forwarded_params(request)
    )


@router.get("/repos/{owner}/{repo}/git/trees/{sha}")
async def get_tree(
    owner: str,
    repo: str,
    sha: str,
    request: Request,
    credential: Credential = Depends(require_credential),
):
    return await get_github(request).request(
        credential.token,
        "GET",
        repo_path(owner, repo, "git", "trees", quote(sha, safe="")),
        params=forwarded_params(request),
    )


@router.put("/repos/{owner}/{repo}/contents/{path:path}")
async def put_contents(
    owner: str,
    repo: str,
    path: str,
    body: FileWriteRequest,
    request: Request,
    credential: Credential = Depends(require_credential),
):
    """Create or update a file. Looks up the current sha when none is given."""
    return await write_file(
        request,
        credential,
        owner,
        repo,
        path,
        message=body.message,
        content=body.content,
        encoding=body.content_encoding,
        branch=body.branch,
        sha=body.sha,
        committer=body.committer,
    )


@router.post("/repos/{owner}/{repo}/spec/update")
async def update_spec(
    owner: str,
    repo: str,
    body: SpecUpdateRequest,
    request: Request,
    credential: Credential = Depends(require_credential),
):
    """Convenience write of ``spec.yaml`` (or ``path``) with a default commit message."""
    if not body.content:
        raise BadRequestError("content is required")
    return await write_file(
        request,
        credential,
        owner,
        repo,
        body.path,
        message=body.message,
        content=body.content,
        encoding=body.content_encoding,
        branch=body.branch,
        sha=body.sha,
    )
