"""Load proposal records from JSON exports or the ``get-proposal`` endpoint.

Proposal rows keep the column names of the hosted ``PROPOSAL`` table
(``"PROPOSAL DATA"``, ``STATUS``, ``share_id`` ...). Payloads may be a bare list
of rows or the ``{"proposals": [...]}`` / ``{"proposal": {...}}`` envelopes the
endpoint returns.

Example
-------
>>> from pathlib import Path
>>> from proposal_deck.proposals import find_proposal, load_proposals
>>> proposals = load_proposals(Path("proposals.json"))  # doctest: +SKIP
>>> find_proposal(proposals, "42").display_title  # doctest: +SKIP
'Proposal for Acme'
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import json
import logging
import re
import typing as typ
from pathlib import Path

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)

CONTENT_COLUMN = "PROPOSAL DATA"
UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)
_EPOCH = dt.datetime.min.replace(tzinfo=dt.UTC)


class ProposalSourceError(ValueError):
    """Raised when a proposal payload cannot be interpreted."""


class ProposalNotFound(KeyError):
    """Raised when no proposal matches the requested identifier."""


@dc.dataclass(frozen=True, slots=True)
class Proposal:
    """A stored proposal: HTML content plus sharing metadata."""

    id: int
    proposal_data: str | None = None
    created_at: dt.datetime | None = None
    status: str | None = None
    share_id: str | None = None
    client_name: str | None = None
    is_published: bool = False

    @property
    def display_title(self) -> str:
        """Return the heading the viewer shows above the slides."""
        if self.client_name:
            return f"Proposal for {self.client_name}"
        return "Business Proposal"

    @property
    def html(self) -> str:
        return self.proposal_data or ""

    @classmethod
    def from_row(cls, row: typ.Mapping[str, typ.Any]) -> Proposal:
        """Build a Proposal from a ``PROPOSAL`` table row."""
        raw_id = row.get("id")
        try:
            proposal_id = int(raw_id)  # type: ignore[arg-type]
        except (TypeError, ValueError) as exc:
            msg = f"Proposal row has an invalid id: {raw_id!r}."
            raise ProposalSourceError(msg) from exc
        content = row.get(CONTENT_COLUMN)
        return cls(
            id=proposal_id,
            proposal_data=str(content) if content is not None else None,
            created_at=_parse_timestamp(row.get("created_at")),
            status=_optional_str(row.get("STATUS")),
            share_id=_optional_str(row.get("share_id")),
            client_name=_optional_str(row.get("client_name")),
            is_published=_parse_flag(row.get("is_published")),
        )


def parse_proposals(payload: object) -> list[Proposal]:
    """Return proposals from a decoded JSON payload.

    Raises
    ------
    ProposalSourceError
        If the payload is neither a list of rows nor a known envelope.
    """
    match payload:
        case {"proposals": list() as rows}:
            pass
        case {"proposal": dict() as row}:
            rows = [row]
        case list() as rows:
            pass
        case {"error": message}:
            msg = f"Proposal source returned an error: {message}"
            raise ProposalSourceError(msg)
        case _:
            msg = "Expected a list of proposals or a 'proposals' envelope."
            raise ProposalSourceError(msg)
    proposals: list[Proposal] = []
    for row in rows:
        if not isinstance(row, dict):
            msg = f"Proposal rows must be objects, got {type(row).__name__}."
            raise ProposalSourceError(msg)
        proposals.append(Proposal.from_row(row))
    return proposals


def load_proposals(path: Path) -> list[Proposal]:
    """Read proposals from a JSON export on disk."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"'{path}' is not valid JSON: {exc.msg}."
        raise ProposalSourceError(msg) from exc
    proposals = parse_proposals(payload)
    logger.info("Loaded %d proposal(s) from %s.", len(proposals), path)
    return proposals


def fetch_proposals(url: str, *, timeout: int = 30) -> list[Proposal]:
    """Download proposals from ``url`` using a retrying session."""
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    try:
        resp = session.get(url, timeout=timeout)
        resp.raise_for_status()
        try:
            payload = resp.json()
        except ValueError as exc:
            msg = f"Response from {url} is not valid JSON."
            raise ProposalSourceError(msg) from exc
    finally:
        session.close()
    proposals = parse_proposals(payload)
    logger.info("Fetched %d proposal(s) from %s.", len(proposals), url)
    return proposals


def read_source(source: str) -> list[Proposal]:
    """Load proposals from an ``http(s)`` URL or a local JSON file path."""
    if source.startswith(("http://", "https://")):
        return fetch_proposals(source)
    return load_proposals(Path(source))


def find_proposal(proposals: typ.Iterable[Proposal], identifier: str) -> Proposal:
    """Return the proposal addressed by a share id (UUID) or numeric id."""
    key = identifier.strip()
    if UUID_PATTERN.match(key):
        lowered = key.lower()
        for proposal in proposals:
            if proposal.share_id and proposal.share_id.lower() == lowered:
                return proposal
    elif key.isdigit():
        wanted = int(key)
        for proposal in proposals:
            if proposal.id == wanted:
                return proposal
    msg = f"Proposal '{identifier}' not found."
    raise ProposalNotFound(msg)


def recent_proposals(
    proposals: typ.Iterable[Proposal], limit: int = 10
) -> list[Proposal]:
    """Return up to ``limit`` proposals, newest first."""
    ordered = sorted(proposals, key=lambda item: item.created_at or _EPOCH, reverse=True)
    return ordered[:limit]


def _parse_flag(value: object) -> bool:
    """Return a boolean column value, accepting JSON booleans and their text forms."""
    match value:
        case bool():
            return value
        case None:
            return False
        case str() if value.strip().lower() in {"true", "false", ""}:
            return value.strip().lower() == "true"
    msg = f"Proposal row has an invalid is_published flag: {value!r}."
    raise ProposalSourceError(msg)


def _optional_str(value: object | None) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_timestamp(value: object) -> dt.datetime | None:
    """Return a timezone-aware UTC datetime parsed from ``value``, or None."""
    match value:
        case dt.datetime():
            parsed = value
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            if sanitized.endswith("Z"):
                sanitized = sanitized[:-1] + "+00:00"
            try:
                parsed = dt.datetime.fromisoformat(sanitized)
            except ValueError:
                return None
        case _:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=dt.UTC)
    return parsed.astimezone(dt.UTC)


__all__ = [
    "CONTENT_COLUMN",
    "Proposal",
    "ProposalNotFound",
    "ProposalSourceError",
    "fetch_proposals",
    "find_proposal",
    "load_proposals",
    "parse_proposals",
    "read_source",
    "recent_proposals",
]
