"""Jira API client wrapper (REST v2 + enhanced search pagination)."""

from __future__ import annotations

import logging
from typing import Any

import requests
from jira import JIRA, JIRAError

from .config import DEFAULT_MAX_RESULTS
from .errors import TrackerError

logger = logging.getLogger(__name__)


class JiraAPI:
    def __init__(self, server: str, username: str, token: str):
        self.server = server.rstrip("/")
        self.client = JIRA(
            basic_auth=(username, token), options={"server": self.server, "rest_api_version": "2"}
        )

    def myself(self) -> dict[str, Any]:
        """Return the authenticated user's raw profile."""
        try:
            return self.client.myself()
        except (JIRAError, requests.RequestException) as exc:
            raise TrackerError(f"Failed to fetch current user: {exc}") from exc

    def search(
        self,
        jql: str,
        fields: list[str] | None = None,
        expand: list[str] | None = None,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> list[dict[str, Any]]:
        session = getattr(self.client, "_session", None)
        if session is None:
            raise TrackerError("JIRA session unavailable")
        url = f"{self.server}/rest/api/2/search/jql"
        params: dict[str, Any] = {"jql": jql, "maxResults": max_results}
        if fields:
            params["fields"] = ",".join(fields)
        if expand:
            params["expand"] = ",".join(expand)
        out: list[dict[str, Any]] = []
        token = None
        pages = 0
        while len(out) < max_results:
            qp = dict(params)
            if token:
                qp["nextPageToken"] = token
            try:
                resp = session.get(url, params=qp)
            except (JIRAError, requests.RequestException) as exc:
                raise TrackerError(f"Search request failed: {exc}") from exc
            if resp.status_code >= 400:
                raise TrackerError(f"Search failed {resp.status_code}: {resp.text[:200]}")
            try:
                data = resp.json()
            except ValueError as exc:
                raise TrackerError(f"Search returned a non-JSON body: {resp.text[:200]}") from exc
            out.extend(data.get("issues", []))
            pages += 1
            token = data.get("nextPageToken")
            if not token or data.get("isLast") is True:
                break
        logger.debug("Search returned %s issue(s) in %s page(s)", len(out), pages)
        return out[:max_results]
