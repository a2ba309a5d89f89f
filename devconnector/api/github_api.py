"""
GitHub repository lookups (REST and GraphQL).

A thin pass-through: one outbound request per call, no retries, no caching,
no rate-limit handling. Responses are normalized to
``{"id", "name", "url", "created_at"}`` dictionaries.
"""

from typing import Any

import httpx

from devconnector.config import get_settings
from devconnector.constants import GITHUB_USER_AGENT
from devconnector.exceptions import GitHubAPIError, GitHubUserNotFound
from devconnector.logging import get_logger, log_timing

logger = get_logger("github")

USER_REPOS_QUERY = """
query ($username: String!, $orderField: RepositoryOrderField!, $direction: OrderDirection!,
       $pagination: Int, $endCursor: String) {
  user(login: $username) {
    repositories(orderBy: {field: $orderField, direction: $direction},
                 first: $pagination, after: $endCursor) {
      nodes {
        id
        name
        url
        createdAt
        owner { login }
      }
      pageInfo {
        endCursor
        hasNextPage
      }
    }
  }
}
"""


def _get_headers(graphql: bool = False) -> dict[str, str]:
    """Get headers for GitHub API requests."""
    token = get_settings().github_token
    headers = {
        "Accept": "application/json" if graphql else "application/vnd.github.v3+json",
        "User-Agent": GITHUB_USER_AGENT,
    }
    if token:
        prefix = "bearer" if graphql else "token"
        headers["Authorization"] = f"{prefix} {token}"
    return headers


def _http_client() -> httpx.Client:
    """HTTP client for a single lookup."""
    return httpx.Client(timeout=get_settings().github_timeout_seconds)


def _normalize_rest_repo(repo: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": repo.get("id"),
        "name": repo.get("name"),
        "url": repo.get("html_url"),
        "created_at": repo.get("created_at"),
    }


def _normalize_graphql_repo(node: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": node.get("id"),
        "name": node.get("name"),
        "url": node.get("url"),
        "created_at": node.get("createdAt"),
    }


@log_timing("github_repos_rest", logger=logger)
def get_user_repos(username: str) -> list[dict[str, Any]]:
    """
    List a user's public repositories through the REST API.

    Returns the configured page size, oldest repository first.

    Raises:
        GitHubUserNotFound: GitHub answered 404 for the username
        GitHubAPIError: Any other transport or HTTP failure
    """
    settings = get_settings()
    params: dict[str, Any] = {
        "per_page": settings.github_repos_per_page,
        "sort": "created",
        "direction": "asc",
    }
    if settings.github_client_id and settings.github_client_secret:
        params["client_id"] = settings.github_client_id
        params["client_secret"] = settings.github_client_secret

    url = f"{settings.github_api_base}/users/{username}/repos"
    try:
        with _http_client() as client:
            response = client.get(url, params=params, headers=_get_headers())
    except httpx.HTTPError as e:
        logger.error("github_request_exception", error=str(e), username=username)
        raise GitHubAPIError() from e

    if response.status_code == 404:
        logger.info("github_user_not_found", username=username)
        raise GitHubUserNotFound()
    if response.status_code != 200:
        logger.error("github_api_error", status=response.status_code, username=username)
        raise GitHubAPIError()

    return [_normalize_rest_repo(repo) for repo in response.json()]


def _is_not_found(errors: list[dict[str, Any]]) -> bool:
    return any(
        error.get("type") == "NOT_FOUND" or "could not resolve" in str(error.get("message", "")).lower()
        for error in errors
    )


@log_timing("github_repos_graphql", logger=logger)
def get_user_repos_graphql(username: str, cursor: str | None = None) -> dict[str, Any]:
    """
    Fetch one page of a user's repositories through the GraphQL API.

    Args:
        username: GitHub login
        cursor: ``end_cursor`` of the previous page, None for the first page

    Returns:
        {"repos": [...], "page_info": {"has_next_page": bool, "end_cursor": str | None}}

    Raises:
        GitHubUserNotFound: GitHub reported NOT_FOUND for the login
        GitHubAPIError: Any other transport, HTTP or GraphQL failure
    """
    settings = get_settings()
    variables = {
        "username": username,
        "orderField": "CREATED_AT",
        "direction": "ASC",
        "pagination": settings.github_repos_per_page,
        "endCursor": cursor,
    }

    try:
        with _http_client() as client:
            response = client.post(
                settings.github_graphql_endpoint,
                json={"query": USER_REPOS_QUERY, "variables": variables},
                headers=_get_headers(graphql=True),
            )
    except httpx.HTTPError as e:
        logger.error("graphql_request_exception", error=str(e), username=username)
        raise GitHubAPIError() from e

    if response.status_code != 200:
        logger.error("graphql_request_failed", status=response.status_code, username=username)
        raise GitHubAPIError()

    payload = response.json()
    errors = payload.get("errors") or []
    if errors:
        if _is_not_found(errors):
            logger.info("github_user_not_found", username=username)
            raise GitHubUserNotFound()
        logger.error("graphql_error", error=errors[0].get("message", "Unknown"), username=username)
        raise GitHubAPIError()

    user = (payload.get("data") or {}).get("user")
    if user is None:
        raise GitHubUserNotFound()

    repositories = user.get("repositories") or {}
    page_info = repositories.get("pageInfo") or {}
    return {
        "repos": [_normalize_graphql_repo(node) for node in repositories.get("nodes") or []],
        "page_info": {
            "has_next_page": bool(page_info.get("hasNextPage")),
            "end_cursor": page_info.get("endCursor"),
        },
    }
