from __future__ import annotations

import json

import httpx
import pytest

import devconnector.api.github_api as github_api
from devconnector.config import get_settings
from devconnector.exceptions import GitHubAPIError, GitHubUserNotFound


def _use_transport(monkeypatch, handler):
    """Route every GitHub call through an in-process handler."""
    monkeypatch.setattr(
        github_api, "_http_client", lambda: httpx.Client(transport=httpx.MockTransport(handler))
    )


def test_rest_lookup_normalizes_repos(monkeypatch, sample_github_repos):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        return httpx.Response(200, json=sample_github_repos)

    _use_transport(monkeypatch, handler)

    repos = github_api.get_user_repos("janedoe")

    assert repos == [
        {"id": 1, "name": "first", "url": "https://github.com/janedoe/first", "created_at": "2019-01-01T00:00:00Z"},
        {"id": 2, "name": "second", "url": "https://github.com/janedoe/second", "created_at": "2020-01-01T00:00:00Z"},
    ]
    request = captured["request"]
    assert request.url.path == "/users/janedoe/repos"
    assert request.url.params["per_page"] == "5"
    assert request.url.params["sort"] == "created"
    assert request.url.params["direction"] == "asc"
    assert "client_id" not in request.url.params
    assert request.headers["User-Agent"]


def test_rest_lookup_sends_app_credentials_when_configured(monkeypatch):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["params"] = request.url.params
        return httpx.Response(200, json=[])

    settings = get_settings()
    monkeypatch.setattr(settings, "github_client_id", "cid")
    monkeypatch.setattr(settings, "github_client_secret", "csecret")
    _use_transport(monkeypatch, handler)

    assert github_api.get_user_repos("janedoe") == []
    assert captured["params"]["client_id"] == "cid"
    assert captured["params"]["client_secret"] == "csecret"


@pytest.mark.parametrize(
    "status_code, expected",
    [(404, GitHubUserNotFound), (500, GitHubAPIError), (403, GitHubAPIError)],
)
def test_rest_lookup_error_mapping(monkeypatch, status_code, expected):
    _use_transport(monkeypatch, lambda request: httpx.Response(status_code, json={"message": "x"}))

    with pytest.raises(expected):
        github_api.get_user_repos("ghost")


def test_transport_failure_is_api_error(monkeypatch):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    _use_transport(monkeypatch, handler)

    with pytest.raises(GitHubAPIError):
        github_api.get_user_repos("janedoe")
    with pytest.raises(GitHubAPIError):
        github_api.get_user_repos_graphql("janedoe")


def _graphql_page(nodes, has_next_page=False, end_cursor=None):
    return {
        "data": {
            "user": {
                "repositories": {
                    "nodes": nodes,
                    "pageInfo": {"hasNextPage": has_next_page, "endCursor": end_cursor},
                }
            }
        }
    }


def test_graphql_uses_variables_not_interpolation(monkeypatch):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["body"] = json.loads(request.content)
        captured["headers"] = request.headers
        return httpx.Response(
            200,
            json=_graphql_page(
                [{"id": "R_1", "name": "first", "url": "https://github.com/x/first", "createdAt": "2019"}],
                has_next_page=True,
                end_cursor="Y3Vyc29yOjE=",
            ),
        )

    _use_transport(monkeypatch, handler)

    username = 'ev"il) { viewer { login } }'
    page = github_api.get_user_repos_graphql(username, cursor="abc")

    body = captured["body"]
    assert username not in body["query"]
    assert "abc" not in body["query"]
    assert body["variables"]["username"] == username
    assert body["variables"]["endCursor"] == "abc"
    assert body["variables"]["pagination"] == 5
    assert body["variables"]["orderField"] == "CREATED_AT"
    assert body["variables"]["direction"] == "ASC"
    assert page == {
        "repos": [{"id": "R_1", "name": "first", "url": "https://github.com/x/first", "created_at": "2019"}],
        "page_info": {"has_next_page": True, "end_cursor": "Y3Vyc29yOjE="},
    }


def test_graphql_first_page_sends_null_cursor(monkeypatch):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json=_graphql_page([]))

    _use_transport(monkeypatch, handler)

    page = github_api.get_user_repos_graphql("janedoe")

    assert captured["body"]["variables"]["endCursor"] is None
    assert page["page_info"] == {"has_next_page": False, "end_cursor": None}


def test_graphql_unknown_user(monkeypatch):
    not_found = {
        "data": {"user": None},
        "errors": [{"type": "NOT_FOUND", "message": "Could not resolve to a User with the login of 'ghost'."}],
    }
    _use_transport(monkeypatch, lambda request: httpx.Response(200, json=not_found))

    with pytest.raises(GitHubUserNotFound):
        github_api.get_user_repos_graphql("ghost")


def test_graphql_null_user_without_errors(monkeypatch):
    _use_transport(monkeypatch, lambda request: httpx.Response(200, json={"data": {"user": None}}))

    with pytest.raises(GitHubUserNotFound):
        github_api.get_user_repos_graphql("ghost")


def test_graphql_other_errors(monkeypatch):
    rate_limited = {"errors": [{"type": "RATE_LIMITED", "message": "API rate limit exceeded"}]}
    _use_transport(monkeypatch, lambda request: httpx.Response(200, json=rate_limited))

    with pytest.raises(GitHubAPIError):
        github_api.get_user_repos_graphql("janedoe")


def test_graphql_http_failure(monkeypatch):
    _use_transport(monkeypatch, lambda request: httpx.Response(401, json={"message": "Bad credentials"}))

    with pytest.raises(GitHubAPIError):
        github_api.get_user_repos_graphql("janedoe")


def test_token_is_sent_when_configured(monkeypatch):
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured.setdefault("auth", []).append(request.headers.get("Authorization"))
        if request.method == "POST":
            return httpx.Response(200, json=_graphql_page([]))
        return httpx.Response(200, json=[])

    monkeypatch.setattr(get_settings(), "github_token", "ghp_test")
    _use_transport(monkeypatch, handler)

    github_api.get_user_repos("janedoe")
    github_api.get_user_repos_graphql("janedoe")

    assert captured["auth"] == ["token ghp_test", "bearer ghp_test"]
