from backend.app.routers import profile as profile_router
from devconnector.exceptions import GitHubAPIError, GitHubUserNotFound


def test_github_repos_route_returns_normalized_repos(monkeypatch, client):
    captured = {}

    def fake_repos(username):
        captured["username"] = username
        return [{"id": 1, "name": "first", "url": "https://github.com/o/first", "created_at": "2019"}]

    monkeypatch.setattr(profile_router.github_api, "get_user_repos", fake_repos)

    resp = client.get("/api/profile/github/octocat")

    assert resp.status_code == 200
    assert resp.json() == [
        {"id": 1, "name": "first", "url": "https://github.com/o/first", "created_at": "2019"}
    ]
    assert captured["username"] == "octocat"


def test_unknown_github_user_is_404(monkeypatch, client):
    def fake_repos(username):
        raise GitHubUserNotFound()

    monkeypatch.setattr(profile_router.github_api, "get_user_repos", fake_repos)

    resp = client.get("/api/profile/github/nobody")

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Invalid username"


def test_github_failure_is_generic_500(monkeypatch, client):
    def fake_repos(username):
        raise GitHubAPIError()

    monkeypatch.setattr(profile_router.github_api, "get_user_repos", fake_repos)

    resp = client.get("/api/profile/github/octocat")

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Server error", "status_code": 500}


def test_graphql_route_passes_cursor(monkeypatch, client):
    calls = []

    def fake_graphql(username, cursor=None):
        calls.append((username, cursor))
        return {
            "repos": [{"id": "R_1", "name": "a", "url": "u", "created_at": "2020"}],
            "page_info": {"has_next_page": cursor is None, "end_cursor": "Y3Vyc29yOjE="},
        }

    monkeypatch.setattr(profile_router.github_api, "get_user_repos_graphql", fake_graphql)

    first = client.get("/api/profile/github-graphql/octocat")
    second = client.get("/api/profile/github-graphql/octocat/Y3Vyc29yOjE=")

    assert first.status_code == 200
    assert first.json()["page_info"] == {"has_next_page": True, "end_cursor": "Y3Vyc29yOjE="}
    assert second.json()["page_info"]["has_next_page"] is False
    assert calls == [("octocat", None), ("octocat", "Y3Vyc29yOjE=")]
