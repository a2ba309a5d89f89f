# GitHub API integration module

from .github_api import get_user_repos, get_user_repos_graphql

__all__ = [
    "get_user_repos",
    "get_user_repos_graphql",
]
