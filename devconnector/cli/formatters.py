# Plain-text formatters for CLI output

from typing import Any

from devconnector.constants import SOCIAL_NETWORKS


def format_user(user: dict[str, Any] | None) -> str:
    if not user:
        return "Not logged in.\n"
    return f"{user.get('name', 'N/A')} <{user.get('email', 'N/A')}> (id {user.get('id')})\n"


def _format_period(entry: dict[str, Any]) -> str:
    start = entry.get("from") or "?"
    end = "Now" if entry.get("current") else (entry.get("to") or "?")
    return f"{start} - {end}"


def format_profile(profile: dict[str, Any] | None) -> str:
    """
    Format a profile as plain text.

    Accepts the API shape or the flattened shape (social links at top level).
    """
    if not profile:
        return "No profile.\n"

    user = profile.get("user") or {}
    output = [f"\n{user.get('name', 'N/A')} - {profile.get('status', 'N/A')}"]
    for label, key in (
        ("Company", "company"),
        ("Location", "location"),
        ("Website", "website"),
        ("GitHub", "github_username"),
    ):
        if profile.get(key):
            output.append(f"   {label}: {profile[key]}")
    output.append(f"   Skills: {', '.join(profile.get('skills') or []) or 'N/A'}")
    if profile.get("bio"):
        output.append(f"   Bio: {profile['bio']}")

    social = profile.get("social") or {key: profile[key] for key in SOCIAL_NETWORKS if profile.get(key)}
    for network, url in social.items():
        output.append(f"   {network.capitalize()}: {url}")

    if profile.get("experience"):
        output.append("\n   Experience:")
        for entry in profile["experience"]:
            output.append(
                f"     [{entry.get('id')}] {entry.get('title')} at {entry.get('company')} "
                f"({_format_period(entry)})"
            )
    if profile.get("education"):
        output.append("\n   Education:")
        for entry in profile["education"]:
            output.append(
                f"     [{entry.get('id')}] {entry.get('degree')}, {entry.get('field_of_study')} "
                f"at {entry.get('school')} ({_format_period(entry)})"
            )
    output.append("")
    return "\n".join(output)


def format_repos(repos: list[dict[str, Any]]) -> str:
    if not repos:
        return "No repositories found.\n"

    output = []
    for i, repo in enumerate(repos, 1):
        output.append(f"{i}. {repo.get('name', 'N/A')}")
        output.append(f"   URL: {repo.get('url', 'N/A')}")
        output.append(f"   Created: {repo.get('created_at', 'N/A')}")
    output.append("")
    return "\n".join(output)


def format_posts(posts: list[dict[str, Any]]) -> str:
    if not posts:
        return "No posts yet.\n"

    output = []
    for post in posts:
        likes = len(post.get("likes") or [])
        comments = len(post.get("comments") or [])
        output.append(f"\n[{post.get('id')}] {post.get('name', 'N/A')} ({post.get('created_at', '')})")
        output.append(f"   {post.get('text', '')}")
        output.append(f"   {likes} like(s), {comments} comment(s)")
    output.append("")
    return "\n".join(output)
