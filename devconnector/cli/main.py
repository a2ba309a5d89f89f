"""
DevConnector CLI.

Drives the HTTP API through the client actions. The auth token is kept in
a local file (``DEVCONNECTOR_TOKEN_FILE``, default ``~/.devconnector/token``)
so that one login serves later commands.
"""

import argparse
import getpass
import os
import sys
from collections.abc import Callable
from typing import Any

from dotenv import load_dotenv

from devconnector.client import Actions, Alert, DevConnectorAPI, Store, TokenFile
from devconnector.client.api import DEFAULT_BASE_URL
from devconnector.client.store import SET_ALERT
from devconnector.cli.formatters import format_posts, format_profile, format_repos, format_user
from devconnector.constants import PROFESSIONAL_STATUSES, SOCIAL_NETWORKS
from devconnector.logging import configure_logging

DEFAULT_TOKEN_FILE = "~/.devconnector/token"

PROFILE_FORM_FIELDS = (
    ("company", "Company"),
    ("website", "Website"),
    ("location", "Location"),
    ("skills", "* Skills (comma separated)"),
    ("github_username", "GitHub username"),
    ("bio", "A short bio of yourself"),
)


def _print_alert(action_type: str, payload: Any) -> None:
    if action_type == SET_ALERT and isinstance(payload, Alert):
        stream = sys.stderr if payload.alert_type == "danger" else sys.stdout
        print(f"[{payload.alert_type}] {payload.msg}", file=stream)


def build_actions(api_url: str, token_file: str) -> Actions:
    store = Store(token_storage=TokenFile(token_file))
    store.subscribe(_print_alert)
    return Actions(store, DevConnectorAPI(api_url))


def prompt_profile_form(
    current: dict[str, Any] | None,
    with_social: bool = False,
    input_fn: Callable[[str], str] = input,
) -> dict[str, Any]:
    """
    Ask for each profile field, offering the current value as default.

    ``current`` is a flattened profile (social links at top level).
    """
    current = current or {}
    form: dict[str, Any] = {}

    def ask(key: str, label: str) -> str:
        default = current.get(key) or ""
        if isinstance(default, list):
            default = ", ".join(default)
        answer = input_fn(f"{label} [{default}]: ").strip()
        return answer or default

    print("Professional status: " + ", ".join(PROFESSIONAL_STATUSES))
    form["status"] = ask("status", "* Status")
    for key, label in PROFILE_FORM_FIELDS:
        form[key] = ask(key, label)
    if with_social:
        for network in SOCIAL_NETWORKS:
            form[network] = ask(network, f"{network.capitalize()} URL")
    return form


# =============================================================================
# Commands
# =============================================================================


def cmd_register(actions: Actions, args) -> int:
    name = args.name or input("Name: ")
    email = args.email or input("Email: ")
    password = args.password or getpass.getpass("Password: ")
    confirm = args.password or getpass.getpass("Confirm password: ")
    if password != confirm:
        print("Passwords do not match", file=sys.stderr)
        return 1

    if not actions.register(name, email, password):
        return 1
    print(f"Registered and logged in as {format_user(actions.store.auth.user)}", end="")
    return 0


def cmd_login(actions: Actions, args) -> int:
    email = args.email or input("Email: ")
    password = args.password or getpass.getpass("Password: ")
    if not actions.login(email, password):
        return 1
    print(f"Logged in as {format_user(actions.store.auth.user)}", end="")
    return 0


def cmd_logout(actions: Actions, args) -> int:
    actions.logout()
    print("Logged out.")
    return 0


def cmd_me(actions: Actions, args) -> int:
    actions.load_user()
    if not actions.store.auth.is_authenticated:
        print("Not logged in.", file=sys.stderr)
        return 1
    print(format_user(actions.store.auth.user), end="")
    return 0


def cmd_profile_show(actions: Actions, args) -> int:
    if args.user_id:
        actions.get_profile_by_id(args.user_id)
    else:
        actions.get_current_profile()

    state = actions.store.profile
    if state.profile is None:
        print(state.error.get("msg", "No profile."), file=sys.stderr)
        return 1
    print(format_profile(state.profile))
    return 0


def cmd_profile_edit(actions: Actions, args) -> int:
    actions.get_current_profile()
    current = actions.store.profile.profile
    form = prompt_profile_form(current, with_social=args.social)
    return 0 if actions.create_profile(form, edit=current is not None) else 1


def cmd_repos(actions: Actions, args) -> int:
    actions.get_github_repos(args.username)
    state = actions.store.profile
    if state.error and not state.repos:
        print(state.error.get("msg", "Lookup failed"), file=sys.stderr)
        return 1
    print(format_repos(state.repos))
    return 0


def cmd_posts_list(actions: Actions, args) -> int:
    actions.get_posts()
    if actions.store.post.error:
        print(actions.store.post.error.get("msg"), file=sys.stderr)
        return 1
    print(format_posts(actions.store.post.posts))
    return 0


def cmd_posts_add(actions: Actions, args) -> int:
    text = " ".join(args.text) if args.text else input("Say something: ")
    return 0 if actions.add_post(text) else 1


def main(argv: list[str] | None = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(prog="devconnector", description="DevConnector command line client")
    parser.add_argument(
        "--api-url",
        default=os.getenv("DEVCONNECTOR_API_URL", DEFAULT_BASE_URL),
        help="Base URL of the DevConnector API",
    )
    parser.add_argument(
        "--token-file",
        default=os.getenv("DEVCONNECTOR_TOKEN_FILE", DEFAULT_TOKEN_FILE),
        help="Where the auth token is stored",
    )
    subparsers = parser.add_subparsers(dest="command")

    register_parser = subparsers.add_parser("register", help="Create an account")
    register_parser.add_argument("--name")
    register_parser.add_argument("--email")
    register_parser.add_argument("--password")

    login_parser = subparsers.add_parser("login", help="Log in")
    login_parser.add_argument("--email")
    login_parser.add_argument("--password")

    subparsers.add_parser("logout", help="Forget the stored token")
    subparsers.add_parser("me", help="Show the logged-in user")

    profile_parser = subparsers.add_parser("profile", help="Show or edit profiles")
    profile_sub = profile_parser.add_subparsers(dest="profile_command")
    show_parser = profile_sub.add_parser("show", help="Show your profile or another user's")
    show_parser.add_argument("--user-id", help="Show this user's profile instead of yours")
    edit_parser = profile_sub.add_parser("edit", help="Create or edit your profile interactively")
    edit_parser.add_argument("--social", action="store_true", help="Also ask for social links")

    repos_parser = subparsers.add_parser("repos", help="List a GitHub user's repositories")
    repos_parser.add_argument("username")

    posts_parser = subparsers.add_parser("posts", help="Read or write posts")
    posts_sub = posts_parser.add_subparsers(dest="posts_command")
    posts_sub.add_parser("list", help="List posts, newest first")
    add_parser = posts_sub.add_parser("add", help="Write a post")
    add_parser.add_argument("text", nargs="*")

    args = parser.parse_args(argv)

    commands = {
        "register": cmd_register,
        "login": cmd_login,
        "logout": cmd_logout,
        "me": cmd_me,
        ("profile", "show"): cmd_profile_show,
        ("profile", "edit"): cmd_profile_edit,
        "repos": cmd_repos,
        ("posts", "list"): cmd_posts_list,
        ("posts", "add"): cmd_posts_add,
    }

    key: Any = args.command
    if args.command == "profile":
        key = ("profile", args.profile_command)
    elif args.command == "posts":
        key = ("posts", args.posts_command)

    if key not in commands:
        parser.print_help()
        return 1

    configure_logging(level="WARNING")
    actions = build_actions(args.api_url, args.token_file)
    try:
        return commands[key](actions, args)
    finally:
        actions.cancel_alert_timers()
        actions.api.close()


if __name__ == "__main__":
    sys.exit(main())
