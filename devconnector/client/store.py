"""
Client-side state.

A single ``Store`` holds auth, profile, post and alert state. Actions are
applied with ``dispatch(action_type, payload)``; subscribers are called
after every dispatch with the action that was applied.
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Alerts
SET_ALERT = "SET_ALERT"
REMOVE_ALERT = "REMOVE_ALERT"

# Auth
REGISTER_SUCCESS = "REGISTER_SUCCESS"
REGISTER_FAIL = "REGISTER_FAIL"
USER_LOADED = "USER_LOADED"
AUTH_ERROR = "AUTH_ERROR"
LOGIN_SUCCESS = "LOGIN_SUCCESS"
LOGIN_FAIL = "LOGIN_FAIL"
LOGOUT = "LOGOUT"
ACCOUNT_DELETED = "ACCOUNT_DELETED"

# Profile
GET_PROFILE = "GET_PROFILE"
GET_PROFILES = "GET_PROFILES"
GET_REPOS = "GET_REPOS"
UPDATE_PROFILE = "UPDATE_PROFILE"
PROFILE_ERROR = "PROFILE_ERROR"
CLEAR_PROFILE = "CLEAR_PROFILE"

# Posts
GET_POSTS = "GET_POSTS"
GET_POST = "GET_POST"
ADD_POST = "ADD_POST"
DELETE_POST = "DELETE_POST"
UPDATE_LIKES = "UPDATE_LIKES"
ADD_COMMENT = "ADD_COMMENT"
REMOVE_COMMENT = "REMOVE_COMMENT"
POST_ERROR = "POST_ERROR"

Subscriber = Callable[[str, Any], None]


class TokenFile:
    """Token persisted in a local file between CLI invocations."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def load(self) -> str | None:
        if not self.path.exists():
            return None
        token = self.path.read_text(encoding="utf-8").strip()
        return token or None

    def save(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(token, encoding="utf-8")
        self.path.chmod(0o600)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


@dataclass
class Alert:
    id: str
    msg: str
    alert_type: str


@dataclass
class AuthState:
    token: str | None = None
    is_authenticated: bool = False
    loading: bool = True
    user: dict[str, Any] | None = None


@dataclass
class ProfileState:
    profile: dict[str, Any] | None = None
    profiles: list[dict[str, Any]] = field(default_factory=list)
    repos: list[dict[str, Any]] = field(default_factory=list)
    loading: bool = True
    error: dict[str, Any] = field(default_factory=dict)


@dataclass
class PostState:
    posts: list[dict[str, Any]] = field(default_factory=list)
    post: dict[str, Any] | None = None
    loading: bool = True
    error: dict[str, Any] = field(default_factory=dict)


class Store:
    """Application state container. Dispatch is thread-safe."""

    def __init__(self, token_storage: TokenFile | None = None):
        self.token_storage = token_storage
        token = token_storage.load() if token_storage else None
        self.auth = AuthState(token=token)
        self.profile = ProfileState()
        self.post = PostState()
        self.alerts: list[Alert] = []
        self._subscribers: list[Subscriber] = []
        self._lock = threading.RLock()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def dispatch(self, action_type: str, payload: Any = None) -> None:
        with self._lock:
            self._reduce_alerts(action_type, payload)
            self._reduce_auth(action_type, payload)
            self._reduce_profile(action_type, payload)
            self._reduce_post(action_type, payload)
        for callback in list(self._subscribers):
            callback(action_type, payload)

    # ------------------------------------------------------------------
    # Reducers
    # ------------------------------------------------------------------

    def _reduce_alerts(self, action_type: str, payload: Any) -> None:
        if action_type == SET_ALERT:
            self.alerts.append(payload)
        elif action_type == REMOVE_ALERT:
            self.alerts = [alert for alert in self.alerts if alert.id != payload]

    def _reduce_auth(self, action_type: str, payload: Any) -> None:
        auth = self.auth
        if action_type == USER_LOADED:
            auth.is_authenticated = True
            auth.loading = False
            auth.user = payload
        elif action_type in (REGISTER_SUCCESS, LOGIN_SUCCESS):
            auth.token = payload["token"]
            if self.token_storage:
                self.token_storage.save(auth.token)
            auth.is_authenticated = True
            auth.loading = False
        elif action_type in (REGISTER_FAIL, AUTH_ERROR, LOGIN_FAIL, LOGOUT, ACCOUNT_DELETED):
            if self.token_storage:
                self.token_storage.clear()
            self.auth = AuthState(token=None, is_authenticated=False, loading=False, user=None)

    def _reduce_profile(self, action_type: str, payload: Any) -> None:
        state = self.profile
        if action_type in (GET_PROFILE, UPDATE_PROFILE):
            state.profile = payload
            state.loading = False
        elif action_type == GET_PROFILES:
            state.profiles = payload
            state.loading = False
        elif action_type == GET_REPOS:
            state.repos = payload
            state.loading = False
        elif action_type == PROFILE_ERROR:
            state.error = payload
            state.loading = False
            state.profile = None
        elif action_type == CLEAR_PROFILE:
            state.profile = None
            state.repos = []
            state.loading = False

    def _reduce_post(self, action_type: str, payload: Any) -> None:
        state = self.post
        if action_type == GET_POSTS:
            state.posts = payload
            state.loading = False
        elif action_type == GET_POST:
            state.post = payload
            state.loading = False
        elif action_type == ADD_POST:
            state.posts = [payload, *state.posts]
            state.loading = False
        elif action_type == DELETE_POST:
            state.posts = [post for post in state.posts if post["id"] != payload]
            state.loading = False
        elif action_type == UPDATE_LIKES:
            for post in state.posts:
                if post["id"] == payload["id"]:
                    post["likes"] = payload["likes"]
            if state.post and state.post["id"] == payload["id"]:
                state.post["likes"] = payload["likes"]
            state.loading = False
        elif action_type == ADD_COMMENT:
            if state.post:
                state.post["comments"] = payload
            state.loading = False
        elif action_type == REMOVE_COMMENT:
            if state.post:
                state.post["comments"] = [
                    comment for comment in state.post["comments"] if comment["id"] != payload
                ]
            state.loading = False
        elif action_type == POST_ERROR:
            state.error = payload
            state.loading = False
