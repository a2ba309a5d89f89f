"""
Client actions.

Each action calls the API, then dispatches the outcome to the store.
Failures never raise: they become ``*_FAIL``/``*_ERROR`` actions and,
where the server sent messages, danger alerts. Actions that submit a
form return True on success so callers can decide what to show next.
"""

import threading
import uuid
from typing import Any

from devconnector.logging import get_logger

from . import store as types
from .api import APIError, DevConnectorAPI
from .store import Alert, Store

logger = get_logger("client.actions")

DEFAULT_ALERT_TIMEOUT = 4.0


def flatten_social(profile: dict[str, Any]) -> dict[str, Any]:
    """Lift the ``social`` mapping to top-level keys, as edit forms expect."""
    flat = {**profile, **(profile.get("social") or {})}
    flat.pop("social", None)
    return flat


class Actions:
    """
    Action creators bound to one store and one API client.

    Usage:
        actions = Actions(Store(), DevConnectorAPI())
        if actions.login("me@example.com", "secret1"):
            actions.get_current_profile()
    """

    def __init__(self, store: Store, api: DevConnectorAPI):
        self.store = store
        self.api = api
        self._timers: list[threading.Timer] = []
        if store.auth.token:
            api.set_token(store.auth.token)

    # ------------------------------------------------------------------
    # Alerts
    # ------------------------------------------------------------------

    def set_alert(self, msg: str, alert_type: str, timeout: float = DEFAULT_ALERT_TIMEOUT) -> str:
        """Show an alert and remove it after ``timeout`` seconds."""
        alert_id = str(uuid.uuid4())
        self.store.dispatch(types.SET_ALERT, Alert(id=alert_id, msg=msg, alert_type=alert_type))

        timer = threading.Timer(timeout, self.store.dispatch, args=(types.REMOVE_ALERT, alert_id))
        timer.daemon = True
        timer.start()
        self._timers = [t for t in self._timers if t.is_alive()]
        self._timers.append(timer)
        return alert_id

    def cancel_alert_timers(self) -> None:
        for timer in self._timers:
            timer.cancel()
        self._timers.clear()

    def _alert_errors(self, error: APIError) -> None:
        for message in error.messages:
            self.set_alert(message, "danger")

    @staticmethod
    def _error_payload(error: APIError) -> dict[str, Any]:
        return {"msg": error.detail, "status": error.status_code}

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    def load_user(self) -> None:
        if self.store.auth.token:
            self.api.set_token(self.store.auth.token)

        try:
            user = self.api.get("/api/auth")
        except APIError as e:
            logger.debug("load_user_failed", status=e.status_code)
            self.store.dispatch(types.AUTH_ERROR)
            return
        self.store.dispatch(types.USER_LOADED, user)

    def register(self, name: str, email: str, password: str) -> bool:
        try:
            data = self.api.post("/api/users", {"name": name, "email": email, "password": password})
        except APIError as e:
            self._alert_errors(e)
            self.store.dispatch(types.REGISTER_FAIL)
            return False

        self.store.dispatch(types.REGISTER_SUCCESS, data)
        self.load_user()
        return True

    def login(self, email: str, password: str) -> bool:
        try:
            data = self.api.post("/api/auth", {"email": email, "password": password})
        except APIError as e:
            self._alert_errors(e)
            self.store.dispatch(types.LOGIN_FAIL)
            return False

        self.store.dispatch(types.LOGIN_SUCCESS, data)
        self.load_user()
        return True

    def logout(self) -> None:
        self.store.dispatch(types.CLEAR_PROFILE)
        self.store.dispatch(types.LOGOUT)
        self.api.set_token(None)

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def get_current_profile(self) -> None:
        try:
            profile = self.api.get("/api/profile/me")
        except APIError as e:
            self.store.dispatch(types.PROFILE_ERROR, self._error_payload(e))
            return
        self.store.dispatch(types.GET_PROFILE, flatten_social(profile))

    def create_profile(self, form: dict[str, Any], edit: bool = False) -> bool:
        """Create or update the profile; alerts "Profile Created" or "Profile Updated"."""
        try:
            profile = self.api.post("/api/profile", form)
        except APIError as e:
            self._alert_errors(e)
            self.store.dispatch(types.PROFILE_ERROR, self._error_payload(e))
            return False

        self.store.dispatch(types.GET_PROFILE, profile)
        self.set_alert("Profile Updated" if edit else "Profile Created", "success")
        return True

    def _update_profile(self, method: str, path: str, success: str, form: dict | None = None) -> bool:
        try:
            profile = self.api.request(method, path, json=form)
        except APIError as e:
            self._alert_errors(e)
            self.store.dispatch(types.PROFILE_ERROR, self._error_payload(e))
            return False

        self.store.dispatch(types.UPDATE_PROFILE, profile)
        self.set_alert(success, "success")
        return True

    def add_experience(self, form: dict[str, Any]) -> bool:
        return self._update_profile("PUT", "/api/profile/experience", "Experience Added", form)

    def add_education(self, form: dict[str, Any]) -> bool:
        return self._update_profile("PUT", "/api/profile/education", "Education Added", form)

    def delete_experience(self, experience_id: int | str) -> bool:
        return self._update_profile(
            "DELETE", f"/api/profile/experience/{experience_id}", "Experience Removed"
        )

    def delete_education(self, education_id: int | str) -> bool:
        return self._update_profile(
            "DELETE", f"/api/profile/education/{education_id}", "Education Removed"
        )

    def delete_account(self) -> bool:
        """Permanently delete profile and account. Callers confirm beforehand."""
        try:
            self.api.delete("/api/profile")
        except APIError as e:
            self.store.dispatch(types.PROFILE_ERROR, self._error_payload(e))
            return False

        self.store.dispatch(types.CLEAR_PROFILE)
        self.store.dispatch(types.ACCOUNT_DELETED)
        self.api.set_token(None)
        self.set_alert("Your account has been permanently deleted", "success")
        return True

    def get_profiles(self) -> None:
        self.store.dispatch(types.CLEAR_PROFILE)
        try:
            profiles = self.api.get("/api/profile")
        except APIError as e:
            self.store.dispatch(types.PROFILE_ERROR, self._error_payload(e))
            return
        self.store.dispatch(types.GET_PROFILES, profiles)

    def get_profile_by_id(self, user_id: int | str) -> None:
        try:
            profile = self.api.get(f"/api/profile/user/{user_id}")
        except APIError as e:
            self.store.dispatch(types.PROFILE_ERROR, self._error_payload(e))
            return
        self.store.dispatch(types.GET_PROFILE, profile)

    def get_github_repos(self, username: str) -> None:
        try:
            repos = self.api.get(f"/api/profile/github/{username}")
        except APIError as e:
            self.store.dispatch(types.PROFILE_ERROR, self._error_payload(e))
            return
        self.store.dispatch(types.GET_REPOS, repos)

    # ------------------------------------------------------------------
    # Posts
    # ------------------------------------------------------------------

    def _post_error(self, error: APIError) -> None:
        self.store.dispatch(types.POST_ERROR, self._error_payload(error))

    def get_posts(self) -> None:
        try:
            posts = self.api.get("/api/posts")
        except APIError as e:
            self._post_error(e)
            return
        self.store.dispatch(types.GET_POSTS, posts)

    def get_post(self, post_id: int | str) -> None:
        try:
            post = self.api.get(f"/api/posts/{post_id}")
        except APIError as e:
            self._post_error(e)
            return
        self.store.dispatch(types.GET_POST, post)

    def add_post(self, text: str) -> bool:
        try:
            post = self.api.post("/api/posts", {"text": text})
        except APIError as e:
            self._alert_errors(e)
            self._post_error(e)
            return False
        self.store.dispatch(types.ADD_POST, post)
        self.set_alert("Post Created", "success")
        return True

    def delete_post(self, post_id: int) -> bool:
        try:
            self.api.delete(f"/api/posts/{post_id}")
        except APIError as e:
            self._alert_errors(e)
            self._post_error(e)
            return False
        self.store.dispatch(types.DELETE_POST, post_id)
        self.set_alert("Post Removed", "success")
        return True

    def _update_likes(self, verb: str, post_id: int) -> bool:
        try:
            likes = self.api.put(f"/api/posts/{verb}/{post_id}")
        except APIError as e:
            self._alert_errors(e)
            self._post_error(e)
            return False
        self.store.dispatch(types.UPDATE_LIKES, {"id": post_id, "likes": likes})
        return True

    def add_like(self, post_id: int) -> bool:
        return self._update_likes("like", post_id)

    def remove_like(self, post_id: int) -> bool:
        return self._update_likes("unlike", post_id)

    def add_comment(self, post_id: int, text: str) -> bool:
        try:
            comments = self.api.put(f"/api/posts/comment/{post_id}", {"text": text})
        except APIError as e:
            self._alert_errors(e)
            self._post_error(e)
            return False
        self.store.dispatch(types.ADD_COMMENT, comments)
        self.set_alert("Comment Added", "success")
        return True

    def delete_comment(self, post_id: int, comment_id: int) -> bool:
        try:
            self.api.delete(f"/api/posts/comment/{post_id}/{comment_id}")
        except APIError as e:
            self._alert_errors(e)
            self._post_error(e)
            return False
        self.store.dispatch(types.REMOVE_COMMENT, comment_id)
        self.set_alert("Comment Removed", "success")
        return True
