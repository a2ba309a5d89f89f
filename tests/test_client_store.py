"""Tests for the client-side store, token file and form helpers."""

import time

import pytest

from devconnector.client import Actions, Alert, DevConnectorAPI, Store, TokenFile, flatten_social
from devconnector.client import store as types


class _NoNetwork:
    """Stands in for the HTTP client; store-only tests never reach it."""

    def request(self, *args, **kwargs):
        raise AssertionError("unexpected request")


@pytest.fixture
def token_file(tmp_path):
    return TokenFile(tmp_path / "config" / "token")


class TestTokenFile:
    def test_save_load_clear(self, token_file):
        assert token_file.load() is None

        token_file.save("abc")

        assert token_file.load() == "abc"
        assert token_file.path.stat().st_mode & 0o777 == 0o600

        token_file.clear()
        assert token_file.load() is None
        token_file.clear()


class TestStore:
    def test_token_loaded_from_storage(self, token_file):
        token_file.save("persisted")

        store = Store(token_storage=token_file)

        assert store.auth.token == "persisted"
        assert store.auth.is_authenticated is False
        assert store.auth.loading is True

    def test_login_success_persists_token(self, token_file):
        store = Store(token_storage=token_file)

        store.dispatch(types.LOGIN_SUCCESS, {"token": "t1"})

        assert store.auth.token == "t1"
        assert store.auth.is_authenticated is True
        assert token_file.load() == "t1"

    @pytest.mark.parametrize(
        "action_type",
        [types.LOGIN_FAIL, types.REGISTER_FAIL, types.AUTH_ERROR, types.LOGOUT, types.ACCOUNT_DELETED],
    )
    def test_auth_failures_reset_state(self, token_file, action_type):
        store = Store(token_storage=token_file)
        store.dispatch(types.LOGIN_SUCCESS, {"token": "t1"})
        store.dispatch(types.USER_LOADED, {"id": 1, "name": "Jane"})

        store.dispatch(action_type)

        assert store.auth.token is None
        assert store.auth.user is None
        assert store.auth.is_authenticated is False
        assert store.auth.loading is False
        assert token_file.load() is None

    def test_profile_error_clears_profile(self):
        store = Store()
        store.dispatch(types.GET_PROFILE, {"id": 1})

        store.dispatch(types.PROFILE_ERROR, {"msg": "There is no profile for this user", "status": 400})

        assert store.profile.profile is None
        assert store.profile.error["status"] == 400

    def test_clear_profile_drops_repos(self):
        store = Store()
        store.dispatch(types.GET_REPOS, [{"id": 1}])

        store.dispatch(types.CLEAR_PROFILE)

        assert store.profile.repos == []
        assert store.profile.profile is None

    def test_post_reducers(self):
        store = Store()
        store.dispatch(types.GET_POSTS, [{"id": 1, "likes": []}])
        store.dispatch(types.ADD_POST, {"id": 2, "likes": []})

        assert [post["id"] for post in store.post.posts] == [2, 1]

        store.dispatch(types.GET_POST, {"id": 1, "likes": [], "comments": [{"id": 7}, {"id": 8}]})
        store.dispatch(types.UPDATE_LIKES, {"id": 1, "likes": [{"id": 3, "user_id": 5}]})

        assert store.post.posts[1]["likes"] == [{"id": 3, "user_id": 5}]
        assert store.post.post["likes"] == [{"id": 3, "user_id": 5}]

        store.dispatch(types.REMOVE_COMMENT, 7)
        assert store.post.post["comments"] == [{"id": 8}]

        store.dispatch(types.DELETE_POST, 2)
        assert [post["id"] for post in store.post.posts] == [1]

    def test_subscribers(self):
        store = Store()
        seen = []
        unsubscribe = store.subscribe(lambda action_type, payload: seen.append(action_type))

        store.dispatch(types.GET_POSTS, [])
        unsubscribe()
        store.dispatch(types.GET_POSTS, [])

        assert seen == [types.GET_POSTS]


class TestAlerts:
    def test_alert_removed_after_timeout(self):
        store = Store()
        actions = Actions(store, DevConnectorAPI(client=_NoNetwork()))

        alert_id = actions.set_alert("Profile Created", "success", timeout=0.05)

        assert store.alerts == [Alert(id=alert_id, msg="Profile Created", alert_type="success")]
        deadline = time.monotonic() + 2
        while store.alerts and time.monotonic() < deadline:
            time.sleep(0.01)
        assert store.alerts == []

    def test_cancelled_timers_keep_alert(self):
        store = Store()
        actions = Actions(store, DevConnectorAPI(client=_NoNetwork()))

        actions.set_alert("Post Created", "success", timeout=0.05)
        actions.cancel_alert_timers()
        time.sleep(0.1)

        assert len(store.alerts) == 1


def test_flatten_social():
    profile = {"status": "Developer", "social": {"twitter": "t", "youtube": "y"}}

    assert flatten_social(profile) == {"status": "Developer", "twitter": "t", "youtube": "y"}
    assert flatten_social({"status": "Developer", "social": None}) == {"status": "Developer"}


def test_finished_alert_timers_are_released():
    store = Store()
    actions = Actions(store, DevConnectorAPI(client=_NoNetwork()))

    for _ in range(3):
        actions.set_alert("Post Created", "success", timeout=0.01)
    deadline = time.monotonic() + 2
    while store.alerts and time.monotonic() < deadline:
        time.sleep(0.01)
    for timer in actions._timers:
        timer.join(timeout=1)

    actions.set_alert("Post Removed", "success", timeout=60)

    assert len(actions._timers) == 1
    actions.cancel_alert_timers()
