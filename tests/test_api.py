import pytest
import requests

from cosmic_commander.api import ApiError, ScoreClient, ScoreSubmission


class FakeResponse:
    def __init__(self, status_code=200, data=None, reason="OK", text=None):
        self.status_code = status_code
        self._data = data
        self.reason = reason
        self._text = text

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._text is not None:
            raise ValueError("No JSON object could be decoded")
        return self._data


class FakeSession:
    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


LOGIN_OK = FakeResponse(200, {
    "message": "Login successful",
    "token": "tok-123",
    "user": {"id": "u1", "username": "ace", "highScore": 0},
})


def client_with(*responses, token=None):
    session = FakeSession(*responses)
    return ScoreClient(base_url="http://api.test/", token=token, session=session), session


def test_login_stores_session():
    client, session = client_with(LOGIN_OK)
    client.login("ace@example.com", "secret1")
    assert client.is_logged_in
    assert client.token == "tok-123"
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("POST", "http://api.test/auth/login")
    assert kwargs["json"] == {"email": "ace@example.com", "password": "secret1"}


def test_auth_call_without_token_never_hits_network():
    client, session = client_with()
    with pytest.raises(ApiError) as exc:
        client.profile()
    assert exc.value.code == "NO_TOKEN"
    assert exc.value.is_auth_error
    assert session.calls == []


def test_save_score_sends_bearer_and_camel_case():
    client, session = client_with(
        FakeResponse(200, {"message": "Score saved successfully", "newHighScore": True}),
        token="tok-9",
    )
    result = client.save_score(ScoreSubmission(score=420, aliens_defeated=30, level_reached=4,
                                               shots_fired=50, max_combo=2.3))
    assert result["newHighScore"] is True

    method, url, kwargs = session.calls[0]
    assert url == "http://api.test/api/game/save-score"
    assert kwargs["headers"]["Authorization"] == "Bearer tok-9"
    body = kwargs["json"]
    assert body["aliensDefeated"] == 30
    assert body["levelReached"] == 4
    assert body["maxCombo"] == 2.3
    assert body["gameMode"] == "normal"


def test_error_body_maps_to_api_error():
    client, _ = client_with(FakeResponse(400, {
        "error": "INVALID_SCORE", "message": "Score appears to be invalid",
    }, reason="Bad Request"), token="t")
    with pytest.raises(ApiError) as exc:
        client.save_score(ScoreSubmission(score=60000, aliens_defeated=10))
    assert exc.value.status == 400
    assert exc.value.code == "INVALID_SCORE"
    assert not exc.value.is_auth_error


def test_expired_token_is_an_auth_error():
    client, _ = client_with(FakeResponse(401, {"error": "TOKEN_EXPIRED", "message": "Token expired"}),
                            token="old")
    with pytest.raises(ApiError) as exc:
        client.verify()
    assert exc.value.is_auth_error


def test_error_without_body_is_server_error():
    client, _ = client_with(FakeResponse(502, reason="Bad Gateway", text="<html>"))
    with pytest.raises(ApiError) as exc:
        client.leaderboard()
    assert exc.value.status == 502
    assert exc.value.code == "SERVER_ERROR"
    assert exc.value.message == "Bad Gateway"


def test_ok_response_without_json_is_server_error():
    client, _ = client_with(FakeResponse(200, text="not json"))
    with pytest.raises(ApiError) as exc:
        client.leaderboard()
    assert exc.value.code == "SERVER_ERROR"


def test_leaderboard_passes_limit():
    rows = [{"username": "ace", "highScore": 900}]
    client, session = client_with(FakeResponse(200, rows), FakeResponse(200, rows))
    assert client.leaderboard(25) == rows
    assert session.calls[0][2]["params"] == {"limit": 25}
    client.leaderboard()
    assert session.calls[1][2]["params"] is None


def test_network_failure_becomes_api_error():
    client, _ = client_with(requests.exceptions.ConnectionError("refused"))
    with pytest.raises(ApiError) as exc:
        client.leaderboard()
    assert exc.value.status == 0
    assert exc.value.code == "NETWORK_ERROR"


def test_change_password_body():
    client, session = client_with(FakeResponse(200, {"message": "Password changed successfully"}),
                                  token="t")
    client.change_password("old-pass", "new-pass")
    assert session.calls[0][2]["json"] == {"currentPassword": "old-pass", "newPassword": "new-pass"}


def test_delete_account_logs_out():
    client, _ = client_with(LOGIN_OK, FakeResponse(200, {"message": "Account deleted"}))
    client.login("ace@example.com", "secret1")
    client.delete_account("secret1")
    assert not client.is_logged_in
    assert client.token is None


def test_google_login_url():
    client, _ = client_with()
    assert client.google_login_url() == "http://api.test/auth/google"
    assert client.google_login_url("/game").endswith("/auth/google?redirect=%2Fgame")
