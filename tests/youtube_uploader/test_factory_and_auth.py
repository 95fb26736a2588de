"""
Factory and OAuth Tests

Credentials are never real: Google auth classes are patched and
credential files are temp files.
"""

import importlib
import json
from unittest.mock import MagicMock, patch

import google_auth_httplib2
import pytest

from youtube_uploader import settings
from youtube_uploader.auth.oauth_manager import OAuthManager, run_initial_auth
from youtube_uploader.constants import YOUTUBE_SCOPES
from youtube_uploader.factory import UploaderFactory, create_uploader
from youtube_uploader.implementations.mock_uploader import MockUploader
from youtube_uploader.implementations.youtube_uploader import YouTubeUploader


@pytest.fixture
def credential_files(tmp_path):
    """client_secret.json and token.json in a temp directory"""
    client_secret = tmp_path / "client_secret.json"
    client_secret.write_text(json.dumps({"installed": {"client_id": "id"}}))
    token = tmp_path / "token.json"
    token.write_text(json.dumps({"token": "old"}))
    return str(client_secret), str(token)


@pytest.fixture
def missing_credentials(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "YOUTUBE_CLIENT_SECRET_PATH", str(tmp_path / "none.json"))
    monkeypatch.setattr(settings, "YOUTUBE_TOKEN_PATH", str(tmp_path / "none_token.json"))


# =============================================================================
# FACTORY TESTS
# =============================================================================


class TestUploaderFactory:
    """Test factory creates correct implementations"""

    def test_mock_mode(self):
        assert isinstance(UploaderFactory.create_uploader(mode="mock"), MockUploader)

    def test_create_uploader_force_mock(self):
        assert isinstance(create_uploader(force_mock=True), MockUploader)

    def test_auto_falls_back_to_mock(self, missing_credentials):
        assert isinstance(UploaderFactory.create_uploader(mode="auto"), MockUploader)

    def test_forced_youtube_without_credentials(self, missing_credentials):
        with pytest.raises(RuntimeError):
            UploaderFactory.create_uploader(mode="youtube")

    def test_default_mode_is_youtube(self, monkeypatch):
        monkeypatch.delenv("YOUTUBE_UPLOADER_MODE", raising=False)
        try:
            importlib.reload(settings)
            assert settings.YOUTUBE_UPLOADER_MODE == "youtube"
        finally:
            monkeypatch.undo()
            importlib.reload(settings)

    def test_default_mode_without_credentials_raises(self, monkeypatch, missing_credentials):
        """Missing credentials never turn into a silent mock upload"""
        monkeypatch.setattr(settings, "YOUTUBE_UPLOADER_MODE", "youtube")

        with pytest.raises(RuntimeError):
            create_uploader()

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            UploaderFactory.create_uploader(mode="vimeo")

    def test_mode_from_settings(self, monkeypatch):
        monkeypatch.setattr(settings, "YOUTUBE_UPLOADER_MODE", "mock")

        assert isinstance(UploaderFactory.create_uploader(), MockUploader)

    def test_youtube_mode_with_credentials(self, monkeypatch, credential_files):
        client_secret, token = credential_files
        monkeypatch.setattr(settings, "YOUTUBE_CLIENT_SECRET_PATH", client_secret)
        monkeypatch.setattr(settings, "YOUTUBE_TOKEN_PATH", token)

        with patch("youtube_uploader.auth.oauth_manager.Credentials") as credentials, patch(
            "youtube_uploader.implementations.youtube_uploader.build"
        ) as build:
            credentials.from_authorized_user_file.return_value = MagicMock(valid=True, expired=False)
            uploader = UploaderFactory.create_uploader(mode="youtube")

        assert isinstance(uploader, YouTubeUploader)
        assert uploader.youtube_service is build.return_value


# =============================================================================
# OAUTH TESTS
# =============================================================================


class TestOAuthManager:
    """Test OAuthManager credential loading"""

    def test_missing_client_secret(self, tmp_path, credential_files):
        _, token = credential_files

        with pytest.raises(FileNotFoundError):
            OAuthManager(str(tmp_path / "missing.json"), token)

    def test_missing_token(self, tmp_path, credential_files):
        client_secret, _ = credential_files

        with pytest.raises(RuntimeError):
            OAuthManager(client_secret, str(tmp_path / "missing_token.json"))

    def test_valid_credentials(self, credential_files):
        client_secret, token = credential_files
        creds = MagicMock(valid=True, expired=False)

        with patch("youtube_uploader.auth.oauth_manager.Credentials") as credentials:
            credentials.from_authorized_user_file.return_value = creds
            manager = OAuthManager(client_secret, token)

        credentials.from_authorized_user_file.assert_called_once_with(token, YOUTUBE_SCOPES)
        assert manager.get_credentials() is creds

    def test_expired_credentials_are_refreshed_and_saved(self, credential_files):
        client_secret, token = credential_files
        creds = MagicMock(valid=False, expired=True, refresh_token="refresh")
        creds.to_json.return_value = json.dumps({"token": "new"})

        def refresh(request):
            creds.valid = True
            creds.expired = False

        creds.refresh.side_effect = refresh

        with patch("youtube_uploader.auth.oauth_manager.Credentials") as credentials, patch(
            "youtube_uploader.auth.oauth_manager.Request"
        ):
            credentials.from_authorized_user_file.return_value = creds
            manager = OAuthManager(client_secret, token)

        creds.refresh.assert_called_once()
        with open(token) as f:
            assert json.load(f) == {"token": "new"}
        assert manager.get_credentials() is creds

    def test_authorized_http_is_new_per_request(self, credential_files):
        """Each request gets its own transport around the shared credentials"""
        client_secret, token = credential_files
        creds = MagicMock(valid=True, expired=False)

        with patch("youtube_uploader.auth.oauth_manager.Credentials") as credentials:
            credentials.from_authorized_user_file.return_value = creds
            manager = OAuthManager(client_secret, token)

        first = manager.authorized_http()
        second = manager.authorized_http()

        assert isinstance(first, google_auth_httplib2.AuthorizedHttp)
        assert first is not second
        assert first.http is not second.http
        assert first.credentials is creds
        assert second.credentials is creds

    def test_unrefreshable_credentials(self, credential_files):
        client_secret, token = credential_files
        creds = MagicMock(valid=False, expired=True, refresh_token=None)

        with patch("youtube_uploader.auth.oauth_manager.Credentials") as credentials:
            credentials.from_authorized_user_file.return_value = creds

            with pytest.raises(RuntimeError):
                OAuthManager(client_secret, token)


class TestRunInitialAuth:
    """Test run_initial_auth()"""

    def test_writes_token(self, credential_files, tmp_path):
        client_secret, _ = credential_files
        token_path = tmp_path / "new_token.json"

        with patch("youtube_uploader.auth.oauth_manager.InstalledAppFlow") as flow_class:
            flow = flow_class.from_client_secrets_file.return_value
            flow.run_local_server.return_value.to_json.return_value = '{"token": "fresh"}'

            assert run_initial_auth(client_secret, str(token_path), port=9090) is True

        flow_class.from_client_secrets_file.assert_called_once_with(client_secret, YOUTUBE_SCOPES)
        flow.run_local_server.assert_called_once_with(port=9090)
        assert token_path.read_text() == '{"token": "fresh"}'

    def test_failure_returns_false(self, credential_files, tmp_path):
        client_secret, _ = credential_files

        with patch("youtube_uploader.auth.oauth_manager.InstalledAppFlow") as flow_class:
            flow_class.from_client_secrets_file.side_effect = ValueError("bad secrets")

            assert run_initial_auth(client_secret, str(tmp_path / "t.json")) is False
