import pytest
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.test import APIRequestFactory

from modules.core.authentication import ApiClient, ApiKeyAuthentication

pytestmark = pytest.mark.unit

factory = APIRequestFactory()


class TestApiKeyAuthentication:
    def test_valid_key(self):
        auth = ApiKeyAuthentication(api_key="s3cret", header="X-API-KEY")
        user, token = auth.authenticate(factory.get("/", HTTP_X_API_KEY="s3cret"))
        assert isinstance(user, ApiClient)
        assert user.is_authenticated
        assert token == "s3cret"

    def test_missing_key(self):
        auth = ApiKeyAuthentication(api_key="s3cret", header="X-API-KEY")
        with pytest.raises(AuthenticationFailed, match="Missing"):
            auth.authenticate(factory.get("/"))

    def test_wrong_key(self):
        auth = ApiKeyAuthentication(api_key="s3cret", header="X-API-KEY")
        with pytest.raises(AuthenticationFailed, match="Invalid"):
            auth.authenticate(factory.get("/", HTTP_X_API_KEY="guess"))

    def test_custom_header(self):
        auth = ApiKeyAuthentication(api_key="s3cret", header="X-Internal-Key")
        user, _ = auth.authenticate(factory.get("/", HTTP_X_INTERNAL_KEY="s3cret"))
        assert user.is_authenticated

    def test_empty_configured_key_disables_gate(self):
        auth = ApiKeyAuthentication(api_key="", header="X-API-KEY")
        user, token = auth.authenticate(factory.get("/"))
        assert user.is_authenticated
        assert token is None

    def test_reads_settings_by_default(self, settings):
        settings.API_KEY = "from-settings"
        settings.API_KEY_HEADER = "X-API-KEY"
        auth = ApiKeyAuthentication()
        assert auth.api_key == "from-settings"
        assert auth.header == "X-API-KEY"

    def test_authenticate_header(self):
        auth = ApiKeyAuthentication(api_key="s3cret", header="X-API-KEY")
        assert auth.authenticate_header(factory.get("/")) == 'ApiKey header="X-API-KEY"'
