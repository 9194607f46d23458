"""
Configuration and Client Factory Tests

Tests for:
- Settings defaults and ALSEARCH_ environment overrides
- create_search_client(): explicit client construction, no singleton
"""

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove ALSEARCH_ variables that could leak in from the shell."""
    for name in ("BASE_URL", "AUTH_TOKEN", "TTL", "SERVICE_NAME", "MAX_RETRIES"):
        monkeypatch.delenv(f"ALSEARCH_{name}", raising=False)


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self) -> None:
        """Defaults match the public API conventions."""
        from alsearch.core.config import Settings

        settings = Settings(_env_file=None)

        assert settings.base_url is None
        assert settings.service_name == "search"
        assert settings.api_version == "v1"
        assert settings.ttl == 0
        assert settings.max_retries == 3

    def test_env_overrides(self, monkeypatch) -> None:
        """ALSEARCH_ variables override defaults."""
        from alsearch.core.config import get_settings

        monkeypatch.setenv("ALSEARCH_BASE_URL", "https://api.example.com")
        monkeypatch.setenv("ALSEARCH_TTL", "1")

        settings = get_settings()

        assert settings.base_url == "https://api.example.com"
        assert settings.ttl == 1


class TestCreateSearchClient:
    """Tests for create_search_client()."""

    def test_requires_base_url_without_transport(self) -> None:
        """A missing base_url is a configuration error."""
        from alsearch import ConfigurationError, Settings, create_search_client

        with pytest.raises(ConfigurationError):
            create_search_client(Settings(_env_file=None))

    def test_builds_httpx_transport(self) -> None:
        """With base_url an HttpxTransport is built from settings."""
        from alsearch import HttpxTransport, Settings, create_search_client

        settings = Settings(
            _env_file=None,
            base_url="https://api.example.com/",
            auth_token="secret",
            max_retries=5,
            ttl=1,
        )

        client = create_search_client(settings)

        assert isinstance(client.transport, HttpxTransport)
        assert client.transport.base_url == "https://api.example.com"
        assert client.transport.max_retries == 5
        assert client.ttl == 1
        assert client.service_name == "search"
        assert client.transport.retry_methods == frozenset({"GET"})

    def test_uses_given_transport(self) -> None:
        """An injected transport is used as is."""
        from alsearch import FakeTransport, Settings, create_search_client

        transport = FakeTransport()

        client = create_search_client(Settings(_env_file=None), transport=transport)

        assert client.transport is transport

    def test_returns_new_instance_each_call(self) -> None:
        """There is no shared module-level client."""
        from alsearch import FakeTransport, Settings, create_search_client

        settings = Settings(_env_file=None)

        first = create_search_client(settings, transport=FakeTransport())
        second = create_search_client(settings, transport=FakeTransport())

        assert first is not second

    @pytest.mark.asyncio
    async def test_end_to_end_with_fake_transport(self) -> None:
        """submit_search returns the mocked job handle unchanged."""
        from alsearch import FakeTransport, Settings, create_search_client

        handle = {"search_uuid": "abc", "search_status": "pending"}
        transport = FakeTransport({("POST", "/search/logmsgs"): handle})

        async with create_search_client(
            Settings(_env_file=None), transport=transport
        ) as client:
            result = await client.submit_search("1234", "logmsgs", {"aql": "SELECT *"})

        assert result is handle
        assert transport.closed is False

    @pytest.mark.asyncio
    async def test_closes_transport_it_built(self) -> None:
        """Closing the client closes the HttpxTransport the factory created."""
        from alsearch import Settings, create_search_client

        client = create_search_client(
            Settings(_env_file=None, base_url="https://api.example.com")
        )

        await client.aclose()

        assert client.transport._client.is_closed is True

    def test_retry_methods_from_settings(self) -> None:
        """ALSEARCH_RETRY_METHODS opts further methods into retries."""
        from alsearch import Settings, create_search_client

        client = create_search_client(
            Settings(
                _env_file=None,
                base_url="https://api.example.com",
                retry_methods=["GET", "POST"],
            )
        )

        assert client.transport.retry_methods == frozenset({"GET", "POST"})
