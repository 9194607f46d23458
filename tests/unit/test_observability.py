"""
Logging and Tracing Tests

Tests for:
- Building a client leaves the host's logging and structlog setup alone
- configure_logging(): opt-in structlog routing through stdlib loggers
- Tracing: injected providers are used, the global provider is never set
"""

import logging
from unittest.mock import patch

import pytest
import structlog


@pytest.fixture
def host_logging():
    """Host-owned logging state, restored after the test."""
    root = logging.getLogger()
    saved_level = logging.getLogger("alsearch").level
    saved_config = structlog.get_config()
    structlog.configure(processors=[structlog.processors.KeyValueRenderer()])
    yield root
    logging.getLogger("alsearch").setLevel(saved_level)
    structlog.reset_defaults()
    structlog.configure(**saved_config)


class TestHostLoggingUntouched:
    """The library does not rewrite process-wide logging by default."""

    def test_create_client_keeps_root_handlers_and_structlog_config(
        self, host_logging
    ) -> None:
        """Building a client adds no root handler and keeps structlog config."""
        from alsearch import FakeTransport, Settings, create_search_client

        handlers_before = list(host_logging.handlers)
        config_before = structlog.get_config()

        create_search_client(Settings(_env_file=None), transport=FakeTransport())

        assert host_logging.handlers == handlers_before
        assert structlog.get_config() == config_before

    def test_configure_logging_flag_opts_in(self, host_logging) -> None:
        """configure_logging=True routes structlog through stdlib loggers."""
        from alsearch import FakeTransport, Settings, create_search_client

        handlers_before = list(host_logging.handlers)

        create_search_client(
            Settings(_env_file=None, configure_logging=True, log_level="DEBUG"),
            transport=FakeTransport(),
        )

        config = structlog.get_config()
        assert isinstance(config["logger_factory"], structlog.stdlib.LoggerFactory)
        assert logging.getLogger("alsearch").level == logging.DEBUG
        assert host_logging.handlers == handlers_before


class TestStructuredLogging:
    """Tests for alsearch.core.logging."""

    def test_logger_returns_bound_logger(self) -> None:
        """get_logger() returns a structlog logger supporting bind()."""
        from alsearch.core.logging import get_logger

        logger = get_logger("test")

        assert hasattr(logger, "bind")
        assert logger.bind(search_uuid="abc") is not None

    def test_add_service_info(self) -> None:
        """Every event carries the service label."""
        from alsearch.core.logging import SERVICE_LABEL, add_service_info

        event = add_service_info(None, "info", {"event": "x"})  # type: ignore[arg-type]

        assert event["service"] == SERVICE_LABEL

    def test_build_processors_renderer(self) -> None:
        """The last processor renders JSON or console output."""
        from alsearch.core.logging import build_processors

        assert isinstance(build_processors(True)[-1], structlog.processors.JSONRenderer)
        assert isinstance(build_processors(False)[-1], structlog.dev.ConsoleRenderer)

    def test_configured_events_reach_stdlib_handlers(self, host_logging, caplog) -> None:
        """After configure_logging, events are stdlib records under alsearch.*."""
        from alsearch.core.logging import configure_logging, get_logger

        configure_logging(log_level="INFO", json_output=True)

        with caplog.at_level(logging.INFO, logger="alsearch"):
            get_logger("alsearch.clients.search").info(
                "search_submitted", search_uuid="abc"
            )

        records = [r for r in caplog.records if r.name == "alsearch.clients.search"]
        assert len(records) == 1
        assert "search_submitted" in records[0].getMessage()
        assert '"service": "alsearch-client"' in records[0].getMessage()


class TestTracing:
    """Tests for alsearch.core.tracing."""

    def test_build_tracer_provider_does_not_install_globally(self) -> None:
        """build_tracer_provider returns a provider without setting the global one."""
        from alsearch.core import tracing as tracing_module

        with patch.object(tracing_module.trace, "set_tracer_provider") as set_provider:
            provider = tracing_module.build_tracer_provider(service_name="my-app")

        set_provider.assert_not_called()
        assert provider.resource.attributes["service.name"] == "my-app"
        assert provider.resource.attributes["service.version"] == tracing_module.SERVICE_VERSION

    def test_get_tracer_uses_given_provider(self) -> None:
        """Spans from get_tracer(provider) are exported by that provider."""
        from opentelemetry.sdk.trace.export import SimpleSpanProcessor
        from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
            InMemorySpanExporter,
        )

        from alsearch.core.tracing import build_tracer_provider, get_tracer

        exporter = InMemorySpanExporter()
        provider = build_tracer_provider()
        provider.add_span_processor(SimpleSpanProcessor(exporter))

        with get_tracer("test", provider).start_as_current_span("search.test"):
            pass

        assert [span.name for span in exporter.get_finished_spans()] == ["search.test"]

    def test_get_tracer_without_provider_is_usable(self) -> None:
        """Without a provider the global (possibly no-op) tracer is returned."""
        from alsearch.core.tracing import get_tracer

        with get_tracer("test").start_as_current_span("search.test") as span:
            assert span is not None
