"""Unit tests for src/core/observability.py."""

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor, SpanExportResult
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
    InMemorySpanExporter,
)
from pytest_mock import MockerFixture

from src.core.config import Settings
from src.core.context import RequestContext
from src.core.observability import (
    LoguruSpanExporter,
    add_correlation_id_to_span,
    get_span_exporter,
    instrument_app,
    setup_tracing,
    trace_operation,
)


@pytest.fixture
def tracing_settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Settings with tracing switched on."""
    monkeypatch.setenv("OBSERVABILITY_CONFIG__ENABLE_TRACING", "true")
    return Settings()


@pytest.mark.unit
class TestGetSpanExporter:
    """Tests for exporter selection."""

    def test_console_uses_loguru(self) -> None:
        """Verify the console exporter writes through Loguru."""
        assert isinstance(get_span_exporter(Settings()), LoguruSpanExporter)

    def test_none_disables_export(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Verify exporter type none returns no exporter."""
        monkeypatch.setenv("OBSERVABILITY_CONFIG__EXPORTER_TYPE", "none")

        assert get_span_exporter(Settings()) is None

    def test_otlp_uses_configured_endpoint(
        self, mocker: MockerFixture, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Verify the OTLP exporter receives the endpoint."""
        monkeypatch.setenv("OBSERVABILITY_CONFIG__EXPORTER_TYPE", "otlp")
        monkeypatch.setenv("OBSERVABILITY_CONFIG__EXPORTER_ENDPOINT", "http://otel:4317")
        mock_exporter = mocker.patch("src.core.observability.OTLPSpanExporter")

        get_span_exporter(Settings())

        mock_exporter.assert_called_once_with(endpoint="http://otel:4317", insecure=True)


@pytest.mark.unit
class TestLoguruSpanExporter:
    """Tests for the Loguru span exporter."""

    def test_logs_each_span(self, mocker: MockerFixture) -> None:
        """Verify finished spans are logged at debug level."""
        mock_logger = mocker.patch("src.core.observability.logger")
        provider = TracerProvider()
        memory = InMemorySpanExporter()
        provider.add_span_processor(SimpleSpanProcessor(memory))
        with provider.get_tracer("test").start_as_current_span("catalog.all"):
            pass

        result = LoguruSpanExporter().export(memory.get_finished_spans())

        assert result is SpanExportResult.SUCCESS
        assert mock_logger.bind.call_args.kwargs["span_name"] == "catalog.all"
        mock_logger.bind.return_value.debug.assert_called_once()


@pytest.mark.unit
class TestSetupTracing:
    """Tests for tracer provider installation."""

    def test_disabled_does_nothing(self, mocker: MockerFixture) -> None:
        """Verify no provider is installed when tracing is off."""
        set_provider = mocker.patch("src.core.observability.trace.set_tracer_provider")

        setup_tracing(Settings())

        set_provider.assert_not_called()

    def test_enabled_installs_provider(
        self, mocker: MockerFixture, tracing_settings: Settings
    ) -> None:
        """Verify a provider with the service name is installed."""
        set_provider = mocker.patch("src.core.observability.trace.set_tracer_provider")

        setup_tracing(tracing_settings)

        provider = set_provider.call_args.args[0]
        assert isinstance(provider, TracerProvider)
        assert provider.resource.attributes["service.name"] == "Resource Catalog API"

    def test_instrument_app_only_when_enabled(
        self, mocker: MockerFixture, tracing_settings: Settings
    ) -> None:
        """Verify FastAPI instrumentation follows the tracing flag."""
        instrumentor = mocker.patch("src.core.observability.FastAPIInstrumentor")
        app = mocker.Mock()

        instrument_app(app, Settings())
        instrumentor.instrument_app.assert_not_called()

        instrument_app(app, tracing_settings)
        instrumentor.instrument_app.assert_called_once()
        assert instrumentor.instrument_app.call_args.kwargs["excluded_urls"] is None

    def test_instrument_app_skips_excluded_paths(
        self, mocker: MockerFixture, tracing_settings: Settings
    ) -> None:
        """Verify paths left out of request logging are left out of tracing."""
        instrumentor = mocker.patch("src.core.observability.FastAPIInstrumentor")
        tracing_settings.log_config.excluded_paths = ["/status", "/metrics"]

        instrument_app(mocker.Mock(), tracing_settings)

        excluded = instrumentor.instrument_app.call_args.kwargs["excluded_urls"]
        assert excluded == "/status,/metrics"


@pytest.mark.unit
class TestSpanHelpers:
    """Tests for span attribute helpers."""

    def test_trace_operation_sets_attributes(self, mocker: MockerFixture) -> None:
        """Verify attributes and the correlation ID land on the span."""
        span = mocker.MagicMock()
        tracer = mocker.patch("src.core.observability.trace.get_tracer").return_value
        tracer.start_as_current_span.return_value.__enter__.return_value = span
        RequestContext.set_correlation_id("corr-1")

        with trace_operation("catalog.find", store="memory") as active:
            assert active is span

        tracer.start_as_current_span.assert_called_once_with("catalog.find")
        span.set_attribute.assert_any_call("store", "memory")
        span.set_attribute.assert_any_call("correlation_id", "corr-1")

    def test_trace_operation_without_provider(self) -> None:
        """Verify the helper works when no provider is configured."""
        with trace_operation("catalog.all") as span:
            assert span is not None

    def test_correlation_id_from_header(self, mocker: MockerFixture) -> None:
        """Verify the request header is used when no context is set."""
        span = mocker.Mock()
        span.is_recording.return_value = True
        scope = {"headers": [(b"x-correlation-id", b"from-header")]}

        add_correlation_id_to_span(span, scope)

        span.set_attribute.assert_called_once_with("correlation_id", "from-header")

    def test_non_recording_span_untouched(self, mocker: MockerFixture) -> None:
        """Verify non-recording spans are left alone."""
        span = mocker.Mock()
        span.is_recording.return_value = False
        RequestContext.set_correlation_id("corr-1")

        add_correlation_id_to_span(span, {"headers": []})

        span.set_attribute.assert_not_called()
