"""Unit tests for Pillchat initialization and configuration."""

from unittest.mock import Mock, patch

import pytest
from pillchat import Pillchat
from pillchat.config import Settings
from pillchat.layout import Bootstrap
from pillchat.ledger import InMemory
from pillchat.llm import Echo
from pillchat.orchestrator import Orchestrator
from pillchat.transport import HTTP, Local


class TestPillchatInit:
    """Test Pillchat initialization and pillar configuration."""

    def test_default_initialization(self):
        with patch("pillchat.llm.OpenAI") as openai_class:
            app = Pillchat(settings=Settings(api_key="key"))

        openai_class.assert_called_once_with(
            default_model="gpt-4o", api_key="key", base_url="https://api.avalai.ir/v1"
        )
        assert isinstance(app.layout_builder, Bootstrap)
        assert isinstance(app.ledger, InMemory)
        assert isinstance(app.transport, Local)
        assert isinstance(app.orchestrator, Orchestrator)
        assert app.orchestrator.ledger is app.ledger
        assert app.pharmacist.llm is app.llm

    def test_custom_pillars(self):
        llm, ledger, transport = Echo(), InMemory(), Mock()
        app = Pillchat(llm=llm, ledger=ledger, transport=transport, settings=Settings())

        assert app.llm is llm
        assert app.orchestrator.ledger is ledger
        assert app.orchestrator.transport is transport

    def test_http_transport_from_settings(self):
        settings = Settings(api_url="http://backend/api", api_token="t", request_timeout=5)
        app = Pillchat(llm=Echo(), settings=settings)

        assert isinstance(app.transport, HTTP)
        assert app.transport.base_url == "http://backend/api"
        assert app.transport.api_key == "t"
        assert app.transport.timeout == 5

    def test_max_tokens_from_settings(self):
        app = Pillchat(llm=Echo(), settings=Settings(max_tokens=300))
        assert app.pharmacist.max_tokens == 300

    def test_echo_llm_fallback(self):
        with patch("pillchat.llm.OpenAI", side_effect=ImportError):
            with pytest.warns(UserWarning, match="EchoLLM"):
                app = Pillchat(settings=Settings())

        assert isinstance(app.llm, Echo)

    def test_layout_missing_ids_rejected(self):
        import dash.html as html

        mock_layout = Mock()
        mock_layout.build_layout.return_value = html.Div(id="test-layout")
        mock_layout.get_external_stylesheets.return_value = []
        mock_layout.get_external_scripts.return_value = []

        with pytest.raises(ValueError, match="submit_button"):
            Pillchat(layout=mock_layout, llm=Echo(), settings=Settings())

    def test_api_routes_registered(self):
        app = Pillchat(llm=Echo(), settings=Settings())
        rules = {rule.rule for rule in app.server.url_map.iter_rules()}

        assert {"/api/analyze-image", "/api/drug-details", "/api/health"} <= rules

    def test_callbacks_registered(self):
        app = Pillchat(llm=Echo(), settings=Settings())
        outputs = " ".join(app.callback_map)

        assert "messages_container.children" in outputs
        assert "input_textarea.value" in outputs
