"""
The main entrypoint for the pillchat package.

This module contains the Pillchat app class, which wires the pillars together:
the LLM behind the backend, the transport the orchestrator sends requests
through, the conversation ledger, and the layout that renders it.
"""

from typing import Optional

from dash import Dash

from . import api, ledger, llm, transport
from .config import Settings, load_settings
from .orchestrator import Orchestrator
from .parser import parse
from .service import Pharmacist

__all__ = ["Pillchat", "Orchestrator", "Pharmacist", "Settings", "parse"]


class Pillchat(Dash):
    """
    A chat app that answers questions about drugs and prescriptions.

    The app serves its own JSON API on the underlying Flask server, and by
    default the orchestrator talks to that API in-process. Pass a
    ``transport.HTTP`` (or set ``PILLCHAT_API_URL``) to use a backend running
    elsewhere.
    """

    def __init__(
        self,
        layout: Optional["layout.Layout"] = None,
        llm: Optional[llm.LLM] = None,
        transport: Optional[transport.Transport] = None,
        ledger: Optional[ledger.Ledger] = None,
        settings: Optional[Settings] = None,
        **kwargs,
    ) -> None:
        """
        Initialize the app with configurable pillars.

        Parameters
        ----------
        layout : layout.Layout, optional
            Builds the component tree and renders turns. Defaults to
            layout.Bootstrap().
        llm : llm.LLM, optional
            Model provider used by the backend. Defaults to llm.OpenAI()
            configured from ``settings``, or llm.Echo() when the ``openai``
            package is not installed.
        transport : transport.Transport, optional
            How the orchestrator reaches the backend. Defaults to
            transport.HTTP() when ``settings.api_url`` is set, otherwise
            transport.Local() on this app's own backend.
        ledger : ledger.Ledger, optional
            Conversation storage. Defaults to ledger.InMemory().
        settings : Settings, optional
            Defaults to config.load_settings().
        **kwargs
            Additional arguments passed to the Dash constructor.

        Raises
        ------
        ValueError
            If the layout is missing component IDs the callbacks need.

        Examples
        --------
        >>> app = Pillchat()
        >>> app.run(debug=True)
        """
        self.settings = settings if settings is not None else load_settings()

        if layout:
            self.layout_builder = layout
        else:
            from .layout import Bootstrap

            self.layout_builder = Bootstrap()

        if llm:
            self.llm = llm
        else:
            try:
                from .llm import OpenAI

                self.llm = OpenAI(
                    default_model=self.settings.model,
                    api_key=self.settings.api_key,
                    base_url=self.settings.llm_base_url,
                )
            except ImportError:
                import warnings

                warnings.warn(
                    "pillchat is running with a simple EchoLLM because the 'openai' package is not installed. "
                    "Install it with: pip install openai",
                    UserWarning,
                )
                from .llm import Echo

                self.llm = Echo()

        transport_module = globals()["transport"]
        ledger_module = globals()["ledger"]

        if "external_stylesheets" not in kwargs:
            kwargs["external_stylesheets"] = []
        kwargs["external_stylesheets"].extend(
            self.layout_builder.get_external_stylesheets()
        )

        if "external_scripts" not in kwargs:
            kwargs["external_scripts"] = []
        kwargs["external_scripts"].extend(self.layout_builder.get_external_scripts())

        super().__init__(**kwargs)

        self.pharmacist = Pharmacist(self.llm, max_tokens=self.settings.max_tokens)
        api.register_routes(self.server, self.pharmacist)

        if transport is not None:
            self.transport = transport
        elif self.settings.api_url:
            self.transport = transport_module.HTTP(
                self.settings.api_url,
                api_key=self.settings.api_token,
                timeout=self.settings.request_timeout,
            )
        else:
            self.transport = transport_module.Local(self.pharmacist)

        self.ledger = ledger if ledger is not None else ledger_module.InMemory()
        self.orchestrator = Orchestrator(self.transport, self.ledger)

        self.layout = self.layout_builder.build_layout()
        self._validate_layout()
        self._register_callbacks()

    def _validate_layout(self) -> None:
        from .layout import REQUIRED_IDS, collect_ids

        missing = REQUIRED_IDS - collect_ids(self.layout)
        if missing:
            raise ValueError(
                f"Layout is missing required component IDs: {sorted(missing)}"
            )

    def _register_callbacks(self) -> None:
        """Registers all the callbacks that forward intents to the orchestrator."""
        from .callbacks import register_callbacks

        register_callbacks(self)
