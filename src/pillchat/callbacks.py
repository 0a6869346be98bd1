"""Dash callbacks that forward user intents to the orchestrator."""

from dash import ALL, Input, Output, State, callback_context, no_update

from .layout import (
    CLEAR_BUTTON,
    DRUG_DETAILS_BUTTON,
    IMAGE_UPLOAD,
    INPUT_TEXTAREA,
    MESSAGES_CONTAINER,
    STATUS_INDICATOR,
    SUBMIT_BUTTON,
)

# Input is disabled and the spinner shown for as long as a request is pending
RUNNING = [
    (Output(SUBMIT_BUTTON, "disabled"), True, False),
    (Output(STATUS_INDICATOR, "hidden"), False, True),
]


def register_callbacks(app):
    @app.callback(
        [
            Output(MESSAGES_CONTAINER, "children"),
            Output(INPUT_TEXTAREA, "value"),
            Output(IMAGE_UPLOAD, "contents"),
        ],
        [Input(SUBMIT_BUTTON, "n_clicks")],
        [State(INPUT_TEXTAREA, "value"), State(IMAGE_UPLOAD, "contents")],
        running=RUNNING,
        prevent_initial_call=True,
    )
    def send_message(n_clicks, text, image):
        return handle_submit(app, n_clicks, text, image)

    @app.callback(
        Output(MESSAGES_CONTAINER, "children", allow_duplicate=True),
        [Input({"type": DRUG_DETAILS_BUTTON, "turn": ALL, "item": ALL}, "n_clicks")],
        running=RUNNING,
        prevent_initial_call=True,
    )
    def request_drug_details(n_clicks):
        return handle_drug_details(
            app, callback_context.triggered, callback_context.triggered_id
        )

    @app.callback(
        Output(MESSAGES_CONTAINER, "children", allow_duplicate=True),
        [Input(CLEAR_BUTTON, "n_clicks")],
        prevent_initial_call=True,
    )
    def clear_conversation(n_clicks):
        return handle_clear(app, n_clicks)

    _register_clientside_callbacks(app)


def handle_submit(app, n_clicks, text, image):
    """Submit the composer's text and image; clear the composer if accepted."""
    if not n_clicks:
        return no_update, no_update, no_update
    if not app.orchestrator.submit_prompt(image, text):
        return no_update, no_update, no_update
    return render(app), "", None


def handle_drug_details(app, triggered, triggered_id):
    """Ask for details on the prescription item whose button was clicked.

    ``triggered_id`` is the pattern-matching id of the button,
    ``{"type": ..., "turn": <turn id>, "item": <item index>}``.
    """
    # New buttons appearing in the container also fire this callback
    if not triggered or not triggered[0]["value"] or not triggered_id:
        return no_update
    if not app.orchestrator.request_item_details(
        triggered_id["turn"], triggered_id["item"]
    ):
        return no_update
    return render(app)


def handle_clear(app, n_clicks):
    if not n_clicks:
        return no_update
    app.orchestrator.clear()
    return render(app)


def render(app):
    return app.layout_builder.build_messages(app.orchestrator.turns())


def _register_clientside_callbacks(app):
    # Auto-scroll to bottom
    app.clientside_callback(
        """
        function(messages_content) {
            if (messages_content && messages_content.length > 0) {
                setTimeout(function() {
                    const messagesContainer = document.getElementById('messages_container');
                    if (messagesContainer) {
                        messagesContainer.scrollTop = messagesContainer.scrollHeight;
                    }
                }, 100);
            }
            return window.dash_clientside.no_update;
        }
        """,
        Output(MESSAGES_CONTAINER, "data-scroll-trigger", allow_duplicate=True),
        [Input(MESSAGES_CONTAINER, "children")],
        prevent_initial_call=True,
    )
