"""Concrete implementations for the layout builder."""

from abc import ABC, abstractmethod
from typing import List

import dash_bootstrap_components as dbc
from dash import dcc, html
from dash.development.base_component import Component as DashComponent

from .models import USER_ROLE, Prescription, SectionedSummary, Turn
from .parser import parse

# Component IDs the callbacks rely on
INPUT_TEXTAREA = "input_textarea"
IMAGE_UPLOAD = "image_upload"
SUBMIT_BUTTON = "submit_button"
CLEAR_BUTTON = "clear_button"
MESSAGES_CONTAINER = "messages_container"
STATUS_INDICATOR = "status_indicator"
DRUG_DETAILS_BUTTON = "drug-details"

REQUIRED_IDS = {
    INPUT_TEXTAREA,
    IMAGE_UPLOAD,
    SUBMIT_BUTTON,
    CLEAR_BUTTON,
    MESSAGES_CONTAINER,
    STATUS_INDICATOR,
}


class Layout(ABC):
    """Interface for building the Dash component tree and rendering turns."""

    @abstractmethod
    def build_layout(self) -> DashComponent:
        """Constructs and returns the entire Dash component tree for the UI."""
        pass

    @abstractmethod
    def build_messages(self, turns: List[Turn]) -> List[DashComponent]:
        """Renders the ledger, parsing assistant turns on the way."""
        pass

    def get_external_stylesheets(self) -> List:
        return []

    def get_external_scripts(self) -> List:
        return []


class Bootstrap(Layout):
    """Right-to-left chat layout built with dash-bootstrap-components."""

    def get_external_stylesheets(self) -> List:
        return [dbc.themes.BOOTSTRAP, dbc.icons.BOOTSTRAP]

    def build_layout(self) -> DashComponent:
        return html.Div(
            className="d-flex flex-column vh-100 mx-auto",
            style={"maxWidth": "480px"},
            dir="rtl",
            children=[
                self.build_header(),
                html.Main(
                    id=MESSAGES_CONTAINER,
                    className="flex-grow-1 p-3",
                    style={"overflowY": "auto"},
                    children=[],
                ),
                html.Div(
                    dbc.Spinner(size="sm", color="secondary"),
                    id=STATUS_INDICATOR,
                    className="px-3 pb-2",
                    hidden=True,
                ),
                self.build_input_area(),
            ],
        )

    def build_header(self) -> DashComponent:
        return html.Header(
            className="d-flex align-items-center justify-content-between p-3 border-bottom",
            children=[
                html.H5("دستیار دارویی جار", className="m-0"),
                dbc.Button(
                    html.I(className="bi bi-trash"),
                    id=CLEAR_BUTTON,
                    color="light",
                    size="sm",
                    title="گفتگوی جدید",
                    n_clicks=0,
                ),
            ],
        )

    def build_input_area(self) -> DashComponent:
        return html.Footer(
            className="p-3 border-top",
            children=[
                dcc.Upload(
                    id=IMAGE_UPLOAD,
                    accept="image/*",
                    className="mb-2 p-2 border rounded text-center text-muted",
                    children=html.Span("عکس دارو یا نسخه را انتخاب کنید"),
                ),
                dbc.InputGroup(
                    [
                        dbc.Textarea(
                            id=INPUT_TEXTAREA,
                            placeholder="اسم دارو یا عکسشو برام بفرست!",
                            rows=1,
                        ),
                        dbc.Button(
                            html.I(className="bi bi-send"),
                            id=SUBMIT_BUTTON,
                            color="dark",
                            n_clicks=0,
                        ),
                    ]
                ),
            ],
        )

    def build_messages(self, turns: List[Turn]) -> List[DashComponent]:
        if not turns:
            return []
        return [self.build_message(turn) for turn in turns]

    def build_message(self, turn: Turn) -> DashComponent:
        if turn.role == USER_ROLE:
            children = []
            if turn.image:
                children.append(
                    html.Img(src=turn.image, className="img-fluid rounded mb-2")
                )
            if turn.text:
                children.append(html.Div(turn.text))
            return html.Div(
                children,
                className="p-2 mb-3 rounded-3 bg-light ms-auto",
                style={"maxWidth": "80%", "width": "fit-content"},
            )

        return html.Div(self.build_reply(turn), className="mb-3")

    def build_reply(self, turn: Turn) -> DashComponent:
        reply = parse(turn.text)
        if isinstance(reply, Prescription):
            return self.build_prescription(turn.id, reply)
        if isinstance(reply, SectionedSummary):
            return self.build_sections(reply)
        return dcc.Markdown(reply.text)

    def build_prescription(self, turn_id: int, reply: Prescription) -> DashComponent:
        items = [
            dbc.Card(
                dbc.CardBody(
                    [
                        html.Div(f"{index + 1}. {item.drug_name}", className="fw-medium"),
                        html.Div(item.dosage, className="text-muted small mb-2"),
                        dbc.Button(
                            "مشاهده توضیحات",
                            id={
                                "type": DRUG_DETAILS_BUTTON,
                                "turn": turn_id,
                                "item": index,
                            },
                            color="primary",
                            outline=True,
                            size="sm",
                            className="w-100",
                            n_clicks=0,
                        ),
                    ]
                ),
                className="mb-2 bg-light border-0",
            )
            for index, item in enumerate(reply.items)
        ]
        return html.Div([html.H6("نسخه پزشکی", className="mb-3"), *items])

    def build_sections(self, reply: SectionedSummary) -> DashComponent:
        return html.Div(
            [
                dbc.Card(
                    [
                        dbc.CardHeader(section.title, className="fw-semibold"),
                        dbc.CardBody(dcc.Markdown(section.body)),
                    ],
                    className="mb-2",
                )
                for section in reply.sections
            ]
        )


def collect_ids(component) -> set:
    """Return the string ids found anywhere in a component tree."""
    ids = set()
    component_id = getattr(component, "id", None)
    if isinstance(component_id, str):
        ids.add(component_id)

    children = getattr(component, "children", None)
    if children is None or isinstance(children, str):
        return ids
    if not isinstance(children, (list, tuple)):
        children = [children]
    for child in children:
        ids |= collect_ids(child)
    return ids
