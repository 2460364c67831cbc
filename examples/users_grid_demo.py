from nicegui import ui
import pandas as pd
from starlette.requests import Request

from nicedataview import (
    ActionColumn,
    CheckboxColumn,
    DataColumn,
    DataField,
    DetailView,
    GridView,
    Link,
    ListView,
    MappingUrlParameterProvider,
    RadioColumn,
    SerialColumn,
    Sort,
    query_url_creator,
)
from nicedataview.filters import EqualsFilterFactory
from nicedataview.utils.logging import configure_logging

configure_logging(level="DEBUG")

df = pd.DataFrame(
    {
        "id": list(range(1, 48)),
        "name": [f"User {i:02d}" for i in range(1, 48)],
        "city": ["Sacramento", "Baltimore", "Montreal"] * 15 + ["Berlin", "Paris"],
        "score": [round(50 + (i * 7) % 50 + 0.5, 1) for i in range(1, 48)],
        "active": [i % 3 != 0 for i in range(1, 48)],
    }
)
users = df.to_dict(orient="records")

columns = (
    CheckboxColumn(on_change=lambda key, checked: print("SELECT:", key, checked)),
    RadioColumn(on_change=lambda key: print("CURRENT:", key)),
    SerialColumn(),
    DataColumn("id", header="ID", filter=True, filter_factory=EqualsFilterFactory(int)),
    DataColumn("name", filter=True),
    DataColumn("city", filter=sorted(df["city"].unique())),
    DataColumn("score"),
    DataColumn("active", with_sorting=False),
    ActionColumn(
        url_creator=lambda action, row, key: f"/users/{key}",
        visible_buttons={"view": True},
    ),
)


@ui.page("/")
def users_page(request: Request) -> None:
    with ui.header().classes("py-2 px-4"):
        ui.label("GridView demo")

    with ui.column().classes("ndv-zebra ndv-hover w-full"):
        GridView(
            data=df,
            columns=columns,
            sort=Sort.only(["id", "name", "city", "score"], {"id": "asc"}),
            multi_sort=True,
            page_size_constraint=[10, 20, 50],
            url_creator=query_url_creator("/"),
            url_parameter_provider=MappingUrlParameterProvider(request.query_params),
            key_property="id",
            header="Users",
        ).build()


@ui.page("/cards")
def cards_page(request: Request) -> None:
    with ui.header().classes("py-2 px-4"):
        ui.label("ListView demo")

    ListView(
        data=df,
        item_view=lambda item: (Link(item.data["name"], f"/users/{item.key}"), f" from {item.data['city']}"),
        sort=Sort.only(["name", "score"], {"score": "desc"}),
        page_size=8,
        key_property="id",
        url_creator=query_url_creator("/cards"),
        url_parameter_provider=MappingUrlParameterProvider(request.query_params),
        header="Users by score",
    ).build()


@ui.page("/users/{user_id}")
def user_page(user_id: int) -> None:
    user = next((u for u in users if u["id"] == user_id), None)
    if user is None:
        ui.label(f"User {user_id} not found")
        return
    DetailView(
        data=user,
        fields=(
            DataField("id", label="ID"),
            DataField("name", label="Name"),
            DataField("city", label="City"),
            DataField("score", label="Score"),
            DataField("active", label="Active"),
        ),
        value_true="yes",
        value_false="no",
        header=user["name"],
    ).build()
    ui.link("Back", "/")


ui.run()
