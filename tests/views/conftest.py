# tests/views/conftest.py
"""Pytest configuration for view tests: src on sys.path and a fake NiceGUI ``ui``."""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, Optional

import pytest


def pytest_configure() -> None:
    # Ensure nicedataview package is importable when running tests from repo root.
    repo_root = Path(__file__).resolve().parents[2]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


class _FakeElement:
    """Records tag, text, classes, props and children like a NiceGUI element."""

    def __init__(self, ui: "_FakeUI", tag: str, text: str = "", **kwargs: Any) -> None:
        self.ui = ui
        self.tag = tag
        self.text = text
        self.kwargs = kwargs
        self.value = kwargs.get("value")
        self._classes: list[str] = []
        self._style: list[str] = []
        self._props: dict[str, Any] = {}
        self.prop_strings: list[str] = []
        self.handlers: dict[str, Callable[..., Any]] = {}
        self.children: list[_FakeElement] = []
        if ui.stack:
            ui.stack[-1].children.append(self)
        else:
            ui.roots.append(self)

    def classes(self, add: Optional[str] = None, **_kwargs: Any) -> "_FakeElement":
        if add:
            self._classes.extend(add.split())
        return self

    def style(self, add: Optional[str] = None, **_kwargs: Any) -> "_FakeElement":
        if add:
            self._style.append(add)
        return self

    def props(self, add: Optional[str] = None, **_kwargs: Any) -> "_FakeElement":
        if add:
            self.prop_strings.append(add)
        return self

    def on(self, event: str, handler: Callable[..., Any]) -> "_FakeElement":
        self.handlers[event] = handler
        return self

    def __enter__(self) -> "_FakeElement":
        self.ui.stack.append(self)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.ui.stack.pop()

    # helpers for assertions
    def find(self, tag: str) -> list["_FakeElement"]:
        found = [child for child in self.children if child.tag == tag]
        for child in self.children:
            found.extend(child.find(tag))
        return found

    def texts(self) -> list[str]:
        result = [self.text] if self.text else []
        for child in self.children:
            result.extend(child.texts())
        return result


class _FakeNavigate:
    def __init__(self) -> None:
        self.urls: list[str] = []

    def to(self, url: str) -> None:
        self.urls.append(url)


class _FakeUI:
    def __init__(self) -> None:
        self.roots: list[_FakeElement] = []
        self.stack: list[_FakeElement] = []
        self.head_html: list[str] = []
        self.navigate = _FakeNavigate()

    def element(self, tag: str = "div") -> _FakeElement:
        return _FakeElement(self, tag)

    def label(self, text: str = "") -> _FakeElement:
        return _FakeElement(self, "label", text)

    def html(self, content: str = "", *, sanitize: Any = None) -> _FakeElement:
        return _FakeElement(self, "html", content, sanitize=sanitize)

    def link(self, text: str = "", target: str = "#") -> _FakeElement:
        element = _FakeElement(self, "a", text)
        element.target = target
        return element

    def row(self) -> _FakeElement:
        return _FakeElement(self, "row")

    def input(self, label: Optional[str] = None, *, value: str = "", placeholder: Optional[str] = None) -> _FakeElement:
        return _FakeElement(self, "input", value=value, placeholder=placeholder)

    def select(self, options: Any, *, value: Any = None, on_change: Optional[Callable[..., Any]] = None) -> _FakeElement:
        element = _FakeElement(self, "select", options=options, value=value)
        element.on_change = on_change
        return element

    def add_head_html(self, code: str, *, shared: bool = False) -> None:
        self.head_html.append(code)


@pytest.fixture
def fake_ui(monkeypatch: pytest.MonkeyPatch) -> _FakeUI:
    """Replace ``ui`` in every module that mounts elements."""
    import nicedataview.base_list_view as base_list_view_mod
    import nicedataview.detail_view as detail_view_mod
    import nicedataview.filters.widgets as widgets_mod
    import nicedataview.grid_view as grid_view_mod
    import nicedataview.list_view as list_view_mod
    import nicedataview.page_size as page_size_mod
    import nicedataview.pagination as pagination_mod
    import nicedataview.rendering as rendering_mod
    import nicedataview.theme as theme_mod

    ui = _FakeUI()
    modules = (
        base_list_view_mod,
        detail_view_mod,
        widgets_mod,
        grid_view_mod,
        list_view_mod,
        page_size_mod,
        pagination_mod,
        rendering_mod,
        theme_mod,
    )
    for module in modules:
        monkeypatch.setattr(module, "ui", ui, raising=True)
    monkeypatch.setattr(theme_mod, "_theme_injected", False, raising=True)
    return ui
