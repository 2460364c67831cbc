from __future__ import annotations

from nicegui import ui


# Table CSS; optional behavior via container classes:
# - .ndv-zebra → zebra rows
# - .ndv-hover → row hover highlight
# - .ndv-tight → tighter padding + smaller font
_THEME_CSS = """
<style>
.ndv-grid {
    border-collapse: collapse;
    width: 100%;
}
.ndv-grid th,
.ndv-grid td {
    padding: 6px 10px;
    border-bottom: 1px solid #e0e0e0;
    text-align: left;
    vertical-align: top;
}
.ndv-grid th.ndv-sortable a {
    color: inherit;
    text-decoration: none;
}
.ndv-grid th.ndv-sorted-asc,
.ndv-grid th.ndv-sorted-desc {
    background-color: #f0f6ff;
}
.ndv-zebra .ndv-grid tbody tr:nth-child(even) td {
    background-color: #f7f7f7;
}
.ndv-hover .ndv-grid tbody tr:hover td {
    background-color: #e8f3ff;
}
.ndv-tight .ndv-grid th,
.ndv-tight .ndv-grid td {
    padding: 2px 6px;
    font-size: 0.80rem;
    line-height: 1.2;
}
.ndv-empty {
    color: #777;
    font-style: italic;
}
.ndv-filter-invalid .ndv-filter-input,
.ndv-filter-invalid .ndv-filter-select {
    outline: 1px solid #c62828;
}
.ndv-filter-error {
    color: #c62828;
    font-size: 0.75rem;
}
.ndv-pagination .ndv-page-link {
    padding: 2px 8px;
    border-radius: 4px;
    text-decoration: none;
}
.ndv-pagination .ndv-page-current {
    background-color: #1976d2;
    color: #ffffff;
}
.ndv-pagination .ndv-page-disabled {
    pointer-events: none;
    color: #aaa;
}
.ndv-action {
    text-decoration: none;
    margin-right: 4px;
}
.ndv-detail dt {
    text-align: left;
    padding-right: 16px;
    font-weight: 600;
}
.ndv-list .ndv-list-item {
    padding: 4px 0;
}
.ndv-list-separator {
    color: #aaa;
}
</style>
"""

_theme_injected: bool = False


def ensure_dataview_theme() -> None:
    """Inject the data view CSS once per application.

    This function is idempotent: calling it multiple times is safe and
    will only add the CSS block to the document head once.
    """
    global _theme_injected
    if not _theme_injected:
        ui.add_head_html(_THEME_CSS, shared=True)
        _theme_injected = True
