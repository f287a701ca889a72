"""Expose component submodules for convenience."""

from .forms import settings_form, asset_editor
from .charts import fan_chart, success_gauge
from .results import format_currency, results_panel

__all__ = [
    "settings_form",
    "asset_editor",
    "fan_chart",
    "success_gauge",
    "format_currency",
    "results_panel",
]
