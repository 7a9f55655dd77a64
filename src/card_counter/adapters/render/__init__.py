"""Console and chart renderers."""

from card_counter.adapters.render.ascii_chart import render_ascii
from card_counter.adapters.render.svg_chart import render_svg
from card_counter.adapters.render.table_renderer import render_decks, render_delta

__all__ = ["render_ascii", "render_svg", "render_decks", "render_delta"]
