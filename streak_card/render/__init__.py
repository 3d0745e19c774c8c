"""SVG rendering for the streak card."""

from streak_card.render.svg import render_bars, render_card

__all__ = ["render_bars", "render_card"]
