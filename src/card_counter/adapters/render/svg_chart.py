"""SVG burndown chart."""

from xml.sax.saxutils import escape

from card_counter.core import Burndown

MARGIN = 50
INCOMPLETE_COLOR = "#d62728"
COMPLETE_COLOR = "#1f77b4"


def render_svg(burndown: Burndown, width: int = 800, height: int = 400, title: str = "Burndown Chart") -> str:
    """Render the burndown series as a standalone SVG document."""
    plot_width = width - 2 * MARGIN
    plot_height = height - 2 * MARGIN
    incomplete, complete = burndown.plot_points(plot_width, plot_height)

    left, top = MARGIN, MARGIN
    bottom, right = MARGIN + plot_height, MARGIN + plot_width

    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">',
        f'<rect width="{width}" height="{height}" fill="white"/>',
        f'<text x="{width / 2:.1f}" y="{MARGIN / 2:.1f}" text-anchor="middle" '
        f'font-family="sans-serif" font-size="16">{escape(title)}</text>',
        # Axes
        f'<line x1="{left}" y1="{top}" x2="{left}" y2="{bottom}" stroke="black"/>',
        f'<line x1="{left}" y1="{bottom}" x2="{right}" y2="{bottom}" stroke="black"/>',
        _label(left - 5, top + 4, str(burndown.max_value()), "end"),
        _label(left - 5, bottom + 4, "0", "end"),
        _label(left, bottom + 20, burndown.min_date().strftime("%Y-%m-%d"), "start"),
        _label(right, bottom + 20, burndown.max_date().strftime("%Y-%m-%d"), "end"),
        _polyline(incomplete, INCOMPLETE_COLOR),
        _polyline(complete, COMPLETE_COLOR),
        # Legend
        f'<rect x="{right - 110}" y="{top}" width="10" height="10" fill="{INCOMPLETE_COLOR}"/>',
        _label(right - 95, top + 9, "Incomplete", "start"),
        f'<rect x="{right - 110}" y="{top + 16}" width="10" height="10" fill="{COMPLETE_COLOR}"/>',
        _label(right - 95, top + 25, "Complete", "start"),
        "</svg>",
    ]
    return "\n".join(lines)


def _polyline(points: list[tuple[float, float]], color: str) -> str:
    coordinates = " ".join(f"{x + MARGIN:.1f},{y + MARGIN:.1f}" for x, y in points)
    return (
        f'<polyline points="{coordinates}" fill="none" stroke="{color}" '
        f'stroke-width="2" stroke-linejoin="round"/>'
    )


def _label(x: float, y: float, text: str, anchor: str) -> str:
    return (
        f'<text x="{x}" y="{y}" text-anchor="{anchor}" font-family="sans-serif" '
        f'font-size="12">{escape(text)}</text>'
    )
