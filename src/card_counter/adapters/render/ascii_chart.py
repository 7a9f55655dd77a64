"""ASCII burndown chart."""

from card_counter.core import Burndown

INCOMPLETE_CHAR = "*"
COMPLETE_CHAR = "o"


def render_ascii(burndown: Burndown, width: int = 100, height: int = 30) -> str:
    """
    Draw both burndown series onto a character grid.

    Args:
        burndown: Non-empty burndown series
        width: Plot columns
        height: Plot rows

    Returns:
        Chart with y axis labels, x axis dates and a legend
    """
    incomplete, complete = burndown.plot_points(width - 1, height - 1)
    grid = [[" "] * width for _ in range(height)]

    # Complete first so incomplete wins where the lines cross
    for points, char in ((complete, COMPLETE_CHAR), (incomplete, INCOMPLETE_CHAR)):
        _draw_series(grid, points, char)

    max_label = str(burndown.max_value())
    label_width = max(len(max_label), 1)

    lines = ["Burndown Chart", ""]
    for row_index, row in enumerate(grid):
        if row_index == 0:
            label = max_label
        elif row_index == height - 1:
            label = "0"
        else:
            label = ""
        lines.append(f"{label.rjust(label_width)} |{''.join(row).rstrip()}")

    lines.append(f"{' ' * label_width} +{'-' * width}")

    start = burndown.min_date().strftime("%Y-%m-%d")
    end = burndown.max_date().strftime("%Y-%m-%d")
    gap = max(width - len(start) - len(end), 1)
    lines.append(f"{' ' * (label_width + 2)}{start}{' ' * gap}{end}")
    lines.append("")
    lines.append(f"{INCOMPLETE_CHAR} Incomplete   {COMPLETE_CHAR} Complete")

    return "\n".join(lines)


def _draw_series(grid: list[list[str]], points: list[tuple[float, float]], char: str) -> None:
    """Plot points and join consecutive ones with straight segments."""
    cells = [(round(x), round(y)) for x, y in points]

    for (x0, y0), (x1, y1) in zip(cells, cells[1:]):
        steps = max(abs(x1 - x0), abs(y1 - y0), 1)
        for step in range(steps + 1):
            x = round(x0 + (x1 - x0) * step / steps)
            y = round(y0 + (y1 - y0) * step / steps)
            grid[y][x] = char

    for x, y in cells:
        grid[y][x] = char
