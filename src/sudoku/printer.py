"""Render Sudoku grids to a landscape PDF using matplotlib."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from project_config import get_section

from .grid import Grid
from .units import BOX, SIZE

INCH_PER_CM = 0.3937007874


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _layout() -> Dict[str, float]:
    pdf_cfg = _as_dict(get_section("pdf", {}))
    layout_cfg = _as_dict(pdf_cfg.get("layout"))
    page_cfg = _as_dict(pdf_cfg.get("page"))
    render_cfg = _as_dict(pdf_cfg.get("rendering"))
    return {
        "rows": max(1, int(layout_cfg.get("rows", 2))),
        "cols": max(1, int(layout_cfg.get("cols", 2))),
        "width_cm": float(page_cfg.get("width_cm", 29.7)),
        "height_cm": float(page_cfg.get("height_cm", 21.0)),
        "margin_cm": float(page_cfg.get("margin_cm", 2.0)),
        "gap_cm": float(page_cfg.get("gap_cm", 1.5)),
        "title_offset_cm": float(page_cfg.get("title_offset_cm", 0.4)),
        "font_scale": float(render_cfg.get("font_scale_factor", 0.65)),
    }


def _draw_grid(ax, grid: Grid, title: str, font_size: int) -> None:
    ax.tick_params(
        axis="both",
        which="both",
        bottom=False,
        top=False,
        left=False,
        right=False,
        labelbottom=False,
        labelleft=False,
    )
    for idx in range(SIZE + 1):
        linewidth = 1.0 if idx % BOX else 2.5
        ax.axvline(idx / SIZE, color="k", linewidth=linewidth)
        ax.axhline(idx / SIZE, color="k", linewidth=linewidth)
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.axis("off")
    for r in range(SIZE):
        for c in range(SIZE):
            value = grid.get(r, c)
            if value:
                x = (c + 0.5) / SIZE
                y = 1 - (r + 0.5) / SIZE
                ax.text(x, y, str(value), ha="center", va="center", fontsize=font_size)
    if title:
        ax.text(0.0, 1.02, title, ha="left", va="bottom", fontsize=max(6, font_size // 2))


def render_pdf(
    grids: Sequence[Grid],
    out_path: str | Path,
    *,
    titles: Optional[Sequence[str]] = None,
) -> Path:
    """Write ``grids`` to ``out_path``, several per page, and return the path."""

    if not grids:
        raise ValueError("at least one grid is required")
    if titles is not None and len(titles) != len(grids):
        raise ValueError("titles must match the number of grids")

    from matplotlib.backends.backend_pdf import PdfPages
    import matplotlib.pyplot as plt

    cfg = _layout()
    rows, cols = int(cfg["rows"]), int(cfg["cols"])
    per_page = rows * cols
    page_w_in = cfg["width_cm"] * INCH_PER_CM
    page_h_in = cfg["height_cm"] * INCH_PER_CM
    margin_in = cfg["margin_cm"] * INCH_PER_CM
    gap_in = cfg["gap_cm"] * INCH_PER_CM
    title_in = cfg["title_offset_cm"] * INCH_PER_CM

    avail_w = page_w_in - 2 * margin_in - gap_in * (cols - 1)
    avail_h = page_h_in - 2 * margin_in - (gap_in + title_in) * (rows - 1)
    size_in = min(avail_w / cols, avail_h / rows)
    if size_in <= 0:
        raise ValueError("page layout leaves no room for a grid")
    font_size = max(1, int(cfg["font_scale"] * size_in * 72 / SIZE))

    path = Path(out_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    labels = list(titles) if titles is not None else [grid.title for grid in grids]
    pages = math.ceil(len(grids) / per_page)

    with PdfPages(path) as pdf:
        for page in range(pages):
            fig = plt.figure(figsize=(page_w_in, page_h_in))
            start = page * per_page
            for offset, grid in enumerate(grids[start:start + per_page]):
                row, col = divmod(offset, cols)
                left = margin_in + col * (size_in + gap_in)
                bottom = margin_in + (rows - 1 - row) * (size_in + gap_in + title_in)
                ax = fig.add_axes(
                    [left / page_w_in, bottom / page_h_in, size_in / page_w_in, size_in / page_h_in],
                    frameon=False,
                )
                _draw_grid(ax, grid, labels[start + offset], font_size)
            pdf.savefig(fig)
            plt.close(fig)
    return path


__all__ = ["render_pdf"]
