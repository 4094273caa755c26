from .view_model import PanelLine, draw_order, hp_bar_label, hp_bar_width, message_lines, names_under, tile_background

__all__ = [
    "PanelLine",
    "draw_order",
    "hp_bar_label",
    "hp_bar_width",
    "message_lines",
    "names_under",
    "tile_background",
]
