#!/usr/bin/env python3
"""
Banner Example: right/bottom aligned sale text with shadow

Draws the classic "Buy Our Stuff!" banner onto a white image.
"""

from canvastext import PillowSurface, draw_text

surface = PillowSurface.new(400, 200, background="white")

area = draw_text(
    surface,
    {
        "text": "Buy Our Stuff! $49.95!",
        "align": "right",
        "valign": "bottom",
        "paddingTop": 0,
        "paddingLeft": 150,
        "paddingRight": 10,
        "paddingBottom": 5,
        "color": "#FF0000",
        "fontSize": 20,
        "fontFamily": "DejaVu Sans",
        "shadowColor": "rgba(0, 0, 0, 0.4)",
        "shadowBlur": 4,
        "shadowOffset": 2,
    },
)

surface.image.save("banner.png")
print(f"✓ Banner saved to: banner.png (covered area {area:.0f})")
