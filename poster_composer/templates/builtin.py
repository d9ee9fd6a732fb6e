"""Built-in poster templates.

These records use the same shape as the catalog data source (and as the
JSON files accepted by ``TemplateCatalog.load_directory``). Both templates
share the text field ids athleteName, achievement, tournamentName and date.
"""

from typing import Any, Final

CLASSIC_TEMPLATE: Final[dict[str, Any]] = {
    "id": "classic",
    "name": "Classic Tournament",
    "canvas": {"width": 1080, "height": 1350},
    "background": {
        "type": "gradient",
        "direction": "to-bottom",
        "stops": [
            {"color": "#1A1A2E", "position": 0},
            {"color": "#16213E", "position": 55},
            {"color": "#0F3460", "position": 100},
        ],
    },
    "photos": [
        {
            "id": "athletePhoto",
            "position": {"anchor": "center", "offsetY": -175},
            "size": {"width": 620, "height": 620},
            "mask": {"type": "circle"},
            "border": {"width": 10, "color": "#D4AF37"},
            "shadow": {"blur": 24, "offsetX": 0, "offsetY": 12, "color": "#00000099"},
        }
    ],
    "text": [
        {
            "id": "athleteName",
            "position": {"anchor": "bottom-center", "offsetY": -330},
            "style": {
                "fontFamily": "Oswald-Bold",
                "fontSize": 84,
                "color": "#FFFFFF",
                "align": "center",
                "textTransform": "upper",
                "maxWidth": 980,
                "overflow": "shrink",
                "shadow": {"blur": 6, "offsetX": 0, "offsetY": 4, "color": "#00000080"},
            },
        },
        {
            "id": "achievement",
            "position": {"anchor": "bottom-center", "offsetY": -245},
            "style": {
                "fontFamily": "BebasNeue-Regular",
                "fontSize": 64,
                "color": "#D4AF37",
                "align": "center",
                "letterSpacing": 2,
            },
        },
        {
            "id": "tournamentName",
            "position": {"anchor": "bottom-center", "offsetY": -160},
            "style": {
                "fontFamily": "Roboto-Regular",
                "fontSize": 44,
                "color": "#E0E0E0",
                "align": "center",
                "maxWidth": 960,
                "overflow": "shrink",
            },
        },
        {
            "id": "date",
            "position": {"anchor": "bottom-center", "offsetY": -90},
            "style": {
                "fontFamily": "Roboto-Regular",
                "fontSize": 36,
                "color": "#A0A0A0",
                "align": "center",
            },
        },
    ],
}

MODERN_TEMPLATE: Final[dict[str, Any]] = {
    "id": "modern",
    "name": "Modern Minimal",
    "canvas": {"width": 1080, "height": 1350},
    "background": {
        "type": "gradient",
        "direction": "radial",
        "stops": [
            {"color": "#2B2B2B", "position": 0},
            {"color": "#0D0D0D", "position": 100},
        ],
    },
    "photos": [
        {
            "id": "athletePhoto",
            "position": {"anchor": "top-center", "offsetY": 480},
            "size": {"width": 760, "height": 800},
            "mask": {"type": "rounded-rect", "radius": 48},
            "border": {"width": 4, "color": "#FFFFFF"},
            "shadow": {"blur": 30, "offsetX": 12, "offsetY": 18, "color": "#000000B3"},
        }
    ],
    "text": [
        {
            "id": "athleteName",
            "position": {"x": 160, "y": 1010},
            "style": {
                "fontFamily": "BebasNeue-Regular",
                "fontSize": 96,
                "color": "#FFFFFF",
                "align": "left",
                "maxWidth": 760,
                "overflow": "wrap",
                "lineHeight": 0.95,
                "stroke": {"width": 2, "color": "#000000"},
            },
        },
        {
            "id": "achievement",
            "position": {"x": 160, "y": 1120},
            "style": {
                "fontFamily": "Oswald-Bold",
                "fontSize": 52,
                "color": "#F5C518",
                "align": "left",
                "textTransform": "upper",
            },
        },
        {
            "id": "tournamentName",
            "position": {"x": 160, "y": 1190},
            "style": {
                "fontFamily": "Roboto-Regular",
                "fontSize": 38,
                "color": "#DDDDDD",
                "align": "left",
                "maxWidth": 760,
                "overflow": "shrink",
            },
        },
        {
            "id": "date",
            "position": {"x": 920, "y": 1190},
            "style": {
                "fontFamily": "Roboto-Regular",
                "fontSize": 32,
                "color": "#9E9E9E",
                "align": "right",
            },
        },
    ],
}

BUILTIN_TEMPLATES: Final[tuple[dict[str, Any], ...]] = (CLASSIC_TEMPLATE, MODERN_TEMPLATE)
