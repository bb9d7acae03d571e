"""
Fixed ledger categories and their display colours.
Every dropdown, chart and ranking uses these names verbatim.
"""

UNCATEGORIZED = "未分類"

CATEGORIES = [
    "餐飲食品",
    "交通",
    "日用品",
    "娛樂",
    "醫療",
    "教育",
    "住房",
    "水電瓦斯",
    "通訊網路",
    "旅行",
    "服飾衣物",
    "雜費",
]

CATEGORY_COLORS = {
    "餐飲食品": "#F87171",  # red
    "交通": "#60A5FA",  # blue
    "日用品": "#34D399",  # green
    "娛樂": "#FBBF24",  # yellow
    "醫療": "#A78BFA",  # purple
    "教育": "#F472B6",  # pink
    "住房": "#818CF8",  # indigo
    "水電瓦斯": "#FCD34D",  # amber
    "通訊網路": "#6EE7B7",  # emerald
    "旅行": "#38BDF8",  # sky
    "服飾衣物": "#C084FC",  # violet
    "雜費": "#9CA3AF",  # gray
}

DEFAULT_COLOR = "#CBD5E1"


def category_color(category: str | None) -> str:
    """Return the display colour for a category, falling back to the neutral swatch."""

    if not category:
        return DEFAULT_COLOR
    return CATEGORY_COLORS.get(category, DEFAULT_COLOR)


__all__ = [
    "CATEGORIES",
    "CATEGORY_COLORS",
    "DEFAULT_COLOR",
    "UNCATEGORIZED",
    "category_color",
]
