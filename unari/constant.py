"""Editable static campus, category and styling configuration."""

from __future__ import annotations

# Sidebar order. Restaurants absent from this table are never shown.
CAMPUS_RESTAURANTS: dict[str, list[str]] = {
    "Keskusta": [
        "Kaivopiha",
        "Metsätalo",
        "Olivia",
        "Porthania",
        "Päärakennus",
        "Rotunda",
        "Soc&Kom",
        "Topelias",
        "Valtiotiede",
        "Ylioppilasaukio",
    ],
    "Kumpula": [
        "Chemicum",
        "Exactum",
        "Physicum",
    ],
    "Meilahti": [
        "Meilahti",
        "Terkko",
    ],
    "Viikki": [
        "Biokeskus",
        "Infokeskus",
        "Tähkä",
        "Viikuna",
    ],
    "Kaisaniemi": [
        "Kaisaniemi",
        "Domus Academica",
    ],
}

CATEGORY_MEAL = "meal"
CATEGORY_VEGAN_MEAL = "vegan meal"
CATEGORY_SIDE = "side"
CATEGORY_DESSERT = "dessert"
CATEGORY_UNCLASSIFIED = "unclassified"

CATEGORY_RANK: dict[str, int] = {
    CATEGORY_MEAL: 0,
    CATEGORY_VEGAN_MEAL: 1,
    CATEGORY_SIDE: 2,
    CATEGORY_DESSERT: 3,
}
UNKNOWN_CATEGORY_RANK = 100

# Upstream price labels (lowercased) -> canonical category.
CATEGORY_ALIASES: dict[str, str] = {
    "lounas": CATEGORY_MEAL,
    "edullisesti": CATEGORY_MEAL,
    "maukkaasti": CATEGORY_MEAL,
    "kevyesti": CATEGORY_MEAL,
    "erikoisannos": CATEGORY_MEAL,
    "vegaani": CATEGORY_VEGAN_MEAL,
    "vegaanilounas": CATEGORY_VEGAN_MEAL,
    "kasvislounas": CATEGORY_VEGAN_MEAL,
    "lisuke": CATEGORY_SIDE,
    "lisäke": CATEGORY_SIDE,
    "jälkiruoka": CATEGORY_DESSERT,
    "makeasti": CATEGORY_DESSERT,
}

# (marker, rich style) per category; anything else uses the unclassified entry.
CATEGORY_MARKERS: dict[str, tuple[str, str]] = {
    CATEGORY_MEAL: ("●", "bold #f4c542"),
    CATEGORY_VEGAN_MEAL: ("✿", "bold #5fbf72"),
    CATEGORY_SIDE: ("◦", "#5fafd7"),
    CATEGORY_DESSERT: ("♦", "#d787d7"),
    CATEGORY_UNCLASSIFIED: ("·", "dim"),
}

# Structured upstream prices are keyed by customer group; the list shows this one.
STUDENT_PRICE_KEY = "student"

WEEKDAY_ABBREVIATIONS: tuple[str, ...] = ("Ma", "Ti", "Ke", "To", "Pe", "La", "Su")

TOO_SMALL_MESSAGE = "Terminal too small"
LOADING_MESSAGE = "Loading menus..."
NO_DATA_MESSAGE = "No data for this date"
FETCH_FAILED_STATUS = "menus unavailable (r to retry)"
