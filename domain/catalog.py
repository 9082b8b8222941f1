"""Fixed catalogues. Chefs, wine types, and the wine styles each type allows."""

from domain.errors import ValidationError


class Chef:
    def __init__(
        self,
        *,
        id: str,
        title: str,
        title_he: str,
        emoji: str,
        bg_color: str,
    ) -> None:
        self.id = id
        self.title = title
        self.title_he = title_he
        self.emoji = emoji
        self.bg_color = bg_color

    def __repr__(self) -> str:
        return f"<Chef(id={self.id})>"

    def display_name(self, language: str) -> str:
        return self.title_he if language == "he" else self.title


class WineType:
    def __init__(self, *, id: str, label: str, emoji: str) -> None:
        self.id = id
        self.label = label
        self.emoji = emoji

    def __repr__(self) -> str:
        return f"<WineType(id={self.id})>"


class WineStyle:
    def __init__(self, *, id: str, label: str) -> None:
        self.id = id
        self.label = label

    def __repr__(self) -> str:
        return f"<WineStyle(id={self.id})>"


CHEFS: tuple[Chef, ...] = (
    Chef(
        id="italian",
        title="Italian Cuisine",
        title_he="מטבח איטלקי",
        emoji="🍝",
        bg_color="#fed7aa",
    ),
    Chef(
        id="patisserie",
        title="Patisserie",
        title_he="קונדיטוריה",
        emoji="🧁",
        bg_color="#fbcfe8",
    ),
    Chef(
        id="asian",
        title="Asian Fusion",
        title_he="פיוז'ן אסייתי",
        emoji="🍣",
        bg_color="#ddd6fe",
    ),
    Chef(
        id="rotisserie",
        title="Rotisserie",
        title_he="צלייה על האש",
        emoji="🥩",
        bg_color="#fecaca",
    ),
    Chef(
        id="seafood",
        title="Seafood",
        title_he="פירות ים",
        emoji="🐟",
        bg_color="#bfdbfe",
    ),
    Chef(
        id="vegan",
        title="Vegan Specialist",
        title_he="מומחה טבעוני",
        emoji="🥗",
        bg_color="#bbf7d0",
    ),
)


WINE_TYPES: tuple[WineType, ...] = (
    WineType(id="red", label="אדום", emoji="🍷"),
    WineType(id="white", label="לבן", emoji="🥂"),
    WineType(id="rose", label="רוזה", emoji="🌸"),
    WineType(id="sparkling", label="מבעבע", emoji="🍾"),
)


WINE_STYLES: dict[str, tuple[WineStyle, ...]] = {
    "red": (
        WineStyle(id="rich_bold", label="עשיר ומלא"),
        WineStyle(id="fruity", label="פירותי ורך"),
        WineStyle(id="dry", label="יבש ומורכב"),
        WineStyle(id="light", label="קל וזורם"),
    ),
    "white": (
        WineStyle(id="crisp", label="פריך ומרענן"),
        WineStyle(id="fruity", label="פירותי ואקזוטי"),
        WineStyle(id="dry", label="יבש ומינרלי"),
        WineStyle(id="creamy", label="עשיר ושמנתי"),
    ),
    "rose": (
        WineStyle(id="dry", label="יבש ומרענן"),
        WineStyle(id="fruity", label="פירותי וקל"),
        WineStyle(id="semi_sweet", label="חצי-יבש ועדין"),
        WineStyle(id="rich", label="מלא ומורכב"),
    ),
    "sparkling": (
        WineStyle(id="brut", label="ברוט - יבש מאוד"),
        WineStyle(id="extra_dry", label="אקסטרה דריי"),
        WineStyle(id="semi_sweet", label="חצי יבש"),
        WineStyle(id="sweet", label="מתוק וחגיגי"),
    ),
}


def get_chef(id: str) -> Chef:
    for chef in CHEFS:
        if chef.id == id:
            return chef
    raise ValidationError(f"Unknown chef: {id}")


def get_wine_type(id: str) -> WineType:
    for wine_type in WINE_TYPES:
        if wine_type.id == id:
            return wine_type
    raise ValidationError(f"Unknown wine type: {id}")


def styles_for(wine_type_id: str) -> tuple[WineStyle, ...]:
    get_wine_type(wine_type_id)
    return WINE_STYLES[wine_type_id]


def get_wine_style(wine_type_id: str, style_id: str) -> WineStyle:
    """A style only exists in the context of the wine type that lists it."""
    for style in styles_for(wine_type_id):
        if style.id == style_id:
            return style
    raise ValidationError(f"Wine style {style_id} does not belong to {wine_type_id}")
