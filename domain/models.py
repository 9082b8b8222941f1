from typing import TypeAlias
from enum import Enum

import markdown2  # pyright: ignore[reportMissingTypeStubs]
from pydantic import BaseModel, Field

from domain.catalog import Chef, WineStyle, WineType


LANGUAGES = ("he", "en")

ORIGIN_HEADINGS = ("### Dish Origin", "### מקור המנה")


class PairingMode(Enum):
    wine = "wine"
    cocktail = "cocktail"


class DrinkFormat(Enum):
    freeform = "freeform"
    structured = "structured"


def markdown_to_html(text: str) -> str:
    return markdown2.markdown(  # pyright: ignore[reportUnknownVariableType, reportUnknownMemberType]
        text, extras=["fences", "tables"]
    )


def split_origin(content: str) -> tuple[str, str | None]:
    """Split a recipe body on its final "Dish Origin" heading.

    Returns the body before the heading and the origin text after it, or the
    whole content and `None` when no heading is present.
    """
    for heading in ORIGIN_HEADINGS:
        idx = content.rfind(heading)
        if idx != -1:
            body = content[:idx].rstrip()
            origin = content[idx + len(heading) :].strip()
            return body, origin
    return content, None


class RecipeRequest:
    def __init__(self, *, chef: Chef | None, ingredients: str, language: str) -> None:
        self.chef = chef
        self.ingredients = ingredients
        self.language = language

    def __repr__(self) -> str:
        chef_id = self.chef.id if self.chef else None
        return f"<RecipeRequest(chef={chef_id}, language={self.language})>"


class Recipe:
    def __init__(
        self,
        *,
        dish_name: str,
        content: str,
        image_url: str | None = None,
        is_refusal: bool = False,
    ) -> None:
        self.dish_name = dish_name
        self.content = content
        self.image_url = image_url
        self.is_refusal = is_refusal

    @classmethod
    def refusal(cls, sentence: str) -> "Recipe":
        return cls(dish_name="", content=sentence, is_refusal=True)

    def __repr__(self) -> str:
        return f"<Recipe(dish_name={self.dish_name}, is_refusal={self.is_refusal})>"

    def __str__(self) -> str:
        return self.content

    @property
    def body(self) -> str:
        return split_origin(self.content)[0]

    @property
    def origin(self) -> str | None:
        return split_origin(self.content)[1]

    @property
    def html(self) -> str:
        return markdown_to_html(self.content)

    def to_dict(self) -> dict[str, str | bool | None]:
        return {
            "dish_name": self.dish_name,
            "content": self.content,
            "image_url": self.image_url,
            "is_refusal": self.is_refusal,
        }


class PairingPreferences:
    """Hints used for pairing when there is no recipe to pair against."""

    def __init__(
        self,
        *,
        flavor: str = "",
        texture: str = "",
        cooking_style: str = "",
        wine_type: WineType | None = None,
        wine_style: WineStyle | None = None,
    ) -> None:
        self.flavor = flavor
        self.texture = texture
        self.cooking_style = cooking_style
        self.wine_type = wine_type
        self.wine_style = wine_style

    def is_empty(self) -> bool:
        return not (
            self.flavor
            or self.texture
            or self.cooking_style
            or self.wine_type
            or self.wine_style
        )


class PairingRequest:
    def __init__(
        self,
        *,
        mode: PairingMode,
        dish: Recipe | None = None,
        preferences: PairingPreferences | None = None,
        language: str = "he",
        drink_format: DrinkFormat = DrinkFormat.freeform,
    ) -> None:
        self.mode = mode
        self.dish = dish
        self.preferences = preferences
        self.language = language
        self.drink_format = drink_format

    def __repr__(self) -> str:
        return (
            f"<PairingRequest(mode={self.mode.value}, "
            f"has_dish={self.dish is not None}, format={self.drink_format.value})>"
        )


class Wine(BaseModel):
    name: str
    name_he: str = Field(alias="nameHe")
    type: str
    type_he: str = Field(alias="typeHe")
    region: str
    region_he: str = Field(alias="regionHe")
    grapes: str
    grapes_he: str = Field(alias="grapesHe")
    description: str
    description_he: str = Field(alias="descriptionHe")
    serving_tip: str = Field(alias="servingTip")
    serving_tip_he: str = Field(alias="servingTipHe")


class Cocktail(BaseModel):
    name: str
    name_he: str = Field(alias="nameHe")
    ingredients: list[str]
    ingredients_he: list[str] = Field(alias="ingredientsHe")
    instructions: list[str]
    instructions_he: list[str] = Field(alias="instructionsHe")
    glass: str
    glass_he: str = Field(alias="glassHe")
    garnish: str
    garnish_he: str = Field(alias="garnishHe")
    description: str
    description_he: str = Field(alias="descriptionHe")


class FreeformDrink:
    format = DrinkFormat.freeform

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return f"<FreeformDrink(chars={len(self.text)})>"

    def __str__(self) -> str:
        return self.text

    @property
    def html(self) -> str:
        return markdown_to_html(self.text)


class StructuredDrink:
    format = DrinkFormat.structured

    def __init__(self, record: Wine | Cocktail) -> None:
        self.record = record

    def __repr__(self) -> str:
        return f"<StructuredDrink(name={self.record.name})>"

    @property
    def mode(self) -> PairingMode:
        return PairingMode.wine if isinstance(self.record, Wine) else PairingMode.cocktail


Drink: TypeAlias = FreeformDrink | StructuredDrink
