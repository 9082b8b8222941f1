from jinja2 import Environment
from markupsafe import Markup

from domain.catalog import CHEFS, WINE_TYPES, styles_for
from domain.flows import ViewState
from domain.models import (
    Cocktail,
    Drink,
    FreeformDrink,
    Recipe,
    StructuredDrink,
    Wine,
    markdown_to_html,
)
from domain.services import Kitchen


class RecipeView:
    def __init__(self, recipe: Recipe) -> None:
        self.recipe = recipe

    @property
    def is_refusal(self) -> bool:
        return self.recipe.is_refusal

    @property
    def title(self) -> str:
        return self.recipe.dish_name

    @property
    def image_url(self) -> str | None:
        return None if self.recipe.is_refusal else self.recipe.image_url

    @property
    def content(self) -> Markup:
        return Markup(markdown_to_html(self.recipe.body))

    @property
    def origin(self) -> Markup | None:
        origin = self.recipe.origin
        return None if origin is None else Markup(markdown_to_html(origin))


class DrinkView:
    """Labels and values of a drink, in the page language."""

    def __init__(self, drink: Drink, *, language: str = "he") -> None:
        self.drink = drink
        self.language = language

    @property
    def is_freeform(self) -> bool:
        return isinstance(self.drink, FreeformDrink)

    @property
    def content(self) -> Markup:
        assert isinstance(self.drink, FreeformDrink)
        return Markup(self.drink.html)

    def _pick(self, en: str, he: str) -> str:
        return he if self.language == "he" else en

    @property
    def name(self) -> str:
        assert isinstance(self.drink, StructuredDrink)
        record = self.drink.record
        return self._pick(record.name, record.name_he)

    @property
    def fields(self) -> list[tuple[str, str]]:
        assert isinstance(self.drink, StructuredDrink)
        record = self.drink.record
        match record:
            case Wine():
                return [
                    (self._pick("Type", "סוג"), self._pick(record.type, record.type_he)),
                    (
                        self._pick("Region", "אזור"),
                        self._pick(record.region, record.region_he),
                    ),
                    (
                        self._pick("Grapes", "ענבים"),
                        self._pick(record.grapes, record.grapes_he),
                    ),
                    (
                        self._pick("Description", "תיאור"),
                        self._pick(record.description, record.description_he),
                    ),
                    (
                        self._pick("Serving tip", "טיפ הגשה"),
                        self._pick(record.serving_tip, record.serving_tip_he),
                    ),
                ]
            case Cocktail():
                ingredients = (
                    record.ingredients_he if self.language == "he" else record.ingredients
                )
                instructions = (
                    record.instructions_he
                    if self.language == "he"
                    else record.instructions
                )
                return [
                    (self._pick("Ingredients", "מרכיבים"), ", ".join(ingredients)),
                    (self._pick("Method", "הכנה"), " ".join(instructions)),
                    (self._pick("Glass", "כוס"), self._pick(record.glass, record.glass_he)),
                    (
                        self._pick("Garnish", "קישוט"),
                        self._pick(record.garnish, record.garnish_he),
                    ),
                    (
                        self._pick("Description", "תיאור"),
                        self._pick(record.description, record.description_he),
                    ),
                ]
            case _:
                return []


class KitchenPage:
    def __init__(
        self,
        kitchen: Kitchen,
        *,
        environment: Environment,
        theme: str = "light",
    ) -> None:
        self.kitchen = kitchen
        self.env = environment
        self.theme = theme

    @property
    def language(self) -> str:
        return self.kitchen.language

    @property
    def direction(self) -> str:
        return "rtl" if self.kitchen.language == "he" else "ltr"

    @property
    def chefs(self):
        return CHEFS

    @property
    def wine_types(self):
        return WINE_TYPES

    @property
    def chef_state(self) -> str:
        return self.kitchen.chef.state.value

    @property
    def bartender_state(self) -> str:
        return self.kitchen.bartender.state.value

    @property
    def recipe(self) -> RecipeView | None:
        result = self.kitchen.chef.result
        if self.kitchen.chef.state is not ViewState.result or result is None:
            return None
        return RecipeView(result)

    @property
    def drink(self) -> DrinkView | None:
        result = self.kitchen.bartender.result
        if self.kitchen.bartender.state is not ViewState.result or result is None:
            return None
        return DrinkView(result, language=self.kitchen.language)

    @property
    def dish(self) -> Recipe | None:
        return self.kitchen.dish

    def render(self, name: str = "index.html", **context: object) -> str:
        return self.env.get_template(name).render(page=self, **context)


def render_styles(environment: Environment, wine_type_id: str) -> str:
    styles = styles_for(wine_type_id) if wine_type_id else ()
    return environment.get_template("wine-styles.html").render(styles=styles)
