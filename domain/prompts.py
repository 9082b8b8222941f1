from domain.catalog import Chef
from domain.models import DrinkFormat, PairingMode, PairingPreferences, Recipe


REFUSALS = {
    "he": "מצטער, אני יכול לעזור רק עם מתכונים המבוססים על מצרכי מזון.",
    "en": "Sorry, I can only help with recipes based on food ingredients.",
}

LANGUAGE_NAMES = {"he": "Hebrew", "en": "English"}

ORIGIN_HEADING = "### Dish Origin"


def content_key(language: str) -> str:
    return f"recipeContent{LANGUAGE_NAMES[language]}"


def language_directive(language: str) -> str:
    name = LANGUAGE_NAMES[language]
    return (
        f"Write your entire answer strictly in {name}. "
        f"Do not mix in any other language, apart from the JSON keys."
    )


PREAMBLE = """
You are {persona}, a world-class chef with a warm, confident voice.
The user has listed the ingredients they have at home.
Create one delicious recipe that makes the most of them.
You may assume common pantry staples such as salt, pepper, oil, and water."""

REFUSAL = """
If the text below is not recognisable as food ingredients, do not create a recipe.
Instead reply with exactly this sentence and nothing else, with no markdown:
{sentence}"""

FORMAT = """
Respond with a single JSON object with exactly these fields:

{{
  "dishNameEnglish": "The name of the dish in English, used to find a photo of it",
  "{content_key}": "The full recipe in markdown",
  "isRefusal": false
}}

The recipe must contain a title, the ingredients with quantities, and numbered
preparation steps. It must end with a final subsection that starts with the
heading "{origin_heading}" and briefly tells where the dish comes from."""

VARIATION = """
This is variation number {variation} for these ingredients.
Suggest a dish that differs from earlier variations."""

CREATE_RECIPE_PROMPT = """{preamble}
{refusal}
{format}
{language}
{variation}

Ingredients: {ingredients}"""


class RecipePrompt:
    def __init__(
        self,
        *,
        chef: Chef,
        ingredients: str,
        language: str = "he",
        variation: int = 0,
    ) -> None:
        self.chef = chef
        self.ingredients = ingredients
        self.language = language
        self.variation = variation

    def __str__(self) -> str:
        return CREATE_RECIPE_PROMPT.format(
            preamble=PREAMBLE.format(persona=f"the {self.chef.title} chef"),
            refusal=REFUSAL.format(sentence=REFUSALS[self.language]),
            format=FORMAT.format(
                content_key=content_key(self.language),
                origin_heading=ORIGIN_HEADING,
            ),
            language=language_directive(self.language),
            variation=VARIATION.format(variation=self.variation),
            ingredients=self.ingredients,
        )


WINE_FIELDS = """
{
  "name": "", "nameHe": "",
  "type": "", "typeHe": "",
  "region": "", "regionHe": "",
  "grapes": "", "grapesHe": "",
  "description": "", "descriptionHe": "",
  "servingTip": "", "servingTipHe": ""
}"""

COCKTAIL_FIELDS = """
{
  "name": "", "nameHe": "",
  "ingredients": [], "ingredientsHe": [],
  "instructions": [], "instructionsHe": [],
  "glass": "", "glassHe": "",
  "garnish": "", "garnishHe": "",
  "description": "", "descriptionHe": ""
}"""

BARTENDER_PREAMBLE = {
    PairingMode.wine: "You are an expert sommelier. Recommend one wine.",
    PairingMode.cocktail: "You are a creative mixologist. Recommend one cocktail.",
}


def build_preferences(preferences: PairingPreferences) -> str:
    s = ""
    if preferences.flavor:
        s += f"Preferred flavours: {preferences.flavor}.\n"
    if preferences.texture:
        s += f"Preferred texture: {preferences.texture}.\n"
    if preferences.cooking_style:
        s += f"The food is cooked in this style: {preferences.cooking_style}.\n"
    if preferences.wine_type:
        s += f"The user wants a {preferences.wine_type.id} wine.\n"
    if preferences.wine_style:
        s += f"Preferred wine style: {preferences.wine_style.label}.\n"
    return s


class PairingPrompt:
    def __init__(
        self,
        *,
        mode: PairingMode,
        dish: Recipe | None = None,
        preferences: PairingPreferences | None = None,
        language: str = "he",
        drink_format: DrinkFormat = DrinkFormat.freeform,
        variation: int = 0,
    ) -> None:
        self.mode = mode
        self.dish = dish
        self.preferences = preferences
        self.language = language
        self.drink_format = drink_format
        self.variation = variation

    @property
    def context(self) -> str:
        hints = (
            build_preferences(self.preferences)
            if self.preferences is not None and not self.preferences.is_empty()
            else ""
        )
        if self.dish is not None:
            s = (
                f"Pair it with this dish: {self.dish.dish_name}\n\n"
                f"Recipe:\n{self.dish.content}"
            )
            return f"{s}\n\nAlso consider:\n{hints}" if hints else s
        if hints:
            return "Pair it with a meal described by these hints:\n" + hints
        return "There is no dish yet. Suggest something that suits a relaxed evening."

    @property
    def format(self) -> str:
        if self.drink_format is DrinkFormat.freeform:
            return (
                "Answer in short, well structured markdown: the name, why it works, "
                "and one serving tip."
            )
        fields = WINE_FIELDS if self.mode is PairingMode.wine else COCKTAIL_FIELDS
        return (
            "Respond with a single JSON object with exactly these fields, "
            "giving every value in English and in Hebrew:" + fields
        )

    def __str__(self) -> str:
        parts = [
            BARTENDER_PREAMBLE[self.mode],
            self.context,
            self.format,
            VARIATION.format(variation=self.variation).strip(),
        ]
        if self.drink_format is DrinkFormat.freeform:
            parts.append(language_directive(self.language))
        return "\n\n".join(parts)
