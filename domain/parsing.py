import json
import logging
import re
from typing import Any

import pydantic
from pydantic import AliasChoices, BaseModel, Field

from domain.errors import ParseError
from domain.images import ImageResolver
from domain.models import (
    Cocktail,
    Drink,
    DrinkFormat,
    FreeformDrink,
    PairingMode,
    Recipe,
    StructuredDrink,
    Wine,
)
from domain.prompts import REFUSALS


logger = logging.getLogger(__name__)

_RE_FENCE = re.compile(r"^\s*```[a-zA-Z]*\s*\n?(.*?)\n?\s*```\s*$", re.DOTALL)


class RecipePayload(BaseModel):
    dish_name_english: str = Field(
        validation_alias=AliasChoices("dishNameEnglish", "dishName")
    )
    content: str = Field(
        validation_alias=AliasChoices(
            "recipeContentHebrew",
            "recipeContentEnglish",
            "recipeContent",
        )
    )
    is_refusal: bool = Field(False, validation_alias="isRefusal")


def strip_code_fences(text: str) -> str:
    m = _RE_FENCE.match(text)
    return m.group(1).strip() if m else text.strip()


def refusal_in(text: str) -> str | None:
    """The apology sentence contained in `text`, if any."""
    for sentence in REFUSALS.values():
        if sentence in text:
            return sentence
    return None


def is_refusal(text: str) -> bool:
    return refusal_in(text) is not None


def load_json(text: str) -> dict[str, Any]:
    try:
        data = json.loads(strip_code_fences(text))
    except json.JSONDecodeError as e:
        raise ParseError(f"Model response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ParseError("Model response is not a JSON object.")
    return data


def parse_recipe(
    text: str,
    *,
    language: str = "he",
    image_resolver: ImageResolver | None = None,
) -> Recipe:
    sentence = refusal_in(text)
    if sentence is not None:
        logger.info("Model refused the ingredients")
        return Recipe.refusal(sentence)

    data = load_json(text)
    try:
        payload = RecipePayload.model_validate(data)
    except pydantic.ValidationError as e:
        raise ParseError(f"Model response is missing recipe fields: {e}") from e

    if payload.is_refusal:
        return Recipe.refusal(REFUSALS[language])

    image_url = (
        image_resolver.url_for(payload.dish_name_english) if image_resolver else None
    )
    return Recipe(
        dish_name=payload.dish_name_english,
        content=payload.content,
        image_url=image_url,
    )


def parse_drink(
    text: str,
    *,
    mode: PairingMode,
    drink_format: DrinkFormat,
) -> Drink:
    if drink_format is DrinkFormat.freeform:
        return FreeformDrink(text)

    data = load_json(text)
    model = Wine if mode is PairingMode.wine else Cocktail
    try:
        record = model.model_validate(data)
    except pydantic.ValidationError as e:
        raise ParseError(f"Model response is missing {mode.value} fields: {e}") from e
    return StructuredDrink(record)
