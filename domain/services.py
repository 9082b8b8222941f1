from enum import Enum
import logging

from domain.aopenai import ModelGateway, OutputFormat
from domain.errors import ValidationError
from domain.flows import Flow
from domain.images import ImageResolver
from domain.models import (
    LANGUAGES,
    Drink,
    DrinkFormat,
    PairingMode,
    PairingRequest,
    Recipe,
    RecipeRequest,
)
from domain.parsing import parse_drink, parse_recipe
from domain.prompts import PairingPrompt, RecipePrompt


logger = logging.getLogger(__name__)


class Tab(Enum):
    chef = "chef"
    bartender = "bartender"


def validate_recipe_request(request: RecipeRequest) -> None:
    if request.chef is None:
        raise ValidationError("Pick a chef.")
    if not request.ingredients.strip():
        raise ValidationError("List some ingredients.")
    if request.language not in LANGUAGES:
        raise ValidationError(f"Unsupported language: {request.language}")


def validate_pairing_request(request: PairingRequest) -> None:
    if request.language not in LANGUAGES:
        raise ValidationError(f"Unsupported language: {request.language}")
    prefs = request.preferences
    if prefs is not None and prefs.wine_style is not None and prefs.wine_type is None:
        raise ValidationError("A wine style needs a wine type.")


class SousChef:
    def __init__(
        self,
        gateway: ModelGateway,
        image_resolver: ImageResolver | None = None,
    ) -> None:
        self.gateway = gateway
        self.image_resolver = (
            ImageResolver() if image_resolver is None else image_resolver
        )

    async def create_recipe(self, request: RecipeRequest, variation: int = 0) -> Recipe:
        validate_recipe_request(request)
        assert request.chef is not None
        prompt = RecipePrompt(
            chef=request.chef,
            ingredients=request.ingredients,
            language=request.language,
            variation=variation,
        )
        text = await self.gateway.generate(str(prompt), OutputFormat.json)
        return parse_recipe(
            text,
            language=request.language,
            image_resolver=self.image_resolver,
        )

    async def pair_drink(self, request: PairingRequest, variation: int = 0) -> Drink:
        validate_pairing_request(request)
        prompt = PairingPrompt(
            mode=request.mode,
            dish=request.dish,
            preferences=request.preferences,
            language=request.language,
            drink_format=request.drink_format,
            variation=variation,
        )
        output_format = (
            OutputFormat.json
            if request.drink_format is DrinkFormat.structured
            else OutputFormat.freeform
        )
        text = await self.gateway.generate(str(prompt), output_format)
        return parse_drink(text, mode=request.mode, drink_format=request.drink_format)


class Kitchen:
    """The tabbed shell. One Chef flow, one Bartender flow.

    A finished recipe is handed to the Bartender as pairing context and, with
    `auto_pair`, immediately paired.
    """

    def __init__(
        self,
        sous_chef: SousChef,
        *,
        language: str = "he",
        auto_pair: bool = False,
        pairing_mode: PairingMode = PairingMode.wine,
        drink_format: DrinkFormat = DrinkFormat.freeform,
    ) -> None:
        self.sous_chef = sous_chef
        self.language = language
        self.auto_pair = auto_pair
        self.pairing_mode = pairing_mode
        self.drink_format = drink_format
        self.tab = Tab.chef
        self.dish: Recipe | None = None

        self.chef: Flow[RecipeRequest, Recipe] = Flow(
            "chef",
            sous_chef.create_recipe,
            validate=validate_recipe_request,
        )
        self.bartender: Flow[PairingRequest, Drink] = Flow(
            "bartender",
            sous_chef.pair_drink,
            validate=validate_pairing_request,
        )
        self.chef.subscribe(self._on_recipe)

    async def _on_recipe(self, recipe: Recipe) -> None:
        if recipe.is_refusal:
            return
        self.dish = recipe
        if not self.auto_pair:
            return
        logger.info("Pairing a %s with %s", self.pairing_mode.value, recipe.dish_name)
        await self.bartender.generate(
            PairingRequest(
                mode=self.pairing_mode,
                dish=recipe,
                language=self.language,
                drink_format=self.drink_format,
            )
        )

    def reset_chef(self) -> None:
        self.chef.reset()
        self.dish = None

    def reset_bartender(self) -> None:
        self.bartender.reset()
