import json

import pytest

from domain.aopenai import OutputFormat
from domain.catalog import get_chef, get_wine_style
from domain.errors import NetworkError, ValidationError
from domain.flows import ViewState
from domain.models import (
    DrinkFormat,
    FreeformDrink,
    PairingMode,
    PairingPreferences,
    PairingRequest,
    RecipeRequest,
    StructuredDrink,
)
from domain.prompts import REFUSALS
from domain.services import Kitchen, SousChef
from tests.conftest import WINE, FakeGateway, RecordingResolver, recipe_json


@pytest.mark.asyncio
async def test_create_recipe(
    recipe_request: RecipeRequest, resolver: RecordingResolver
) -> None:
    gateway = FakeGateway(recipe_json())
    sous_chef = SousChef(gateway, resolver)  # pyright: ignore[reportArgumentType]
    recipe = await sous_chef.create_recipe(recipe_request, variation=2)
    assert recipe.dish_name == "Pasta Carbonara"
    assert resolver.looked_up == ["Pasta Carbonara"]
    prompt, output_format = gateway.calls[0]
    assert output_format is OutputFormat.json
    assert "eggs, pasta, pecorino" in prompt
    assert "variation number 2" in prompt


@pytest.mark.asyncio
async def test_create_recipe_validates(resolver: RecordingResolver) -> None:
    sous_chef = SousChef(FakeGateway(recipe_json()), resolver)  # pyright: ignore[reportArgumentType]
    with pytest.raises(ValidationError):
        await sous_chef.create_recipe(
            RecipeRequest(chef=get_chef("vegan"), ingredients="  ", language="he")
        )
    with pytest.raises(ValidationError):
        await sous_chef.create_recipe(
            RecipeRequest(chef=None, ingredients="tofu", language="he")
        )


@pytest.mark.asyncio
async def test_pair_drink_formats(resolver: RecordingResolver) -> None:
    gateway = FakeGateway("A glass of Chianti.", json.dumps(WINE))
    sous_chef = SousChef(gateway, resolver)  # pyright: ignore[reportArgumentType]

    freeform = await sous_chef.pair_drink(PairingRequest(mode=PairingMode.wine))
    assert isinstance(freeform, FreeformDrink)

    structured = await sous_chef.pair_drink(
        PairingRequest(mode=PairingMode.wine, drink_format=DrinkFormat.structured)
    )
    assert isinstance(structured, StructuredDrink)
    assert [fmt for _, fmt in gateway.calls] == [OutputFormat.freeform, OutputFormat.json]


@pytest.mark.asyncio
async def test_pair_drink_style_needs_type(resolver: RecordingResolver) -> None:
    sous_chef = SousChef(FakeGateway("x"), resolver)  # pyright: ignore[reportArgumentType]
    prefs = PairingPreferences(wine_style=get_wine_style("red", "dry"))
    with pytest.raises(ValidationError):
        await sous_chef.pair_drink(
            PairingRequest(mode=PairingMode.wine, preferences=prefs)
        )


@pytest.mark.asyncio
async def test_chef_flow_result(kitchen: Kitchen, recipe_request: RecipeRequest) -> None:
    await kitchen.chef.generate(recipe_request)
    assert kitchen.chef.state is ViewState.result
    assert kitchen.dish is kitchen.chef.result
    assert kitchen.bartender.state is ViewState.idle


@pytest.mark.asyncio
async def test_chef_flow_network_error(
    recipe_request: RecipeRequest, resolver: RecordingResolver
) -> None:
    gateway = FakeGateway(NetworkError("Connection error."))
    kitchen = Kitchen(SousChef(gateway, resolver))  # pyright: ignore[reportArgumentType]
    await kitchen.chef.generate(recipe_request)
    assert kitchen.chef.state is ViewState.error
    assert kitchen.chef.error == "Connection error."


@pytest.mark.asyncio
async def test_refusal_shows_sentence_without_image(
    recipe_request: RecipeRequest, resolver: RecordingResolver
) -> None:
    gateway = FakeGateway(REFUSALS["he"])
    kitchen = Kitchen(SousChef(gateway, resolver), auto_pair=True)  # pyright: ignore[reportArgumentType]
    await kitchen.chef.generate(recipe_request)
    assert kitchen.chef.state is ViewState.result
    assert kitchen.chef.result is not None
    assert kitchen.chef.result.content == REFUSALS["he"]
    assert kitchen.chef.result.image_url is None
    assert resolver.looked_up == []
    assert kitchen.dish is None
    assert kitchen.bartender.state is ViewState.idle
    assert len(gateway.calls) == 1


@pytest.mark.asyncio
async def test_another_recipe_reaches_prompt(
    kitchen: Kitchen, gateway: FakeGateway, recipe_request: RecipeRequest
) -> None:
    gateway.responses = [recipe_json()]
    await kitchen.chef.generate(recipe_request)
    await kitchen.chef.another()
    assert "variation number 0" in gateway.prompts[0]
    assert "variation number 1" in gateway.prompts[1]


@pytest.mark.asyncio
async def test_auto_pair_chains_bartender(
    recipe_request: RecipeRequest, resolver: RecordingResolver
) -> None:
    gateway = FakeGateway(recipe_json(), "A glass of Chianti.")
    kitchen = Kitchen(
        SousChef(gateway, resolver),  # pyright: ignore[reportArgumentType]
        auto_pair=True,
        pairing_mode=PairingMode.wine,
    )
    await kitchen.chef.generate(recipe_request)
    assert kitchen.bartender.state is ViewState.result
    assert isinstance(kitchen.bartender.result, FreeformDrink)
    assert kitchen.bartender.result.text == "A glass of Chianti."
    assert "Pasta Carbonara" in gateway.prompts[1]


@pytest.mark.asyncio
async def test_reset_chef_clears_pairing_context(
    kitchen: Kitchen, recipe_request: RecipeRequest
) -> None:
    await kitchen.chef.generate(recipe_request)
    kitchen.reset_chef()
    kitchen.reset_chef()
    assert kitchen.chef.state is ViewState.idle
    assert kitchen.chef.result is None
    assert kitchen.dish is None
