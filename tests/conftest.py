import json

import pytest

from domain.aopenai import OutputFormat
from domain.catalog import get_chef
from domain.images import ImageResolver
from domain.models import RecipeRequest
from domain.services import Kitchen, SousChef


class FakeGateway:
    """Answers with canned responses, in order, and records every prompt."""

    model = "fake-model"

    def __init__(self, *responses: str | Exception) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[str, OutputFormat]] = []

    @property
    def prompts(self) -> list[str]:
        return [prompt for prompt, _ in self.calls]

    async def generate(
        self,
        prompt: str,
        output_format: OutputFormat = OutputFormat.freeform,
    ) -> str:
        self.calls.append((prompt, output_format))
        resp = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(resp, Exception):
            raise resp
        return resp

    async def close(self) -> None:
        pass


class RecordingResolver(ImageResolver):
    def __init__(self) -> None:
        super().__init__()
        self.looked_up: list[str] = []

    def url_for(self, dish_name: str) -> str | None:
        self.looked_up.append(dish_name)
        return super().url_for(dish_name)


def recipe_json(
    dish: str = "Pasta Carbonara",
    content: str = "## Pasta Carbonara\n\nBoil the pasta.\n\n### Dish Origin\nRome, Italy.",
    *,
    key: str = "recipeContentHebrew",
) -> str:
    return json.dumps({"dishNameEnglish": dish, key: content})


WINE = {
    "name": "Chianti Classico",
    "nameHe": "קיאנטי קלאסיקו",
    "type": "Red",
    "typeHe": "אדום",
    "region": "Tuscany",
    "regionHe": "טוסקנה",
    "grapes": "Sangiovese",
    "grapesHe": "סנג'ובזה",
    "description": "Bright cherry and earthy notes.",
    "descriptionHe": "דובדבן ואדמה.",
    "servingTip": "Serve at 16C.",
    "servingTipHe": "להגיש ב-16 מעלות.",
}


@pytest.fixture
def recipe_request() -> RecipeRequest:
    return RecipeRequest(
        chef=get_chef("italian"),
        ingredients="eggs, pasta, pecorino",
        language="he",
    )


@pytest.fixture
def resolver() -> RecordingResolver:
    return RecordingResolver()


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway(recipe_json(), "A glass of Chianti.")


@pytest.fixture
def kitchen(gateway: FakeGateway, resolver: RecordingResolver) -> Kitchen:
    return Kitchen(SousChef(gateway, resolver))  # pyright: ignore[reportArgumentType]
