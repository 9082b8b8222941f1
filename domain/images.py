from urllib.parse import quote, urlencode


DEFAULT_TEMPLATE = "https://image.pollinations.ai/prompt/{prompt}"


class ImageResolver:
    """Builds photo URLs for dishes. Never fetches anything.

    A failing image endpoint is the browser's problem, the page just shows no
    picture.
    """

    def __init__(
        self,
        template: str = DEFAULT_TEMPLATE,
        *,
        width: int = 1024,
        height: int = 768,
        model: str = "flux",
    ) -> None:
        self.template = template
        self.width = width
        self.height = height
        self.model = model

    def url_for(self, dish_name: str) -> str | None:
        dish_name = dish_name.strip()
        if not dish_name:
            return None
        path = self.template.format(
            prompt=quote(f"{dish_name} professional food photography", safe="")
        )
        params = urlencode(
            {
                "width": self.width,
                "height": self.height,
                "model": self.model,
                "nologo": "true",
            }
        )
        return f"{path}?{params}"
