import contextlib
import functools
import logging
from typing import Any, Awaitable, Callable

from jinja2 import Environment, FileSystemLoader, select_autoescape
from rich.logging import RichHandler
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, RedirectResponse
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

import config
from app.html.views import KitchenPage, render_styles
from app.sessions import KitchenStore
from domain.aopenai import ModelGateway, OutputFormat
from domain.catalog import get_chef, get_wine_style, get_wine_type
from domain.errors import ValidationError
from domain.images import ImageResolver
from domain.models import (
    LANGUAGES,
    DrinkFormat,
    PairingMode,
    PairingPreferences,
    PairingRequest,
    RecipeRequest,
)
from domain.services import Kitchen, SousChef, Tab


logger = logging.getLogger(__name__)


CONFIG = config.Config()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


THEME_HINT = "Sec-CH-Prefers-Color-Scheme"

# Browsers only send the colour scheme hint once asked for it.
CLIENT_HINT_HEADERS = {
    "Accept-CH": THEME_HINT,
    "Critical-CH": THEME_HINT,
    "Vary": THEME_HINT,
}


def default_theme(request: Request, cfg: config.Config) -> str:
    theme = request.cookies.get(cfg.theme_cookie)
    if theme in ("light", "dark"):
        return theme
    hint = request.headers.get("sec-ch-prefers-color-scheme", "")
    return "dark" if hint.strip('"').lower() == "dark" else "light"


def aKitchenResponse(route: Callable[..., Awaitable[str | tuple[str, int]]]):
    """Resolve the caller's kitchen, render, and keep the session cookie."""

    @functools.wraps(route)
    async def wrapper(request: Request) -> HTMLResponse:
        cfg: config.Config = request.app.state.config
        store: KitchenStore = request.app.state.kitchens
        session_id, kitchen = store.get(request.cookies.get(cfg.session_cookie))
        page = KitchenPage(
            kitchen,
            environment=request.app.state.templates,
            theme=default_theme(request, cfg),
        )
        resp = await route(request, page)
        if not isinstance(resp, tuple):
            html, code = resp, 200
        else:
            html, code = resp
        response = HTMLResponse(html, status_code=code, headers=CLIENT_HINT_HEADERS)
        response.set_cookie(cfg.session_cookie, session_id, httponly=True, samesite="lax")
        return response

    return wrapper


def form_str(form: Any, key: str) -> str:
    value = form.get(key, "")
    return value.strip() if isinstance(value, str) else ""


def panels(page: KitchenPage, primary: str) -> str:
    """The flow's own panel plus the other panel swapped out of band."""
    other = "bartender.html" if primary == "chef.html" else "chef.html"
    return page.render(primary) + page.render(other, oob=True)


@aKitchenResponse
async def homepage(request: Request, page: KitchenPage) -> str:
    return page.render("index.html")


@aKitchenResponse
async def chef(request: Request, page: KitchenPage) -> str:
    kitchen = page.kitchen
    async with request.form() as form:
        chef_id = form_str(form, "chef")
        ingredients = form_str(form, "ingredients")
        language = form_str(form, "language") or kitchen.language

    try:
        persona = get_chef(chef_id) if chef_id else None
    except ValidationError:
        persona = None

    if language in LANGUAGES:
        kitchen.language = language
    await kitchen.chef.generate(
        RecipeRequest(chef=persona, ingredients=ingredients, language=language)
    )
    return panels(page, "chef.html")


@aKitchenResponse
async def chef_another(request: Request, page: KitchenPage) -> str:
    await page.kitchen.chef.another()
    return panels(page, "chef.html")


@aKitchenResponse
async def chef_reset(request: Request, page: KitchenPage) -> str:
    page.kitchen.reset_chef()
    return panels(page, "chef.html")


def pairing_request(form: Any, kitchen: Kitchen) -> PairingRequest:
    mode = PairingMode(form_str(form, "mode") or PairingMode.wine.value)
    drink_format = DrinkFormat(
        form_str(form, "drink_format") or kitchen.drink_format.value
    )
    wine_type_id = form_str(form, "wine_type")
    wine_style_id = form_str(form, "wine_style")
    preferences = PairingPreferences(
        flavor=form_str(form, "flavor"),
        texture=form_str(form, "texture"),
        cooking_style=form_str(form, "cooking_style"),
        wine_type=get_wine_type(wine_type_id) if wine_type_id else None,
        wine_style=(
            get_wine_style(wine_type_id, wine_style_id) if wine_style_id else None
        ),
    )
    use_dish = form_str(form, "use_dish") == "on"
    return PairingRequest(
        mode=mode,
        dish=kitchen.dish if use_dish else None,
        preferences=preferences,
        language=kitchen.language,
        drink_format=drink_format,
    )


@aKitchenResponse
async def bartender(request: Request, page: KitchenPage) -> str:
    kitchen = page.kitchen
    async with request.form() as form:
        try:
            pairing = pairing_request(form, kitchen)
        except (ValidationError, ValueError) as e:
            logger.debug("Pairing blocked: %s", e)
            return panels(page, "bartender.html")

    kitchen.pairing_mode = pairing.mode
    kitchen.drink_format = pairing.drink_format
    await kitchen.bartender.generate(pairing)
    return panels(page, "bartender.html")


@aKitchenResponse
async def bartender_another(request: Request, page: KitchenPage) -> str:
    await page.kitchen.bartender.another()
    return panels(page, "bartender.html")


@aKitchenResponse
async def bartender_reset(request: Request, page: KitchenPage) -> str:
    page.kitchen.reset_bartender()
    return panels(page, "bartender.html")


async def wine_styles(request: Request) -> HTMLResponse:
    wine_type_id = request.query_params.get("wine_type", "")
    try:
        html = render_styles(request.app.state.templates, wine_type_id)
    except ValidationError as e:
        return HTMLResponse(str(e), status_code=400)
    return HTMLResponse(html)


@aKitchenResponse
async def tab(request: Request, page: KitchenPage) -> str:
    async with request.form() as form:
        name = form_str(form, "tab")
    try:
        page.kitchen.tab = Tab(name)
    except ValueError:
        return "Unknown tab.", 400
    return page.render("index.html")


@aKitchenResponse
async def language(request: Request, page: KitchenPage) -> str:
    async with request.form() as form:
        name = form_str(form, "language")
    if name not in LANGUAGES:
        return "Unsupported language.", 400
    page.kitchen.language = name
    return page.render("index.html")


async def theme(request: Request) -> RedirectResponse:
    cfg: config.Config = request.app.state.config
    current = default_theme(request, cfg)
    toggled = "light" if current == "dark" else "dark"
    response = RedirectResponse("/", status_code=303)
    response.set_cookie(cfg.theme_cookie, toggled, max_age=60 * 60 * 24 * 365)
    return response


async def api_chat(request: Request) -> JSONResponse:
    """Proxy a raw prompt to the model. `{prompt, isJson}` in, `{text}` out."""
    match request.method.lower():
        case "post":
            gateway: ModelGateway = request.app.state.gateway
            try:
                body = await request.json()
                output_format = (
                    OutputFormat.json if body.get("isJson") else OutputFormat.freeform
                )
                text = await gateway.generate(str(body["prompt"]), output_format)
            except Exception as e:
                logger.exception("API Error")
                return JSONResponse({"error": str(e) or "Server Error"}, status_code=500)
            return JSONResponse({"text": text})
        case _:
            return JSONResponse({"error": "Method not allowed"}, status_code=405)


def create_app(
    cfg: config.Config | None = None,
    *,
    gateway: ModelGateway | None = None,
) -> Starlette:
    cfg = CONFIG if cfg is None else cfg
    gateway = (
        ModelGateway(api_key=cfg.openai_api_key, model=cfg.core_model)
        if gateway is None
        else gateway
    )
    image_resolver = ImageResolver(
        cfg.image_template,
        width=cfg.image_width,
        height=cfg.image_height,
        model=cfg.image_model,
    )
    sous_chef = SousChef(gateway, image_resolver)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        configure_logging(cfg.log_level)
        logger.info("Sous Chef ready (%s, model %s)", cfg.env.value, gateway.model)
        yield
        await gateway.close()

    app = Starlette(
        debug=True if cfg.env == config.Env.local else False,
        routes=[
            Route("/", homepage),
            Route("/chef", chef, methods=["POST"]),
            Route("/chef/another", chef_another, methods=["POST"]),
            Route("/chef/reset", chef_reset, methods=["POST"]),
            Route("/bartender", bartender, methods=["POST"]),
            Route("/bartender/another", bartender_another, methods=["POST"]),
            Route("/bartender/reset", bartender_reset, methods=["POST"]),
            Route("/bartender/styles", wine_styles),
            Route("/tab", tab, methods=["POST"]),
            Route("/language", language, methods=["POST"]),
            Route("/theme", theme, methods=["POST"]),
            Route(
                "/api/chat",
                api_chat,
                methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
            ),
            Mount(
                "/assets",
                app=StaticFiles(directory=cfg.assets_dir, check_dir=False),
                name="assets",
            ),
        ],
        lifespan=lifespan,
    )

    app.state.config = cfg
    app.state.gateway = gateway
    app.state.templates = Environment(
        loader=FileSystemLoader(cfg.html_dir),
        autoescape=select_autoescape(),
    )
    app.state.kitchens = KitchenStore(
        lambda: Kitchen(
            sous_chef,
            language=cfg.default_language,
            auto_pair=cfg.auto_pair,
        ),
        max_sessions=cfg.max_sessions,
    )
    return app


app = create_app()
