import contextlib
import functools
import logging
import random
from typing import Any, AsyncIterator, Awaitable, Callable

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from app import config
from prepper.chat import Responder, respond_async, select_responder
from prepper.errors import NotFound, PrepperError, ValidationError
from prepper.mealdb import MealDBClient, mealdb_client_factory
from prepper.models import ChatContext
from prepper.normalize import normalize_recipe, normalize_recipes


logger = logging.getLogger(__name__)


SERVICE_NAME = "prepper-backend"


def aJSONResponse(route: Callable[..., Awaitable[Any | tuple[Any, int]]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> JSONResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            content, code = resp, 200
        else:
            content, code = resp
        return JSONResponse(content, status_code=code)

    return wrapper


async def prepper_error(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, PrepperError)
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc
        )
    else:
        logger.info("%s %s: %s", request.method, request.url.path, exc.message)
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@aJSONResponse
async def health(request: Request) -> dict[str, str]:
    return {"status": "ok", "service": SERVICE_NAME}


@aJSONResponse
async def search(request: Request) -> dict[str, Any]:
    query = request.query_params.get("q", "")
    if not query.strip():
        raise ValidationError("Search query required")

    mealdb: MealDBClient = request.app.state.mealdb
    meals = await mealdb.search(query)
    if not meals:
        raise NotFound("No recipes found")

    recipes = normalize_recipes(meals, rng=request.app.state.rng)
    return {"recipes": [r.to_dict() for r in recipes]}


@aJSONResponse
async def by_id(request: Request) -> dict[str, Any]:
    id = request.query_params.get("id", "")
    if not id:
        raise ValidationError("Recipe ID required")

    mealdb: MealDBClient = request.app.state.mealdb
    meals = await mealdb.lookup(id)
    recipe = normalize_recipe(meals[0], rng=request.app.state.rng) if meals else None
    if recipe is None:
        raise NotFound("Recipe not found")
    return {"recipe": recipe.to_dict()}


@aJSONResponse
async def random_recipe(request: Request) -> dict[str, Any]:
    mealdb: MealDBClient = request.app.state.mealdb
    meals = await mealdb.random()
    recipe = normalize_recipe(meals[0], rng=request.app.state.rng) if meals else None
    if recipe is None:
        raise NotFound("No recipe found")
    return {"recipe": recipe.to_dict()}


@aJSONResponse
async def chat(request: Request) -> dict[str, str]:
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        raise ValidationError("Message is required")

    message = body.get("message")
    if not isinstance(message, str) or not message.strip():
        raise ValidationError("Message is required")

    raw_context = body.get("context")
    context = ChatContext.from_dict(raw_context if isinstance(raw_context, dict) else None)

    responder: Responder = request.app.state.responder
    reply = await respond_async(message, context, responder=responder)
    return reply.to_dict()


def create_app(
    conf: config.Config | None = None,
    *,
    mealdb: MealDBClient | None = None,
    responder: Responder | None = None,
    rng: random.Random | None = None,
) -> Starlette:
    conf = config.Config() if conf is None else conf
    mealdb = (
        MealDBClient(mealdb_client_factory(conf.mealdb_url, conf.mealdb_timeout))
        if mealdb is None
        else mealdb
    )
    responder = (
        select_responder(
            conf.openai_api_key,
            model=conf.openai_model,
            temperature=conf.chat_temperature,
            max_tokens=conf.chat_max_tokens,
        )
        if responder is None
        else responder
    )

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        logger.info(
            "Prepper backend up, chat mode: %s, CORS origins: %s",
            responder.mode,
            ", ".join(conf.cors_origins),
        )
        yield
        await mealdb.close()
        close = getattr(responder, "close", None)
        if close is not None:
            await close()

    app = Starlette(
        debug=True if conf.env == config.Env.local else False,
        routes=[
            Route("/health", health),
            Route("/api/recipes/search", search),
            Route("/api/recipes/byId", by_id),
            Route("/api/recipes/random", random_recipe),
            Route("/api/ai/chat", chat, methods=["POST"]),
        ],
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=conf.cors_origins,
                allow_methods=["GET", "POST"],
                allow_headers=["Content-Type"],
            ),
        ],
        exception_handlers={PrepperError: prepper_error},
        lifespan=lifespan,
    )

    app.state.config = conf
    app.state.mealdb = mealdb
    app.state.responder = responder
    app.state.rng = random.Random() if rng is None else rng
    return app
