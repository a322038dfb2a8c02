"""Answers to chat messages.

Two responders. `AssistantResponder` forwards the message to the OpenAI chat
completions api along with a system prompt describing the recipe and the
user's preferences. `DemoResponder` matches keywords against `RULES` and
answers from canned replies; it ignores the system prompt entirely.

Which one is used is decided once, by whether an api key is configured. A
failing completion call is an error, it does not drop back to the demo.
"""
import datetime
import logging
from typing import Callable, Protocol

import httpx
import openai
from openai.types.chat import (
    ChatCompletionMessageParam,
    ChatCompletionSystemMessageParam,
    ChatCompletionUserMessageParam,
)

from prepper import prompts
from prepper.errors import AssistantUnavailable
from prepper.models import ChatContext


logger = logging.getLogger(__name__)


DEFAULT_MODEL = "gpt-4o-mini"
TEMPERATURE = 0.7
MAX_TOKENS = 500
WALKTHROUGH_INGREDIENTS = 5


type Predicate = Callable[[str, ChatContext], bool]
type Reply = Callable[[ChatContext], str]


class Rule:
    def __init__(self, name: str, predicate: Predicate, reply: Reply) -> None:
        self.name = name
        self.predicate = predicate
        self.reply = reply

    def __repr__(self) -> str:
        return f"<Rule(name={self.name})>"

    def matches(self, message: str, context: ChatContext) -> bool:
        return self.predicate(message, context)


def mentions(*words: str, needs_recipe: bool = False) -> Predicate:
    def predicate(message: str, context: ChatContext) -> bool:
        if needs_recipe and context.recipe is None:
            return False
        return any(word in message for word in words)

    return predicate


def _title(context: ChatContext) -> str:
    return context.recipe.title if context.recipe else ""


def substitute_reply(context: ChatContext) -> str:
    return prompts.SUBSTITUTE_REPLY.format(title=_title(context))


def calorie_reply(context: ChatContext) -> str:
    assert context.recipe is not None
    return prompts.CALORIE_REPLY.format(
        title=context.recipe.title, calories=context.recipe.calories
    )


def walkthrough_reply(context: ChatContext) -> str:
    assert context.recipe is not None
    recipe = context.recipe
    names = [i.name for i in recipe.ingredients]
    ingredients = ", ".join(names[:WALKTHROUGH_INGREDIENTS])
    if len(names) > WALKTHROUGH_INGREDIENTS:
        ingredients += "..."
    return prompts.WALKTHROUGH_REPLY.format(
        title=recipe.title,
        prep=recipe.prep_minutes,
        cook=recipe.cook_minutes,
        ingredients=ingredients,
    )


def savory_reply(context: ChatContext) -> str:
    if context.preferences.plant_based:
        return prompts.VEGETARIAN_SAVORY_REPLY
    return prompts.SAVORY_REPLY


# First match wins.
RULES: tuple[Rule, ...] = (
    Rule(
        "substitute",
        mentions("substitute", "replace", "instead", needs_recipe=True),
        substitute_reply,
    ),
    Rule("calories", mentions("calorie", "healthier", needs_recipe=True), calorie_reply),
    Rule("walkthrough", mentions("how", "cook", "make", needs_recipe=True), walkthrough_reply),
    Rule("sweet", mentions("sweet", "dessert"), lambda _: prompts.SWEET_REPLY),
    Rule("savory", mentions("savory", "dinner", "meal"), savory_reply),
    Rule("quick", mentions("quick", "easy", "fast"), lambda _: prompts.QUICK_REPLY),
    Rule("healthy", mentions("healthy", "low calorie", "diet"), lambda _: prompts.HEALTHY_REPLY),
)


def match_rule(message: str, context: ChatContext, rules: tuple[Rule, ...] = RULES) -> Rule | None:
    msg = message.lower()
    for rule in rules:
        if rule.matches(msg, context):
            return rule
    return None


def respond(message: str, context: ChatContext | None = None) -> str:
    """Local answer from the keyword rules. Always succeeds."""
    context = ChatContext() if context is None else context
    rule = match_rule(message, context)
    if rule is None:
        return prompts.DEFAULT_REPLY
    return rule.reply(context)


class ChatReply:
    def __init__(
        self,
        text: str,
        *,
        mode: str,
        timestamp: datetime.datetime | None = None,
    ) -> None:
        self.text = text
        self.mode = mode
        self.timestamp = (
            datetime.datetime.now(datetime.timezone.utc) if timestamp is None else timestamp
        )

    def to_dict(self) -> dict[str, str]:
        stamp = self.timestamp.astimezone(datetime.timezone.utc)
        return {
            "response": self.text,
            "timestamp": stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "mode": self.mode,
        }


class Responder(Protocol):
    mode: str

    async def respond(self, message: str, context: ChatContext) -> str:
        ...


class DemoResponder:
    mode = "demo"

    async def respond(self, message: str, context: ChatContext) -> str:
        return respond(message, context)


class AssistantResponder:
    mode = "ai"

    def __init__(
        self,
        openai_client: openai.AsyncClient,
        *,
        model: str = DEFAULT_MODEL,
        temperature: float = TEMPERATURE,
        max_tokens: int = MAX_TOKENS,
    ) -> None:
        self.openai_client = openai_client
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def respond(self, message: str, context: ChatContext) -> str:
        system_message: ChatCompletionSystemMessageParam = {
            "role": "system",
            "content": str(prompts.ChatPrompt(context)),
        }
        user_message: ChatCompletionUserMessageParam = {
            "role": "user",
            "content": message,
        }
        messages: list[ChatCompletionMessageParam] = [system_message, user_message]

        try:
            resp = await self.openai_client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except (openai.OpenAIError, httpx.HTTPError) as e:
            raise AssistantUnavailable("AI service unavailable") from e

        if not resp.choices:
            raise AssistantUnavailable("AI service unavailable")
        return resp.choices[0].message.content or ""

    async def close(self) -> None:
        await self.openai_client.close()


def select_responder(
    api_key: str | None,
    *,
    model: str = DEFAULT_MODEL,
    temperature: float = TEMPERATURE,
    max_tokens: int = MAX_TOKENS,
) -> Responder:
    if not api_key:
        logger.info("No OpenAI api key configured, chat runs in demo mode.")
        return DemoResponder()
    return AssistantResponder(
        openai.AsyncClient(api_key=api_key),
        model=model,
        temperature=temperature,
        max_tokens=max_tokens,
    )


async def respond_async(
    message: str,
    context: ChatContext | None = None,
    *,
    responder: Responder,
) -> ChatReply:
    context = ChatContext() if context is None else context
    text = await responder.respond(message, context)
    return ChatReply(text, mode=responder.mode)
