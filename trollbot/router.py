from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from trollbot.personas import Persona, friendly_prompt, owner_info_prompt, troll_prompt
from trollbot.state import StateSnapshot

OWNER_GREETING = "Welcome back, boss 👑"
PRIVATE_REJECTION = "bro I'm not your diary 💀"
OWNER_ACK = "What do you need, boss?"

OWNER_QUESTIONS = (
    "who is your owner",
    "who's your owner",
    "who created you",
    "your creator",
    "your owner",
)

PRIVATE_CHAT = "private"
GROUP_CHAT_TYPES = ("group", "supergroup")


class RouteAction(str, Enum):
    IGNORE = "ignore"
    REPLY = "reply"
    COMPLETE = "complete"


@dataclass(frozen=True)
class IncomingMessage:
    chat_id: int
    chat_type: str
    chat_title: str | None
    sender_id: int
    sender_username: str | None
    text: str
    replied_to_bot: bool = False

    @property
    def is_private(self) -> bool:
        return self.chat_type == PRIVATE_CHAT

    @property
    def is_group(self) -> bool:
        return self.chat_type in GROUP_CHAT_TYPES


@dataclass(frozen=True)
class RouterSettings:
    owner_username: str
    bot_name: str
    bot_username: str = ""
    owner_info: str = ""


@dataclass(frozen=True)
class RouteDecision:
    action: RouteAction
    track_group: bool = False
    text: str = ""
    persona: Persona | None = None
    system_prompt: str = ""


def is_owner(username: str | None, owner_username: str) -> bool:
    return bool(username) and username == owner_username


def mentions_bot(text: str, settings: RouterSettings) -> bool:
    lowered = text.lower()
    if settings.bot_name and settings.bot_name.lower() in lowered:
        return True
    return bool(settings.bot_username) and f"@{settings.bot_username.lower()}" in lowered


def is_owner_question(text: str) -> bool:
    lowered = text.lower()
    return any(question in lowered for question in OWNER_QUESTIONS)


def route_message(
    message: IncomingMessage,
    state: StateSnapshot,
    settings: RouterSettings,
    *,
    context: str = "",
) -> RouteDecision:
    if state.shutting_down:
        return RouteDecision(RouteAction.IGNORE)

    track = message.is_group
    sender_is_owner = is_owner(message.sender_username, settings.owner_username)

    if message.is_private and sender_is_owner:
        return RouteDecision(RouteAction.REPLY, track_group=track, text=OWNER_GREETING)

    if state.paused and not sender_is_owner and not message.is_private:
        return RouteDecision(RouteAction.IGNORE, track_group=track)

    targeted = mentions_bot(message.text, settings) or message.replied_to_bot

    if is_owner_question(message.text):
        if not targeted:
            return RouteDecision(RouteAction.IGNORE, track_group=track)
        return RouteDecision(
            RouteAction.COMPLETE,
            track_group=track,
            text=message.text,
            persona=Persona.INFORMATIONAL,
            system_prompt=owner_info_prompt(settings.owner_info),
        )

    if message.is_private:
        if not sender_is_owner:
            return RouteDecision(RouteAction.REPLY, text=PRIVATE_REJECTION)
        return RouteDecision(RouteAction.REPLY, text=OWNER_ACK)

    if not targeted:
        return RouteDecision(RouteAction.IGNORE, track_group=track)

    if sender_is_owner:
        return RouteDecision(
            RouteAction.COMPLETE,
            track_group=track,
            text=message.text,
            persona=Persona.FRIENDLY,
            system_prompt=friendly_prompt(settings.bot_name),
        )
    return RouteDecision(
        RouteAction.COMPLETE,
        track_group=track,
        text=message.text,
        persona=Persona.TROLL,
        system_prompt=troll_prompt(settings.bot_name, settings.owner_username, context),
    )
