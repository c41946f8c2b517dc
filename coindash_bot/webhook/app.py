"""FastAPI interactions endpoint for running the bot without a gateway connection.

Discord POSTs every slash-command invocation to `/interactions`. Each request
is verified against the application's Ed25519 public key, PINGs are answered
with PONG, and `/leaderboard` is deferred and completed by editing the
original response once the store query returns.
"""

import json
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

import aiohttp
from fastapi import BackgroundTasks, FastAPI, HTTPException, Request
from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

from coindash_bot.constants import MessageConstants, RateLimitConstants
from coindash_bot.services.leaderboard import LeaderboardService
from coindash_bot.services.rate_limiter import SimpleRateLimiter

logger = logging.getLogger(__name__)

DISCORD_API_BASE = "https://discord.com/api/v10"

# Interaction and response types from the Discord interactions API
PING = 1
APPLICATION_COMMAND = 2
PONG = 1
CHANNEL_MESSAGE_WITH_SOURCE = 4
DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
EPHEMERAL_FLAG = 1 << 6

FollowupSender = Callable[[str, str], Awaitable[None]]


def verify_signature(verify_key: VerifyKey, body: bytes, signature: Optional[str], timestamp: Optional[str]) -> bool:
    """Check the X-Signature-Ed25519 header over timestamp + raw body."""
    if not signature or not timestamp:
        return False
    try:
        verify_key.verify(timestamp.encode() + body, bytes.fromhex(signature))
    except (BadSignatureError, ValueError):
        return False
    return True


def interaction_user_id(interaction: Dict[str, Any]) -> int:
    """Invoking user: `member.user` in guilds, `user` in DMs."""
    user = (interaction.get("member") or {}).get("user") or interaction.get("user") or {}
    return int(user.get("id", 0))


def message_response(content: str, ephemeral: bool = False) -> Dict[str, Any]:
    data: Dict[str, Any] = {"content": content, "allowed_mentions": {"parse": []}}
    if ephemeral:
        data["flags"] = EPHEMERAL_FLAG
    return {"type": CHANNEL_MESSAGE_WITH_SOURCE, "data": data}


def make_followup_sender(application_id: int) -> FollowupSender:
    """Build the coroutine that replaces a deferred response with its final content."""

    async def send_followup(interaction_token: str, content: str) -> None:
        url = f"{DISCORD_API_BASE}/webhooks/{application_id}/{interaction_token}/messages/@original"
        payload = {"content": content, "allowed_mentions": {"parse": []}}
        async with aiohttp.ClientSession() as session:
            async with session.patch(url, json=payload) as resp:
                if resp.status >= 400:
                    text = await resp.text()
                    logger.error(f"Failed to edit interaction response: HTTP {resp.status} {text}")

    return send_followup


def create_app(
    leaderboard_service: LeaderboardService,
    public_key: str,
    application_id: int,
    rate_limiter: Optional[SimpleRateLimiter] = None,
    followup_sender: Optional[FollowupSender] = None,
) -> FastAPI:
    """Build the interactions app around an already constructed leaderboard service."""
    verify_key = VerifyKey(bytes.fromhex(public_key))
    rate_limiter = rate_limiter or SimpleRateLimiter()
    send_followup = followup_sender or make_followup_sender(application_id)

    app = FastAPI(title="CoinDash Leaderboard Bot")

    async def complete_leaderboard(interaction_token: str) -> None:
        message = await leaderboard_service.build_leaderboard_message()
        try:
            await send_followup(interaction_token, message)
        except aiohttp.ClientError as e:
            logger.error(f"Error delivering leaderboard follow-up: {e}", exc_info=True)

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/interactions")
    async def interactions(request: Request, background_tasks: BackgroundTasks) -> Dict[str, Any]:
        body = await request.body()
        if not verify_signature(
            verify_key,
            body,
            request.headers.get("X-Signature-Ed25519"),
            request.headers.get("X-Signature-Timestamp"),
        ):
            raise HTTPException(status_code=401, detail="invalid request signature")

        try:
            interaction = json.loads(body)
        except ValueError:
            raise HTTPException(status_code=400, detail="malformed interaction payload")

        interaction_type = interaction.get("type")
        if interaction_type == PING:
            return {"type": PONG}
        if interaction_type != APPLICATION_COMMAND:
            raise HTTPException(status_code=400, detail=f"unsupported interaction type {interaction_type}")

        command = (interaction.get("data") or {}).get("name")
        user_id = interaction_user_id(interaction)
        logger.info(f"Interaction command '{command}' from user {user_id}")

        if command == "start":
            return message_response(leaderboard_service.welcome_message())

        if command == "leaderboard":
            if not await rate_limiter.is_allowed(
                user_id, "leaderboard",
                RateLimitConstants.LEADERBOARD_LIMIT, RateLimitConstants.LEADERBOARD_WINDOW
            ):
                return message_response(MessageConstants.RATE_LIMITED.format(command="leaderboard"), ephemeral=True)
            token = interaction.get("token")
            if not token:
                raise HTTPException(status_code=400, detail="interaction token missing")
            background_tasks.add_task(complete_leaderboard, token)
            return {"type": DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE}

        logger.warning(f"Received unknown command '{command}'")
        return message_response(f"❌ Unknown command `/{command}`.", ephemeral=True)

    return app
