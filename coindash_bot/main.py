import argparse
import asyncio
import logging
import traceback
from typing import Optional

import discord
import uvicorn
from discord.ext import commands
from discord import app_commands

from coindash_bot.config import Config
from coindash_bot.constants import UIConstants
from coindash_bot.services.leaderboard import LeaderboardService
from coindash_bot.services.rate_limiter import SimpleRateLimiter
from coindash_bot.services.store_factory import create_score_store
from coindash_bot.utils.logger import setup_logger
from coindash_bot.webhook.app import create_app

logger = logging.getLogger(__name__)

class LeaderboardBot(commands.Bot):
    def __init__(self, leaderboard_service: LeaderboardService, application_id: Optional[int] = None):
        intents = discord.Intents.default()
        intents.message_content = True

        super().__init__(
            command_prefix=Config.COMMAND_PREFIX,
            intents=intents,
            help_command=None,
            application_id=application_id or None
        )

        # Attach app command error handler
        self.tree.on_error = self.on_app_command_error

        self.leaderboard_service = leaderboard_service
        self.rate_limiter = SimpleRateLimiter()
        self.logger = logger

    async def setup_hook(self):
        """Called when the bot is starting up"""
        self.logger.info("Setting up CoinDash Bot...")

        await self.load_cogs()
        await self._sync_commands()

        self.logger.info("CoinDash Bot setup complete!")

    async def load_cogs(self):
        """Load all cogs"""
        cogs_to_load = [
            'coindash_bot.cogs.leaderboard',
            'coindash_bot.cogs.help_commands'
        ]

        for cog in cogs_to_load:
            try:
                await self.load_extension(cog)
                self.logger.info(f"Loaded cog: {cog}")
            except Exception as e:
                self.logger.error(f"Failed to load cog {cog}: {e}", exc_info=True)

    async def _sync_commands(self):
        """Sync slash commands with Discord"""
        if not self.tree.get_commands():
            self.logger.warning("No application commands found to sync. Check for cog loading errors.")
            return

        try:
            guild_ids = Config.get_guild_ids()

            if guild_ids:
                # Guild-specific sync (instant updates, works in specified servers)
                self.logger.info(f"Attempting to sync commands to {len(guild_ids)} guild(s): {guild_ids}...")
                for guild_id in guild_ids:
                    try:
                        guild = discord.Object(id=guild_id)
                        self.tree.copy_global_to(guild=guild)
                        synced = await self.tree.sync(guild=guild)
                        self.logger.info(f"Successfully synced {len(synced)} command(s) to guild {guild_id}")
                    except discord.errors.Forbidden:
                        self.logger.error(f"Permission error syncing to guild {guild_id}. Ensure the bot has the 'application.commands' scope and is in the guild.", exc_info=True)
                    except discord.errors.HTTPException as e:
                        self.logger.error(f"HTTP error syncing to guild {guild_id}. Status: {e.status}, Response: {e.text}", exc_info=True)
            else:
                # Global sync (can take up to 1 hour, works everywhere)
                self.logger.info("Attempting to sync commands globally... (Note: This can take up to an hour to propagate)")
                synced = await self.tree.sync()
                self.logger.info(f"Successfully synced {len(synced)} command(s) globally")
                for cmd in synced:
                    self.logger.info(f"  - {cmd.name}: {cmd.description}")
        except Exception as e:
            # Prefix commands keep working without slash commands
            self.logger.error(f"Failed to sync commands: {e}", exc_info=True)

    async def on_ready(self):
        """Called when the bot is ready"""
        self.logger.info(f'{self.user} has connected to Discord!')
        self.logger.info(f'Bot is in {len(self.guilds)} guilds')

        await self.change_presence(
            activity=discord.Game(name=UIConstants.PRESENCE_TEXT)
        )

    async def on_app_command_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        """Global error handler for slash commands"""
        command_name = interaction.command.name if interaction.command else 'Unknown'
        self.logger.error(f"Error in app command '{command_name}': {error}", exc_info=True)

        error_message = "❌ An unexpected error occurred while processing your command. Please try again later."
        try:
            if interaction.response.is_done():
                await interaction.followup.send(error_message, ephemeral=True)
            else:
                await interaction.response.send_message(error_message, ephemeral=True)
        except discord.HTTPException as e:
            self.logger.error(f"Failed to send error response: {e}")

    async def on_command_error(self, ctx: commands.Context, error: Exception):
        """Global error handler for prefix commands"""
        if isinstance(error, commands.CommandNotFound):
            return

        if isinstance(error, commands.CommandOnCooldown):
            await ctx.send(f"❌ Command is on cooldown. Try again in {error.retry_after:.2f} seconds.")
            return

        self.logger.error(f"Unexpected error in command {ctx.command}: {error}")
        self.logger.error(''.join(traceback.format_exception(type(error), error, error.__traceback__)))
        await ctx.send("❌ An unexpected error occurred while processing your command. Please try again later.")

    async def close(self):
        """Cleanup when bot is shutting down"""
        self.logger.info("Shutting down CoinDash Bot...")
        await super().close()


async def run_gateway(leaderboard_service: LeaderboardService):
    """Persistent gateway connection; Discord pushes commands to the bot"""
    bot = LeaderboardBot(leaderboard_service)
    async with bot:
        await bot.start(Config.DISCORD_TOKEN)


async def run_sync(leaderboard_service: LeaderboardService):
    """Log in once to register slash commands, then exit"""
    bot = LeaderboardBot(leaderboard_service)
    async with bot:
        # login() runs setup_hook, which loads cogs and syncs the command tree
        await bot.login(Config.DISCORD_TOKEN)
    logger.info("Command sync finished")


async def run_webhook(leaderboard_service: LeaderboardService):
    """HTTP interactions endpoint; Discord POSTs each command to the server"""
    app = create_app(
        leaderboard_service,
        public_key=Config.DISCORD_PUBLIC_KEY,
        application_id=Config.DISCORD_APPLICATION_ID
    )
    server = uvicorn.Server(uvicorn.Config(
        app,
        host=Config.WEBHOOK_HOST,
        port=Config.WEBHOOK_PORT,
        log_level="debug" if Config.DEBUG else "info"
    ))
    logger.info(f"Serving interactions on {Config.WEBHOOK_HOST}:{Config.WEBHOOK_PORT}")
    await server.serve()


MODE_RUNNERS = {
    'gateway': run_gateway,
    'webhook': run_webhook,
    'sync': run_sync,
}


async def main(mode: Optional[str] = None):
    """Main entry point"""
    if mode:
        Config.BOT_MODE = mode
    Config.validate()

    store = await create_score_store()
    leaderboard_service = LeaderboardService(
        store,
        game_link=Config.GAME_LINK,
        limit=Config.LEADERBOARD_LIMIT,
        query_timeout=Config.QUERY_TIMEOUT_SECONDS
    )

    try:
        await MODE_RUNNERS[Config.BOT_MODE](leaderboard_service)
    finally:
        await leaderboard_service.close()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="CoinDash leaderboard bot")
    parser.add_argument(
        '--mode',
        choices=sorted(MODE_RUNNERS),
        help="Delivery mode (defaults to BOT_MODE from the environment)"
    )
    return parser.parse_args(argv)


def run(argv=None):
    args = parse_args(argv)
    setup_logger()
    try:
        asyncio.run(main(args.mode))
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        raise SystemExit(1)


if __name__ == "__main__":
    run()
