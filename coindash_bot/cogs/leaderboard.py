import discord
from discord import app_commands
from discord.ext import commands
import logging

from coindash_bot.constants import MessageConstants, RateLimitConstants
from coindash_bot.services.rate_limiter import rate_limit

logger = logging.getLogger(__name__)

class LeaderboardCog(commands.Cog):
    """Leaderboard commands for the gateway bot"""

    def __init__(self, bot):
        self.bot = bot
        self.leaderboard_service = bot.leaderboard_service

    @app_commands.command(name="leaderboard", description="View the CoinDash top 10 leaderboard")
    @rate_limit("leaderboard", limit=RateLimitConstants.LEADERBOARD_LIMIT, window=RateLimitConstants.LEADERBOARD_WINDOW)
    async def leaderboard(self, interaction: discord.Interaction):
        """Display the top 10 leaderboard."""
        logger.debug(f"/leaderboard requested by user {interaction.user.id}")
        await interaction.response.defer()

        message = await self.leaderboard_service.build_leaderboard_message()
        await interaction.followup.send(message, allowed_mentions=discord.AllowedMentions.none())

    @commands.command(name='leaderboard')
    async def leaderboard_prefix(self, ctx: commands.Context):
        """Display the top 10 leaderboard (prefix command)"""
        logger.debug(f"!leaderboard requested by user {ctx.author.id}")
        if not await self.bot.rate_limiter.is_allowed(
            ctx.author.id, "leaderboard",
            RateLimitConstants.LEADERBOARD_LIMIT, RateLimitConstants.LEADERBOARD_WINDOW
        ):
            await ctx.send(MessageConstants.RATE_LIMITED.format(command="leaderboard"))
            return

        async with ctx.typing():
            message = await self.leaderboard_service.build_leaderboard_message()
        await ctx.send(message, allowed_mentions=discord.AllowedMentions.none())

async def setup(bot):
    await bot.add_cog(LeaderboardCog(bot))
