"""
Welcome commands for the CoinDash bot.

`/start` and `!start` reply with the static greeting that points players to
the leaderboard command.
"""

import discord
from discord import app_commands
from discord.ext import commands


class HelpCommandsCog(commands.Cog):
    """Static greeting commands"""

    def __init__(self, bot):
        self.bot = bot

    @app_commands.command(name="start", description="Show the CoinDash welcome message")
    async def start(self, interaction: discord.Interaction):
        await interaction.response.send_message(self.bot.leaderboard_service.welcome_message())

    @commands.command(name='start')
    async def start_prefix(self, ctx: commands.Context):
        await ctx.send(self.bot.leaderboard_service.welcome_message())


async def setup(bot):
    """Add the HelpCommandsCog to the bot"""
    await bot.add_cog(HelpCommandsCog(bot))
