import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Bot configuration settings"""

    # Discord settings
    DISCORD_TOKEN = os.getenv('DISCORD_TOKEN')
    DISCORD_APPLICATION_ID = int(os.getenv('DISCORD_APPLICATION_ID', 0))
    DISCORD_PUBLIC_KEY = os.getenv('DISCORD_PUBLIC_KEY')
    DISCORD_GUILD_IDS = os.getenv('DISCORD_GUILD_IDS', '')  # Comma-separated, empty for global sync
    OWNER_DISCORD_ID = int(os.getenv('OWNER_DISCORD_ID', 0))

    # Bot settings
    COMMAND_PREFIX = os.getenv('COMMAND_PREFIX', '!')
    BOT_MODE = os.getenv('BOT_MODE', 'gateway').lower()  # gateway, webhook or sync
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    LOG_DIR = os.getenv('LOG_DIR', 'logs')

    # Webhook server settings
    WEBHOOK_HOST = os.getenv('WEBHOOK_HOST', '0.0.0.0')
    WEBHOOK_PORT = int(os.getenv('WEBHOOK_PORT', 8080))

    # Score store settings
    STORE_BACKEND = os.getenv('STORE_BACKEND', 'firestore').lower()  # firestore or sql
    APP_ID = os.getenv('APP_ID', 'default-app-id')
    SCORE_COLLECTION_PATH = os.getenv('SCORE_COLLECTION_PATH', 'artifacts/{app_id}/public/data/coindash_scores')
    SERVICE_ACCOUNT_KEY = os.getenv('SERVICE_ACCOUNT_KEY')
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///coindash.db')

    # Leaderboard settings
    GAME_LINK = os.getenv('GAME_LINK', 'https://giosubress.github.io/CoinDashGIKA/')
    LEADERBOARD_LIMIT = int(os.getenv('LEADERBOARD_LIMIT', 10))
    QUERY_TIMEOUT_SECONDS = float(os.getenv('QUERY_TIMEOUT_SECONDS', 10))

    BOT_MODES = ('gateway', 'webhook', 'sync')
    STORE_BACKENDS = ('firestore', 'sql')

    @classmethod
    def get_guild_ids(cls):
        """Get list of guild IDs for command syncing"""
        if cls.DISCORD_GUILD_IDS:
            try:
                return [int(guild_id.strip()) for guild_id in cls.DISCORD_GUILD_IDS.split(',') if guild_id.strip()]
            except ValueError:
                raise ValueError("DISCORD_GUILD_IDS must be comma-separated integers")
        # Global sync
        return []

    @classmethod
    def get_collection_path(cls):
        """Resolve the Firestore collection holding score documents"""
        return cls.SCORE_COLLECTION_PATH.format(app_id=cls.APP_ID)

    @classmethod
    def get_async_database_url(cls):
        """Convert a sqlite URL to its aiosqlite form if needed"""
        database_url = cls.DATABASE_URL
        if database_url.startswith('sqlite:///'):
            database_url = database_url.replace('sqlite:///', 'sqlite+aiosqlite:///')
        return database_url

    @classmethod
    def validate(cls):
        """Validate that required configuration is present"""
        if cls.BOT_MODE not in cls.BOT_MODES:
            raise ValueError(f"BOT_MODE must be one of {', '.join(cls.BOT_MODES)}")
        if cls.STORE_BACKEND not in cls.STORE_BACKENDS:
            raise ValueError(f"STORE_BACKEND must be one of {', '.join(cls.STORE_BACKENDS)}")
        if cls.BOT_MODE in ('gateway', 'sync') and not cls.DISCORD_TOKEN:
            raise ValueError("DISCORD_TOKEN is required")
        if cls.BOT_MODE == 'webhook':
            if not cls.DISCORD_PUBLIC_KEY:
                raise ValueError("DISCORD_PUBLIC_KEY is required in webhook mode")
            if not cls.DISCORD_APPLICATION_ID:
                raise ValueError("DISCORD_APPLICATION_ID is required in webhook mode")
        if cls.STORE_BACKEND == 'sql' and not cls.DATABASE_URL:
            raise ValueError("DATABASE_URL is required for the sql store backend")
        if cls.LEADERBOARD_LIMIT < 1:
            raise ValueError("LEADERBOARD_LIMIT must be a positive integer")
        if cls.QUERY_TIMEOUT_SECONDS <= 0:
            raise ValueError("QUERY_TIMEOUT_SECONDS must be positive")
