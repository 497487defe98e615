import logging
import os
import sys
from typing import Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

API_KEY_PLACEHOLDER = "your_openai_api_key_here"


class Config:
    """Configuration class for the database agent system"""

    # OpenAI configuration
    OPENAI_API_KEY = os.getenv('OPENAI_API_KEY')
    OPENAI_MODEL = os.getenv('OPENAI_MODEL', 'gpt-4-turbo')

    # LLM configuration
    TEMPERATURE = float(os.getenv('TEMPERATURE', '0.2'))
    MAX_TOKENS = int(os.getenv('MAX_TOKENS', '4000'))
    MAX_RETRIES = int(os.getenv('MAX_RETRIES', '2'))
    REQUEST_TIMEOUT = float(os.getenv('REQUEST_TIMEOUT', '60'))

    # Database configuration
    DATABASE_PATH = os.getenv('DATABASE_PATH', './database.sqlite')

    # Server configuration
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '3000'))

    # Logging configuration
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FILE = os.getenv('LOG_FILE', 'database_agents.log')

    @classmethod
    def get_database_url(cls, database_path: Optional[str] = None) -> str:
        """Get SQLAlchemy database URL, for DATABASE_PATH unless another file is given"""
        return f"sqlite:///{database_path or cls.DATABASE_PATH}"

    @classmethod
    def is_api_key_configured(cls) -> bool:
        """True when an OpenAI key is set and is not the .env template placeholder"""
        return bool(cls.OPENAI_API_KEY) and cls.OPENAI_API_KEY != API_KEY_PLACEHOLDER

    @classmethod
    def configure_logging(cls):
        """Log to stdout and to LOG_FILE"""
        logging.basicConfig(
            level=getattr(logging, cls.LOG_LEVEL.upper(), logging.INFO),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=[
                logging.FileHandler(cls.LOG_FILE),
                logging.StreamHandler(sys.stdout)
            ]
        )

    @classmethod
    def validate(cls) -> bool:
        """Validate configuration"""
        if not cls.is_api_key_configured():
            raise ValueError(
                "OPENAI_API_KEY environment variable is required. Please set it in your .env file."
            )
        return True
