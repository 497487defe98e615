#!/usr/bin/env python3
"""
Setup script for environment configuration
"""

import os
from typing import List

from database_agents.config.config import API_KEY_PLACEHOLDER

ENV_TEMPLATE = f"""# OpenAI Configuration
OPENAI_API_KEY={API_KEY_PLACEHOLDER}
OPENAI_MODEL=gpt-4-turbo

# LLM Configuration
TEMPERATURE=0.2
MAX_TOKENS=4000
MAX_RETRIES=2
REQUEST_TIMEOUT=60

# Database Configuration
DATABASE_PATH=./database.sqlite

# Server Configuration
HOST=0.0.0.0
PORT=3000

# Logging Configuration
LOG_LEVEL=INFO
LOG_FILE=database_agents.log
"""

REQUIRED_VARS = ['OPENAI_API_KEY']


def create_env_file(env_file: str = ".env") -> bool:
    """Create a .env file with default values"""
    if os.path.exists(env_file):
        print(f"⚠️  {env_file} already exists. Skipping creation.")
        return False

    try:
        with open(env_file, 'w') as f:
            f.write(ENV_TEMPLATE)
        print(f"✅ Created {env_file} with default values")
        print("📝 Please edit the file to set your actual configuration values")
        return True
    except OSError as e:
        print(f"❌ Error creating {env_file}: {e}")
        return False


def find_missing_vars() -> List[str]:
    """Required variables that are unset or still hold the template placeholder"""
    return [
        var for var in REQUIRED_VARS
        if not os.getenv(var) or os.getenv(var) == API_KEY_PLACEHOLDER
    ]


def check_environment(env_file: str = ".env") -> bool:
    """Check if environment is properly configured"""
    print("🔍 Checking environment configuration...")

    if os.path.exists(env_file):
        print(f"✅ {env_file} file found")
    else:
        print(f"❌ {env_file} file not found")
        return False

    missing_vars = find_missing_vars()
    if missing_vars:
        print(f"❌ Missing environment variables: {', '.join(missing_vars)}")
        return False

    print("✅ All required environment variables are set")
    return True


def main():
    """Main setup function"""
    print("🎯 Environment Setup for Database Agent System")
    print("=" * 50)

    if not os.path.exists(".env"):
        print("📝 Creating .env file...")
        create_env_file()
        print("\n📋 Next steps:")
        print("1. Edit the .env file and set your OpenAI API key")
        print("2. Change DATABASE_PATH if the database should live elsewhere")
        print("3. Run this script again to verify configuration")
    elif check_environment():
        print("\n🎉 Environment is properly configured!")
        print("✅ You can now run the system")
    else:
        print("\n⚠️  Environment needs configuration")
        print("📝 Please edit the .env file and set the required values")


if __name__ == "__main__":
    main()
