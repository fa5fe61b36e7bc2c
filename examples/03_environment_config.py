"""
Configuration from environment variables and files.

Environment variables:
    SUPERAGENT_BASE_URL=https://httpbin.org
    SUPERAGENT_TIMEOUT=10
    SUPERAGENT_RETRY_COUNT=3
    SUPERAGENT_LOG_ENABLED=true
    SUPERAGENT_LOG_FORMAT=json
"""

import os

from http_superagent import Agent
from http_superagent.core.env_config import ConfigFileLoader, load_from_env


def from_environment():
    print("\n=== From environment ===")

    os.environ.setdefault("SUPERAGENT_BASE_URL", "https://httpbin.org")
    os.environ.setdefault("SUPERAGENT_LOG_ENABLED", "true")

    config = load_from_env(retry_count=2)
    print(f"base_url={config.base_url} retry={config.retry.count}")

    with Agent(config) as agent:
        response = agent.get("/get").do()
        print(f"Status: {response.status_code}")


def from_file():
    print("\n=== From SUPERAGENT_CONFIG_FILE ===")

    config = ConfigFileLoader.from_env_path()
    if config is None:
        print("SUPERAGENT_CONFIG_FILE is not set")
        return

    with Agent(config) as agent:
        print(f"Agent for {agent.config.base_url}")


def main():
    from_environment()
    from_file()


if __name__ == "__main__":
    main()
