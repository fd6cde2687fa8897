"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the punch rules and analytics live in the services.
"""

import importlib

from dotenv import load_dotenv

from config import get_settings_module

from src.timeclock.timeclock.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)
    print(container.query_service.analytics().to_dict())


if __name__ == "__main__":
    main()
