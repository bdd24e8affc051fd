from functools import lru_cache

from apkgen.config import get_settings
from apkgen.infrastructure.services.setup import Services, setup_services


@lru_cache()
def get_services() -> Services:
    """Services built once from the cached settings."""
    return setup_services(get_settings())
