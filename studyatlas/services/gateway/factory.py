from functools import lru_cache

from studyatlas.services.gateway.client import GatewayClient


@lru_cache(maxsize=1)
def make_gateway_client() -> GatewayClient:
    """Singleton gateway client configured from settings."""
    return GatewayClient()
