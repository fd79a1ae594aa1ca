import json
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from autoparts_hub.core.constants.orders import SAVED_ORDERS_LIMIT


load_dotenv()


class Settings(BaseModel):
    # Supabase
    supabase_url: str | None = os.getenv("SUPABASE_URL")
    supabase_key: str | None = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
    supabase_service_role_key: str | None = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
    coefficients_table: str = os.getenv("COEFFICIENTS_TABLE", "client_coefficients")
    saved_orders_table: str = os.getenv("SAVED_ORDERS_TABLE", "saved_orders")

    # Catalog feed
    catalog_url: str = os.getenv("CATALOG_URL", "http://localhost:8080/api/catalogo.json")
    catalog_fetch_timeout: float = float(os.getenv("CATALOG_FETCH_TIMEOUT", "30"))
    catalog_max_retries: int = int(os.getenv("CATALOG_MAX_RETRIES", "3"))
    # Delay after failed attempt n (0-based) is base * 2**n
    catalog_retry_base_delay: float = float(os.getenv("CATALOG_RETRY_BASE_DELAY", "1"))
    catalog_refresh_seconds: int = int(os.getenv("CATALOG_REFRESH_SECONDS", "300"))
    auto_start_catalog_refresh: bool = (
        os.getenv("AUTO_START_CATALOG_REFRESH", "true").lower() == "true"
    )

    # Pricing / orders
    saved_orders_limit: int = int(os.getenv("SAVED_ORDERS_LIMIT", str(SAVED_ORDERS_LIMIT)))

    # Messaging
    whatsapp_phone: Optional[str] = os.getenv("WHATSAPP_PHONE")

    # HTTP
    cors_allow_origins: list[str] = json.loads(os.getenv("CORS_ALLOW_ORIGINS", '["*"]'))


settings = Settings()
