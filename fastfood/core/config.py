import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Prefer .env.production if present, else default .env
if os.path.exists(".env.production"):
    load_dotenv(".env.production")
else:
    load_dotenv()


class Settings(BaseSettings):
    database_url: Optional[str] = None
    database_echo: bool = False

    jwt_secret: str = "fastfood-dev-secret-change-me-in-production"  # 🔐 Override in every real deployment
    jwt_algorithm: str = "HS256"

    # Queue-based ETA: minutes of kitchen time per open order
    prep_minutes_per_order: int = 10

    # Linear delivery fee, only applied when the delivery policy is enabled
    delivery_base_fee: float = 0.0
    delivery_cost_per_km: float = 0.0
    delivery_min_fee: float = 0.0

    meals_seed_path: str = os.path.join("data", "meals.json")

    cors_origins: List[str] = ["*"]


settings = Settings()
