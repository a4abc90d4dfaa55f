from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from analytics_engine import InsightThresholds


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # App settings
    PROJECT_NAME: str = "ExpenseInsightsDashboard"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # Local key-value store (one JSON document per key)
    STORE_PATH: str = Field(default="data/store.json")

    # User settings defaults
    DEFAULT_BUDGET: float = 2000.0
    DEFAULT_CURRENCY: str = "USD"

    # Analytics
    AVERAGE_WINDOW_DAYS: int = 30
    TOP_CATEGORY_SHARE_THRESHOLD: float = 40.0
    TREND_INCREASE_THRESHOLD: float = 10.0
    TREND_DECREASE_THRESHOLD: float = -10.0

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    def insight_thresholds(self) -> InsightThresholds:
        return InsightThresholds(
            top_category_share=self.TOP_CATEGORY_SHARE_THRESHOLD,
            trend_increase=self.TREND_INCREASE_THRESHOLD,
            trend_decrease=self.TREND_DECREASE_THRESHOLD,
        )


settings = Settings()
