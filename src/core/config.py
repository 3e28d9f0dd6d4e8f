# path: src/core/config.py
from decimal import Decimal

from pydantic import BaseModel
from pydantic import PostgresDsn
from pydantic_settings import BaseSettings, SettingsConfigDict


class RunConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8015


class ApiV1Prefix(BaseModel):
    prefix: str = "/v1"
    users: str = "/users"
    auth: str = "/auth"
    categories: str = "/categories"
    waste_items: str = "/waste-items"
    transactions: str = "/transactions"


class ApiPrefix(BaseModel):
    prefix: str = "/api"
    v1: ApiV1Prefix = ApiV1Prefix()


class DatabaseConfig(BaseModel):
    url: PostgresDsn
    echo: bool = False
    echo_pool: bool = False
    pool_size: int = 50
    max_overflow: int = 10

    naming_convention: dict[str, str] = {
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_N_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }


class AuthConfig(BaseModel):
    secret_key: str = "CHANGE_ME"                # секрет для подписи JWT
    algorithm: str = "HS256"
    access_token_minutes: int = 60
    min_password_length: int = 6


class BankConfig(BaseModel):
    # допустимое расхождение цены клиента и текущей цены каталога
    price_tolerance: Decimal = Decimal("0.01")
    # сколько знаков после запятой в итогах транзакции
    amount_places: int = 2
    # масштабы колонок transaction_items.weight / price
    weight_places: int = 3
    price_places: int = 2
    default_role: str = "USER"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(".env.example", ".env"),
        case_sensitive=False,
        env_nested_delimiter="__",
        env_prefix="APP_CONFIG__",
        # в .env могут лежать переменные других инструментов (LOG_LEVEL и т.п.)
        extra="ignore",
    )
    run: RunConfig = RunConfig()
    api: ApiPrefix = ApiPrefix()
    db: DatabaseConfig

    auth: AuthConfig = AuthConfig()
    bank: BankConfig = BankConfig()


settings = Settings()
