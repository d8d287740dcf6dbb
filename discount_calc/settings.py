"""
全局配置模块。
从环境变量 (以及项目根目录的 .env 文件) 读取配置。
"""
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    # 展示
    CURRENCY_SYMBOL: str = os.environ.get("CURRENCY_SYMBOL", "€")
    DEFAULT_PRODUCT_NAME: str = os.environ.get("DEFAULT_PRODUCT_NAME", "Prodotto")

    # 日志
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    # API 服务
    API_HOST: str = os.environ.get("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.environ.get("API_PORT", "8000"))


settings = Settings()


def configure_logging(level: str = "") -> None:
    """入口程序调用一次，统一日志格式。"""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
