# config.py
# ------------------------------------------------------------
# 実行時設定（環境変数 MATHDRILL_* で上書き可）
#
#   MATHDRILL_FONT_PATH=assets/NotoSans-Regular.ttf
#   MATHDRILL_DEFAULT_NAME="Farhan Shaik"
#   MATHDRILL_LOG_LEVEL=DEBUG
#
# フォントについて：
#  - font_path の TTF が見つかればそれを埋め込む。
#  - 見つからない場合は Helvetica にフォールバックする（× ÷ は表示可）。
# ------------------------------------------------------------

from __future__ import annotations

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """プリント生成の設定"""

    model_config = SettingsConfigDict(env_prefix="MATHDRILL_")

    # ====== フォント ======
    font_path: str = "assets/NotoSans-Regular.ttf"
    font_name: str = "NotoSans"

    # ====== ページ（mm / pt） ======
    page_margin_mm: float = 7.0
    header_font_size: int = 15
    body_font_size: int = 14
    row_height_mm: float = 8.0
    block_gap_mm: float = 1.5
    multiplication_block_width_mm: float = 45.0
    division_block_width_mm: float = 90.0
    answer_box_width_mm: float = 12.0
    sum_block_width_ratio: float = 0.16

    # ====== フォーム初期値 ======
    default_title: str = ""
    default_name: str = "Farhan Shaik"
    default_level: str = "5th Seniors"

    # ====== ログ ======
    log_level: str = "INFO"


_settings: Settings | None = None


def get_settings() -> Settings:
    """設定を取得（初回のみ読み込み）"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """環境変数から設定を読み直す"""
    global _settings
    _settings = Settings()
    return _settings


def setup_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
