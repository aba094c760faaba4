"""
どこで: `common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_str


@dataclass
class _Settings:
    # 波動場カーネル
    USE_NUMBA: bool = True

    # スケジューラ（CLI/設定ファイルで未指定のときの既定スレッド数）
    DEFAULT_THREADS: int = 1

    # Misc
    LOG_LEVEL: str = "INFO"


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - bool は `env_bool`、int は `env_int` を使用。
    - スレッド数は 1 未満を 1 に丸める。
    """
    _settings.USE_NUMBA = env_bool("QC_USE_NUMBA", True)
    _settings.DEFAULT_THREADS = env_int("QC_THREADS", 1, min_value=1) or 1
    _settings.LOG_LEVEL = env_str("QC_LOG_LEVEL", "INFO").upper()


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
