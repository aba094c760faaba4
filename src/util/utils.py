"""
どこで: `util.utils`。
何を: YAML 設定ファイルの読み込み（明示パスは厳格、既定ファイルはフェイルソフト）。
なぜ: CLI 引数の既定値を設定ファイルに書けるようにし、CLI 側でトップレベル上書きするため。
"""

from pathlib import Path
from typing import Any, Dict

import yaml

from common.errors import ConfigurationError

DEFAULT_CONFIG_NAME = "quasicrystals.yaml"


def _normalize_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    # YAML では "image-format" のようなハイフン表記も許す
    return {str(k).replace("-", "_"): v for k, v in data.items()}


def _safe_load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return _normalize_keys(data) if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        return {}


def _load_yaml_strict(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"cannot read config file '{path}': {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"invalid YAML in config file '{path}': {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"config file '{path}' must contain a mapping at top level")
    return _normalize_keys(data)


def load_config(path: str | Path | None = None) -> Dict[str, Any]:
    """構成を読み込んで辞書で返す。

    - `path` 指定時: 読めない/不正な YAML は ConfigurationError。
    - 未指定時: カレントの `quasicrystals.yaml` があれば読む（不正/不在は空辞書）。
    - ネストした辞書のディープマージは行わず、トップレベルのみ扱う。
    """
    if path is not None:
        return _load_yaml_strict(Path(path))
    default_path = Path.cwd() / DEFAULT_CONFIG_NAME
    if default_path.exists():
        return _safe_load_yaml(default_path)
    return {}


def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """`overrides` の None 以外の値で `base` をトップレベル上書きした新しい辞書。"""
    merged = dict(base)
    merged.update({k: v for k, v in overrides.items() if v is not None})
    return merged
