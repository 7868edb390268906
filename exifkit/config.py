# -*- coding: utf-8 -*-
"""
exifkit 配置：从包内 exifkit.cfg 读取默认值，再用外部 override 文件（参数或 EXIFKIT_CONFIG）合并覆盖。
"""
from __future__ import annotations

import json
import os
from typing import Any

CONFIG_ENV_VAR = "EXIFKIT_CONFIG"

DEFAULT_SETTINGS: dict[str, Any] = {
    "validate_on_set": True,
    "skip_unknown_tags": True,
    "text_encoding": "utf-8",
    "temp_suffix": ".working",
}

# override 文件里只接受这些键，类型必须与默认值一致
_OVERRIDABLE_KEYS = tuple(DEFAULT_SETTINGS.keys())


def _module_cfg_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "exifkit.cfg")


def _read_json_dict(path: str) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _merge(base: dict[str, Any], data: dict) -> None:
    for k in _OVERRIDABLE_KEYS:
        if k in data and isinstance(data[k], type(DEFAULT_SETTINGS[k])):
            base[k] = data[k]


def load_settings(override_path: str | None = None) -> dict[str, Any]:
    """读取配置：内置默认 → 模块 exifkit.cfg → override_path（未传时取环境变量 EXIFKIT_CONFIG）。"""
    base = dict(DEFAULT_SETTINGS)
    p = _module_cfg_path()
    if os.path.isfile(p):
        _merge(base, _read_json_dict(p))
    if override_path is None:
        override_path = os.environ.get(CONFIG_ENV_VAR, "").strip() or None
    if override_path and os.path.isfile(override_path):
        _merge(base, _read_json_dict(override_path))
    return base


def resolve_settings(settings: dict[str, Any] | None) -> dict[str, Any]:
    """调用方传入的部分配置与 load_settings() 合并；None 时直接读取配置文件。"""
    merged = load_settings()
    if settings:
        unknown = set(settings) - set(DEFAULT_SETTINGS)
        if unknown:
            raise ValueError(f"unknown exifkit settings: {sorted(unknown)}")
        merged.update(settings)
    return merged


def save_setting(override_path: str, key: str, value: Any) -> None:
    """将单个配置键写入 override 文件（先读全量再合并后写回）。"""
    if key not in DEFAULT_SETTINGS:
        raise ValueError(f"unknown exifkit setting: {key!r}")
    data = _read_json_dict(override_path) if os.path.isfile(override_path) else {}
    data[key] = value
    with open(override_path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
