from __future__ import annotations

import pytest

from common.base_registry import BaseRegistry


def test_register_and_get_with_normalization() -> None:
    reg = BaseRegistry()

    @reg.register(None)
    class TwoTone:  # noqa: N801 (テスト用)
        pass

    assert reg.is_registered("two_tone")
    assert reg.get("TwoTone") is TwoTone
    assert reg.get("two-tone") is TwoTone
    assert reg.names() == ["two_tone"]


def test_duplicate_registration_rejected() -> None:
    reg = BaseRegistry()

    @reg.register(None)
    def sample():  # noqa: ANN001 - テスト用
        return 1

    with pytest.raises(ValueError):
        reg.register("sample")(lambda: 2)
    # 同一オブジェクトの再登録は許容
    assert reg.register("sample")(sample) is sample


def test_get_unknown_lists_candidates() -> None:
    reg = BaseRegistry()
    reg.register("greyscale")(object)
    with pytest.raises(KeyError) as ei:
        reg.get("rainbow")
    assert "greyscale" in str(ei.value)


def test_empty_key_rejected() -> None:
    reg = BaseRegistry()
    with pytest.raises(ValueError):
        reg.get("  ")
