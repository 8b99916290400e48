from __future__ import annotations

from opgraph.core.errors import ErrorCode


def test_codes_are_stable() -> None:
    assert [int(c) for c in ErrorCode] == [0, 1, 2, 3, 4]
    assert ErrorCode.CONFIG_ERROR == 2
