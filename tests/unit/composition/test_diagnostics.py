from __future__ import annotations

from config_composer.core.composition.diagnostics import (
    EMPTY_TITLE,
    PREAMBLE,
    Diagnostics,
)


def test_warn_records_code_message_and_source() -> None:
    diagnostics = Diagnostics()
    assert not diagnostics

    record = diagnostics.warn(EMPTY_TITLE, "Skipping heading", source="react")

    assert str(record) == "[react] Skipping heading"
    assert diagnostics.codes == [EMPTY_TITLE]
    assert diagnostics.warnings == ["[react] Skipping heading"]
    assert len(diagnostics) == 1


def test_extend_keeps_order() -> None:
    first = Diagnostics()
    first.warn(EMPTY_TITLE, "one")
    second = Diagnostics()
    second.warn(PREAMBLE, "two", source="b")

    first.extend(second)

    assert first.warnings == ["one", "[b] two"]
    assert first.codes == [EMPTY_TITLE, PREAMBLE]
