import pytest

from plugins.physics_calculator.core.tokens import (
    PROTECTED_SEQUENCES,
    PROTECTED_TOKENS,
    build_token_table,
    decode,
    encode,
    placeholder_for,
)


def test_encode_replaces_control_sequences():
    assert encode("\\frac{1}{2}") == "<~~~~~>{1}{2}"
    assert encode("2\\cdot 3") == "2<~~~~~~> 3"
    assert "\\operatorname" not in encode("\\operatorname{m}")


@pytest.mark.parametrize(
    "text",
    [
        "",
        "2+2",
        "\\frac{\\operatorname{m}}{\\operatorname{s}}",
        "\\sqrt{2}\\times 3\\cdot 4",
        "\\frac{1}{2}\\frac{3}{4}",
    ],
)
def test_decode_inverts_encode(text):
    assert decode(encode(text)) == text


def test_placeholders_cannot_be_typed():
    for token in PROTECTED_TOKENS:
        assert not any(char.isalnum() or char in "\\{}" for char in token.placeholder)
    assert len({token.placeholder for token in PROTECTED_TOKENS}) == len(PROTECTED_SEQUENCES)


def test_table_rejects_nested_sequences():
    with pytest.raises(ValueError):
        build_token_table(["\\sin", "\\sinh"])


def test_placeholder_lookup():
    assert placeholder_for("\\frac") == "<~~~~~>"
    with pytest.raises(KeyError):
        placeholder_for("\\left")
