import pytest

from xenosdisasm.bits import bit_is_set, extract_bits


def test_extract_full_word_is_identity():
    for word in (0, 1, 0x80000000, 0xDEADBEEF, 0xFFFFFFFF):
        assert extract_bits(word, 0, 31) == word


@pytest.mark.parametrize(
    "word, low, high, expected",
    [
        (0xAB, 4, 7, 0xA),
        (0xAB, 0, 3, 0xB),
        (0x80000000, 31, 31, 1),
        (0x0000F000, 12, 15, 0xF),
        (0x12345678, 16, 31, 0x1234),
        (0x12345678, 8, 19, 0x456),
    ],
)
def test_extract_selected_ranges(word, low, high, expected):
    assert extract_bits(word, low, high) == expected


def test_extract_matches_per_bit_reconstruction():
    word = 0xA5C3_0F96
    for low in range(32):
        for high in range(low, 32):
            expected = 0
            for position in range(high, low - 1, -1):
                expected = (expected << 1) | ((word >> position) & 1)
            assert extract_bits(word, low, high) == expected


@pytest.mark.parametrize("low, high", [(5, 4), (-1, 3), (0, 32), (32, 32)])
def test_extract_rejects_invalid_ranges(low, high):
    with pytest.raises(ValueError, match="invalid bit range"):
        extract_bits(0xFFFFFFFF, low, high)


def test_bit_is_set():
    assert bit_is_set(0b100, 2)
    assert not bit_is_set(0b100, 1)
