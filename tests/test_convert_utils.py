"""
Tests for the human-readable formatting used in statistics output.
"""
import pytest
from wixfrag.utils.convert_utils import ConvertUtils


class TestBytesToHuman:

    @pytest.mark.parametrize("size, expected", [
        (0, "0.00B"),
        (512, "512.00B"),
        (1024, "1.00KB"),
        (1536, "1.50KB"),
        (1024 ** 2, "1.00MB"),
        (5 * 1024 ** 3, "5.00GB"),
    ])
    def test_conversion(self, size, expected):
        assert ConvertUtils.bytes_to_human(size) == expected

    def test_negative_size(self):
        assert ConvertUtils.bytes_to_human(-1) == "0B"


class TestSecondsToHuman:

    def test_sub_second_in_milliseconds(self):
        assert ConvertUtils.seconds_to_human(0.25) == "250ms"

    def test_seconds(self):
        assert ConvertUtils.seconds_to_human(2.5) == "2.50s"
        assert ConvertUtils.seconds_to_human(10) == "10.00s"
