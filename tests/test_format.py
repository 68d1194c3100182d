"""
Tests for display formatting helpers.
"""

from datetime import datetime, timezone

from file_index.utils.format import format_bytes, format_datetime, get_sitemap_index_url, join_url


class TestFormatBytes:
    """Tests for format_bytes"""

    def test_zero_bytes(self):
        assert format_bytes(0) == ("0", "B")

    def test_bytes_are_integers(self):
        assert format_bytes(512) == ("512", "B")
        assert format_bytes(1023) == ("1023", "B")

    def test_kibibytes(self):
        assert format_bytes(1024) == ("1.0", "KiB")
        assert format_bytes(1536) == ("1.5", "KiB")

    def test_larger_units(self):
        assert format_bytes(int(3.7 * 1024 ** 2)) == ("3.7", "MiB")
        assert format_bytes(2 * 1024 ** 3) == ("2.0", "GiB")
        assert format_bytes(5 * 1024 ** 4) == ("5.0", "TiB")

    def test_tebibytes_is_largest_unit(self):
        assert format_bytes(1024 ** 5) == ("1024.0", "TiB")


class TestFormatDatetime:
    """Tests for format_datetime"""

    def test_default_timezone(self):
        value = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
        assert format_datetime(value) == "2024/01/01 08:00:00"

    def test_day_rollover(self):
        value = datetime(2024, 12, 31, 20, 5, 9, tzinfo=timezone.utc)
        assert format_datetime(value) == "2025/01/01 04:05:09"

    def test_naive_is_utc(self):
        assert format_datetime(datetime(2024, 6, 1, 12, 0, 0), "UTC") == "2024/06/01 12:00:00"

    def test_custom_timezone(self):
        value = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
        assert format_datetime(value, "Asia/Tokyo") == "2024/06/01 21:00:00"


class TestUrls:
    """Tests for URL helpers"""

    def test_sitemap_index_url_root_base(self):
        assert get_sitemap_index_url("https://example.com", "/") == "https://example.com/sitemap-index.xml"

    def test_sitemap_index_url_sub_base(self):
        url = get_sitemap_index_url("https://example.com", "/files/")
        assert url == "https://example.com/files/sitemap-index.xml"

    def test_join_url(self):
        assert join_url("/") == "/"
        assert join_url("/", "a.txt") == "/a.txt"
        assert join_url("/files/", "sub", directory=True) == "/files/sub/"
        assert join_url("/", "", "sub", "", directory=True) == "/sub/"

    def test_join_url_quotes_segments(self):
        assert join_url("/", "a b", "c#d.txt") == "/a%20b/c%23d.txt"
