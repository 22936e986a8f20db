"""
Unit tests for header collection
"""
from presenter import HeaderLine, Headers
from presenter.templating import HEADERS, RenderType, headers_for


class TestHeaderTable:
    """Test the static header table"""

    def test_every_render_type_has_entry(self):
        """Test the table covers each render type"""
        for render_type in RenderType:
            assert render_type.value in HEADERS

    def test_fallback(self):
        """Test unknown keys use the default entry"""
        assert headers_for("unknown") == HEADERS["_"]

    def test_empty_key(self):
        """Test an empty key yields nothing"""
        assert headers_for(None) == ()
        assert headers_for("") == ()

    def test_not_found_status(self):
        """Test 404 carries its status code"""
        assert headers_for("404")[0].code == 404


class TestHeaders:
    """Test the header collector"""

    def test_replace(self):
        """Test replacing headers by case-insensitive name"""
        headers = Headers()
        headers.emit(HeaderLine("Content-Type", "text/html"))
        headers.emit(HeaderLine("content-type", "application/json"))
        assert headers.items() == [("content-type", "application/json")]

    def test_append(self):
        """Test non-replacing headers accumulate"""
        headers = Headers()
        headers.emit(HeaderLine("Set-Cookie", "a=1", False))
        headers.emit(HeaderLine("Set-Cookie", "b=2", False))
        assert headers.items() == [("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")]
        assert headers.get("set-cookie") == "b=2"

    def test_status_code(self):
        """Test non-zero codes set the status"""
        headers = Headers()
        headers.emit(HeaderLine("X-A", "1"))
        assert headers.status_code == 200
        headers.emit(HeaderLine("Location", "/x", True, 301))
        assert headers.status_code == 301

    def test_clear(self):
        """Test clearing resets the collector"""
        headers = Headers()
        headers.emit(HeaderLine("Location", "/x", True, 301))
        headers.clear()
        assert len(headers) == 0
        assert headers.status_code == 200
        assert headers.get("Location") is None
