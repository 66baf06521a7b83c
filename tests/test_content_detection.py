"""Tests for content type detection and URL helpers."""

import pytest


class TestMimeDetection:
    """Tests for upload classification by MIME type."""

    @pytest.mark.parametrize("mime_type,expected", [
        ("text/plain", "article"),
        ("application/pdf", "article"),
        ("application/vnd.openxmlformats-officedocument.wordprocessingml.document", "article"),
        ("video/mp4", "video"),
        ("audio/mpeg", "podcast"),
        ("image/png", "unknown"),
    ])
    def test_mime_types(self, mime_type, expected):
        """Each MIME family maps to one content type."""
        from app.core.content_detection import detect_content_type_from_mime

        assert detect_content_type_from_mime(mime_type).value == expected

    def test_filename_fallback(self):
        """Generic MIME types fall back to the file extension."""
        from app.core.content_detection import ContentType, detect_content_type_from_mime

        assert detect_content_type_from_mime("application/octet-stream", "talk.mp3") == ContentType.PODCAST
        assert detect_content_type_from_mime(None, "notes.txt") == ContentType.ARTICLE

    def test_is_pdf(self):
        from app.core.content_detection import is_pdf

        assert is_pdf("application/pdf", None)
        assert is_pdf(None, "Report.PDF")
        assert not is_pdf("text/plain", "notes.txt")


class TestUrlDetection:
    """Tests for URL classification."""

    @pytest.mark.parametrize("url,expected", [
        ("https://www.youtube.com/watch?v=abc123", "video"),
        ("https://youtu.be/abc123", "video"),
        ("https://vimeo.com/12345", "video"),
        ("https://cdn.example.com/clip.mp4", "video"),
        ("https://open.spotify.com/episode/xyz", "podcast"),
        ("https://example.com/show.mp3", "podcast"),
        ("https://medium.com/@someone/post", "article"),
        ("https://example.com/blog/post", "article"),
    ])
    def test_known_urls(self, url, expected):
        from app.core.content_detection import detect_content_type_from_url

        assert detect_content_type_from_url(url).value == expected

    def test_video_wins_over_podcast(self):
        """Video markers are checked first."""
        from app.core.content_detection import ContentType, detect_content_type_from_url

        url = "https://www.youtube.com/watch?v=abc&list=podcast"
        assert detect_content_type_from_url(url) == ContentType.VIDEO

    def test_unmatched_url_defaults_to_article(self):
        from app.core.content_detection import ContentType, detect_content_type_from_url

        assert detect_content_type_from_url("https://example.com/about") == ContentType.ARTICLE

    def test_unmatched_url_is_unknown_when_strict(self):
        from app.core.content_detection import ContentType, detect_content_type_from_url

        assert detect_content_type_from_url("https://example.com/about", strict=True) == ContentType.UNKNOWN
        assert detect_content_type_from_url("https://example.com/news/1", strict=True) == ContentType.ARTICLE


class TestNormalizeUrl:
    """Tests for user-entered URL normalization."""

    def test_adds_https_scheme(self):
        from app.core.content_detection import normalize_url

        assert normalize_url("  example.com/post ") == "https://example.com/post"

    def test_keeps_http_scheme(self):
        from app.core.content_detection import normalize_url

        assert normalize_url("http://example.com") == "http://example.com"

    def test_empty_url_rejected(self):
        from app.core.content_detection import normalize_url
        from app.core.exceptions import InvalidURLError

        with pytest.raises(InvalidURLError, match="Please enter a valid URL"):
            normalize_url("   ")

    def test_malformed_url_rejected(self):
        from app.core.content_detection import normalize_url
        from app.core.exceptions import InvalidURLError

        with pytest.raises(InvalidURLError, match="Invalid URL format"):
            normalize_url("https://")


class TestYouTube:
    """Tests for YouTube link handling."""

    def test_watch_url(self):
        from app.core.content_detection import extract_youtube_info

        info = extract_youtube_info("https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42")

        assert info.video_id == "dQw4w9WgXcQ"
        assert info.thumbnail_url == "https://img.youtube.com/vi/dQw4w9WgXcQ/hqdefault.jpg"

    def test_short_url(self):
        from app.core.content_detection import extract_youtube_info

        assert extract_youtube_info("https://youtu.be/dQw4w9WgXcQ?si=x").video_id == "dQw4w9WgXcQ"

    def test_non_youtube_url(self):
        from app.core.content_detection import extract_youtube_info

        info = extract_youtube_info("https://vimeo.com/1234")

        assert info.video_id == ""
        assert info.thumbnail_url == ""

    def test_default_titles(self):
        from app.core.content_detection import ContentType, default_title_for_url

        assert default_title_for_url("https://youtu.be/abc", ContentType.VIDEO) == "YouTube Video"
        assert default_title_for_url("https://vimeo.com/1", ContentType.VIDEO) == "Video from vimeo.com"
        assert default_title_for_url("https://anchor.fm/s", ContentType.PODCAST) == "Podcast from anchor.fm"
        assert default_title_for_url("https://medium.com/p", ContentType.ARTICLE) == "Article from medium.com"
