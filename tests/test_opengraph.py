import pytest
from webpage_info.core.opengraph import MAX_MEDIA_ITEMS, Opengraph, OpengraphMedia


class TestOpengraph:
    """Unit tests for the OpenGraph accumulator"""

    def setup_method(self):
        """Set up test fixtures before each test method."""
        self.og = Opengraph()

    def test_basic_properties(self):
        """Test that scalar properties set their fields."""
        self.og.extend("type", "article")
        self.og.extend("title", "Test Article")
        self.og.extend("description", "A test description")
        self.og.extend("url", "https://example.org/article")
        self.og.extend("site_name", "Example")
        self.og.extend("locale", "en_US")

        assert self.og.og_type == "article"
        assert self.og.title == "Test Article"
        assert self.og.description == "A test description"
        assert self.og.url == "https://example.org/article"
        assert self.og.site_name == "Example"
        assert self.og.locale == "en_US"
        assert self.og.properties == {}

    def test_scalar_overwrite(self):
        """Test that a repeated scalar property keeps the last value."""
        self.og.extend("title", "First")
        self.og.extend("title", "Second")

        assert self.og.title == "Second"

    def test_locale_alternates(self):
        """Test that alternate locales accumulate in order."""
        self.og.extend("locale:alternate", "fr_FR")
        self.og.extend("locale:alternate", "de_DE")

        assert self.og.locale_alternates == ["fr_FR", "de_DE"]
        assert "locale:alternate" not in self.og.properties

    def test_image_with_properties(self):
        """Test that sub-properties attach to the image that precedes them."""
        self.og.extend("image", "http://example.org/image.png")
        self.og.extend("image:secure_url", "https://example.org/image.png")
        self.og.extend("image:type", "image/png")
        self.og.extend("image:width", "800")
        self.og.extend("image:height", "600")
        self.og.extend("image:alt", "Example image")

        assert self.og.images == [
            OpengraphMedia(
                url="http://example.org/image.png",
                secure_url="https://example.org/image.png",
                mime_type="image/png",
                width=800,
                height=600,
                alt="Example image",
            )
        ]

    def test_multiple_images(self):
        """Test that each og:image starts a new item."""
        self.og.extend("image", "http://example.org/image1.png")
        self.og.extend("image:width", "100")
        self.og.extend("image", "http://example.org/image2.png")
        self.og.extend("image:width", "200")

        assert [image.url for image in self.og.images] == [
            "http://example.org/image1.png",
            "http://example.org/image2.png",
        ]
        assert [image.width for image in self.og.images] == [100, 200]

    def test_image_url_starts_new_image(self):
        """Test that og:image:url also starts a new image."""
        self.og.extend("image:url", "http://example.org/a.png")
        self.og.extend("image:url", "http://example.org/b.png")

        assert len(self.og.images) == 2
        assert self.og.images[1].url == "http://example.org/b.png"

    def test_sub_property_without_media_is_ignored(self):
        """Test that a sub-property before any image is dropped."""
        self.og.extend("image:width", "100")

        assert self.og.images == []
        assert self.og.properties == {}

    @pytest.mark.parametrize("content", ["abc", "-1", "1.5", "", "4294967296", "12px"])
    def test_invalid_dimensions_are_absent(self, content):
        """Test that unparsable width/height leave the field unset."""
        self.og.extend("video", "http://example.org/movie.mp4")
        self.og.extend("video:width", content)
        self.og.extend("video:height", content)

        assert self.og.videos[0].width is None
        assert self.og.videos[0].height is None

    def test_dimension_upper_bound(self):
        """Test that the largest unsigned 32-bit value is accepted."""
        self.og.extend("image", "http://example.org/image.png")
        self.og.extend("image:width", "4294967295")
        self.og.extend("image:height", "+42")

        assert self.og.images[0].width == 4294967295
        assert self.og.images[0].height == 42

    def test_unknown_media_sub_property(self):
        """Test that unknown media sub-keys land in the media properties."""
        self.og.extend("audio", "http://example.org/sound.mp3")
        self.og.extend("audio:duration", "120")
        self.og.extend("audio:url:extra", "x")

        audio = self.og.audios[0]
        assert audio.properties == {"duration": "120", "url:extra": "x"}
        assert self.og.properties == {}

    def test_media_prefix_without_colon_is_ignored(self):
        """Test that og:images (no colon) does not touch the last image."""
        self.og.extend("image", "http://example.org/image.png")
        self.og.extend("images", "ignored")

        assert self.og.images[0].properties == {}
        assert "images" not in self.og.properties

    def test_collections_are_independent(self):
        """Test that sub-properties only reach the last item of their own type."""
        self.og.extend("image", "http://example.org/image.png")
        self.og.extend("video", "http://example.org/movie.mp4")
        self.og.extend("image:width", "300")
        self.og.extend("video:width", "640")

        assert self.og.images[0].width == 300
        assert self.og.videos[0].width == 640

    def test_unknown_properties(self):
        """Test that unrecognised names are stored verbatim."""
        self.og.extend("determiner", "the")
        self.og.extend("rich_attachment", "true")

        assert self.og.properties == {"determiner": "the", "rich_attachment": "true"}

    def test_media_limit(self):
        """Test that no more than MAX_MEDIA_ITEMS images are kept."""
        for i in range(MAX_MEDIA_ITEMS + 20):
            self.og.extend("image", f"http://example.org/{i}.png")
        self.og.extend("image:width", "10")

        assert len(self.og.images) == MAX_MEDIA_ITEMS
        assert self.og.images[-1].url == f"http://example.org/{MAX_MEDIA_ITEMS - 1}.png"
        # Sub-properties still go to the last kept image
        assert self.og.images[-1].width == 10

    def test_is_empty(self):
        """Test emptiness check."""
        assert self.og.is_empty()

        self.og.extend("site_name", "Example")
        assert self.og.is_empty()

        self.og.extend("title", "Test")
        assert not self.og.is_empty()
