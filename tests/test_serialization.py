from webpage_info import HtmlInfo, HttpInfo, Link, Opengraph, OpengraphMedia, SchemaOrg, WebpageInfo


class TestSerialization:
    """Unit tests for dictionary conversion of the data model"""

    def test_optional_fields_omitted(self):
        """Test that absent optional values do not appear in the output."""
        data = HtmlInfo().to_dict()

        assert data == {
            "text_content": "",
            "meta": {},
            "opengraph": {
                "locale_alternates": [],
                "images": [],
                "videos": [],
                "audios": [],
                "properties": {},
            },
            "schema_org": [],
            "links": [],
        }

    def test_link_rel_omitted_when_absent(self):
        """Test that rel only appears when set."""
        assert Link(url="https://example.com", text="Home").to_dict() == {
            "url": "https://example.com",
            "text": "Home",
        }
        assert Link(url="/a", text="A", rel="nofollow").to_dict()["rel"] == "nofollow"

    def test_opengraph_layout(self):
        """Test the OpenGraph layout, media included."""
        og = Opengraph()
        og.extend("type", "website")
        og.extend("image", "https://example.com/a.png")
        og.extend("image:width", "10")

        data = og.to_dict()

        assert data["og_type"] == "website"
        assert data["images"] == [{"url": "https://example.com/a.png", "width": 10, "properties": {}}]

    def test_schema_org_keys(self):
        """Test the JSON-LD item layout."""
        item = SchemaOrg(schema_type="Article", value={"@type": "Article", "headline": "Hi"})

        assert item.to_dict() == {
            "schema_type": "Article",
            "value": {"@type": "Article", "headline": "Hi"},
        }

    def test_webpage_info_round_trip(self):
        """Test that a full result survives to_dict and from_dict."""
        # Arrange
        og = Opengraph(title="OG", og_type="article", locale_alternates=["fr_FR"])
        og.images.append(OpengraphMedia(url="https://example.com/a.png", height=20, properties={"k": "v"}))
        info = WebpageInfo(
            http=HttpInfo(
                url="https://example.com/",
                status_code=200,
                headers=[("Content-Type", "text/html"), ("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")],
                content_type="text/html",
                redirect_count=1,
                body="<html></html>",
            ),
            html=HtmlInfo(
                title="Title",
                language="en",
                text_content="Hello",
                meta={"description": "", "charset": "utf-8"},
                opengraph=og,
                schema_org=[SchemaOrg(schema_type="Thing", value={"@type": "Thing"})],
                links=[Link(url="https://example.com/a", text="A", rel="next")],
            ),
        )

        # Act
        data = info.to_dict()
        restored = WebpageInfo.from_dict(data)

        # Assert
        assert data["http"]["headers"][1:] == [["Set-Cookie", "a=1"], ["Set-Cookie", "b=2"]]
        assert "description" not in data["html"]
        assert restored == info
