from foodmap.parsing.classifier import LineKind, classify_line, clean_category


class TestClassifyLine:
    def test_blank_line_is_noise(self):
        assert classify_line("") is LineKind.noise
        assert classify_line("   \t") is LineKind.noise

    def test_line_with_maps_link_is_item(self):
        line = "- [ ] Some Place https://maps.app.goo.gl/Xy12"
        assert classify_line(line) is LineKind.item

    def test_line_without_maps_link_is_category(self):
        assert classify_line("Dinner") is LineKind.category

    def test_instagram_only_line_is_category(self):
        assert classify_line("- Cafe (https://www.instagram.com/cafe)") is LineKind.category

    def test_empty_checkbox_without_link_is_category(self):
        assert classify_line("- [ ] Coffee") is LineKind.category


class TestCleanCategory:
    def test_strips_dash_and_checkbox(self):
        assert clean_category("- [ ] Brunch") == "Brunch"

    def test_strips_checked_box_and_asterisk(self):
        assert clean_category("* [x]   Late night ") == "Late night"

    def test_plain_text_unchanged(self):
        assert clean_category("Fine dining") == "Fine dining"

    def test_decorative_line_is_empty(self):
        assert clean_category("- [ ]") == ""
        assert clean_category("---") == ""
