from bs4.builder import ParserRejectedMarkup

from endpoint_sift.core import extractor


def test_extract_tags_returns_start_tags_in_order():
    html = b"<html><body><div class='a b'><p>x</p><br></div></body></html>"
    assert extractor.extract_tags(html) == ("html", "body", "div", "p", "br")


def test_extract_tags_lowercases_names():
    assert extractor.extract_tags(b"<DIV><Span>hi</Span></DIV>") == ("div", "span")


def test_extract_tags_plain_text_has_no_tags():
    assert extractor.extract_tags(b"Not Found") == tuple()
    assert extractor.profile(b"Not Found").is_markup is False


def test_extract_tags_tolerates_truncated_markup():
    tags = extractor.extract_tags(b"<div><p>text</p><a href='x")
    assert tags[:2] == ("div", "p")


def test_extract_classes_keeps_raw_attribute_values():
    html = b'<div class="a  b"><span class="c">x</span><p>no class</p></div>'
    assert extractor.extract_classes(html) == "a  b c"


def test_profile_collects_tags_and_classes():
    result = extractor.profile(b'<ul class="menu"><li class="item">1</li></ul>')
    assert result.tags == ("ul", "li")
    assert result.classes == "menu item"
    assert result.is_markup is True


def test_profile_treats_rejected_markup_as_text(monkeypatch):
    def reject(_body):
        raise ParserRejectedMarkup("unparseable")

    monkeypatch.setattr(extractor, "extract_classes", reject)
    result = extractor.profile(b"<div>x</div>")
    assert result.tags == tuple()
    assert result.is_markup is False
