# ===============================================
# tests/test_extractor.py
# HTML feature extraction: order, sentinels, tolerance.
# ===============================================

from seo_agent.analysis.extractor import extract_features
from seo_agent.analysis.types import NO_META_DESCRIPTION, NO_TITLE

from conftest import GOOD_PAGE


def test_extracts_all_fields_in_document_order():
    f = extract_features(GOOD_PAGE)
    assert f.title == "Handmade Oak Kitchen Tables | Free UK Delivery Available"
    assert f.meta_description.startswith("Browse solid oak kitchen tables")
    assert f.headings == ("Oak Kitchen Tables", "Sizes", "Finishes", "Care")
    assert f.images == ("/img/table-1.jpg", "/img/table-2.jpg")
    assert f.links == ("/", "/chairs", "/contact", "https://example.org/reviews")


def test_missing_fields_yield_sentinels_and_empty_sequences():
    f = extract_features("<html><body><p>nothing here</p></body></html>")
    assert f.title == NO_TITLE
    assert f.meta_description == NO_META_DESCRIPTION
    assert f.headings == ()
    assert f.images == ()
    assert f.links == ()


def test_empty_input():
    f = extract_features("")
    assert f.title == NO_TITLE
    assert f.meta_description == NO_META_DESCRIPTION


def test_tag_and_attribute_matching_is_case_insensitive():
    html = (
        '<HTML><HEAD><TITLE>Upper Case Title</TITLE>'
        '<META CONTENT="Described in capitals" NAME="Description"></HEAD>'
        '<BODY><H2>Heading</H2><IMG SRC="a.png"><A HREF="/x">x</A></BODY></HTML>'
    )
    f = extract_features(html)
    assert f.title == "Upper Case Title"
    assert f.meta_description == "Described in capitals"
    assert f.headings == ("Heading",)
    assert f.images == ("a.png",)
    assert f.links == ("/x",)


def test_first_title_and_first_description_win():
    html = (
        "<title>First</title><title>Second</title>"
        '<meta name="keywords" content="a,b">'
        '<meta name="description" content="one"><meta name="description" content="two">'
    )
    f = extract_features(html)
    assert f.title == "First"
    assert f.meta_description == "one"


def test_heading_markup_is_stripped_and_duplicates_kept():
    html = "<h1>Hello <em>World</em></h1><h3>Repeat</h3><h3>Repeat</h3><h6><a href='/z'>Deep</a></h6>"
    f = extract_features(html)
    assert f.headings == ("Hello World", "Repeat", "Repeat", "Deep")
    assert f.links == ("/z",)


def test_relative_urls_kept_verbatim_and_attributeless_tags_skipped():
    html = '<img alt="no src"><img src="../pic.gif"><a name="anchor">a</a><a href="page.html?q=1">b</a>'
    f = extract_features(html)
    assert f.images == ("../pic.gif",)
    assert f.links == ("page.html?q=1",)


def test_malformed_markup_does_not_raise():
    html = '<html><head><title>Broken</head><body><h1>Open heading<div><img src="x.png" <a href=/y>'
    f = extract_features(html)
    assert isinstance(f.title, str)
    assert isinstance(f.headings, tuple)
    assert isinstance(f.images, tuple)


def test_blank_title_counts_as_missing():
    f = extract_features("<title>   </title><meta name='description' content=''>")
    assert f.title == NO_TITLE
    assert f.meta_description == NO_META_DESCRIPTION
