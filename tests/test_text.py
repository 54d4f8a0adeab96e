from processing.text import first_line, parse_json_loose, safe_domain, strip_html


def test_strip_html_removes_scripts_styles_comments():
    html = (
        "<html><head><style>p { color: red }</style>"
        "<script type='text/javascript'>var x = '<b>';</script></head>"
        "<body><!-- nav --><h1>Title</h1>\n\n<p>Body   text</p></body></html>"
    )
    assert strip_html(html) == "Title Body text"


def test_strip_html_empty():
    assert strip_html("") == ""
    assert strip_html(None) == ""


def test_safe_domain():
    assert safe_domain("https://www.thehindu.com/news/x") == "www.thehindu.com"
    assert safe_domain("not a url") == ""
    assert safe_domain(None) == ""


def test_first_line_truncates():
    assert first_line("Flood alert\nmore text") == "Flood alert"
    assert first_line("x" * 150) == "x" * 100
    assert first_line("") == ""


def test_parse_json_loose_variants():
    assert parse_json_loose('{"a": 1}') == {"a": 1}
    assert parse_json_loose('```json\n{"a": 2}\n```') == {"a": 2}
    assert parse_json_loose('Sure! Here it is: {"a": 3}') == {"a": 3}


def test_parse_json_loose_rejects_garbage():
    assert parse_json_loose("no json here") is None
    assert parse_json_loose("[1, 2, 3]") is None
    assert parse_json_loose("") is None
    assert parse_json_loose(None) is None
