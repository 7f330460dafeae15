from a11y_auditor.app.tree.html import load_html_snapshot
from a11y_auditor.app.tree.snapshot import SnapshotTreeReader


def test_loads_body_with_inline_style_and_box():
    snapshot = load_html_snapshot(
        """
        <html>
          <head><title>t</title><style>p { color: red }</style></head>
          <body>
            <p style="color: #333; background-color: #fff; font-size: 20px; font-weight: bold">Hello</p>
            <button style="width: 30px; height: 30px; outline: none">Go</button>
            <img src="a.png" width="10" height="12">
            <script>var x = 1;</script>
          </body>
        </html>
        """
    )

    assert snapshot.tag == "body"
    assert [c.tag for c in snapshot.children] == ["p", "button", "img"]

    p, button, img = snapshot.children
    assert p.text == "Hello"
    assert p.style.color == "#333"
    assert p.style.background_color == "#fff"
    assert p.style.font_size == "20px"
    assert p.style.font_weight == "bold"

    assert button.style.outline == "none"
    assert button.box.width == 30
    assert button.box.height == 30

    assert img.box.width == 10
    assert img.box.height == 12


def test_missing_dimensions_yield_no_box():
    snapshot = load_html_snapshot("<body><a href='#'>x</a></body>")
    assert snapshot.children[0].box is None


def test_fragment_is_wrapped_in_synthetic_body():
    snapshot = load_html_snapshot('<main><h1>Title</h1></main><input id="q">')

    assert snapshot.tag == "body"
    assert [c.tag for c in snapshot.children] == ["main", "input"]


def test_class_attribute_is_flattened():
    snapshot = load_html_snapshot('<body><div class="a b">x</div></body>')
    reader = SnapshotTreeReader(snapshot)

    assert reader.attributes(reader.resolve_scope(".b"))["class"] == "a b"


def test_comments_are_not_text():
    snapshot = load_html_snapshot("<body><p><!-- note -->Visible</p></body>")
    assert snapshot.children[0].text == "Visible"


def test_background_shorthand_colour_is_used():
    snapshot = load_html_snapshot(
        '<body><p style="color: #000; background: #ffffff">x</p></body>'
    )
    assert snapshot.children[0].style.background_color == "#ffffff"
