"""Unit tests for the in-memory document tree and its builders."""

from __future__ import annotations

from framegate.dom.html import build_from_snapshot, parse_html, parse_html_file
from framegate.dom.tree import Document, Element


# ===================================================================
# Element model
# ===================================================================


class TestElement:
    """Attributes, control state and navigation."""

    def test_tag_is_lowercased(self) -> None:
        assert Element("INPUT").tag == "input"

    def test_input_type_defaults(self) -> None:
        assert Element("input").input_type == "text"
        assert Element("button").input_type == "submit"
        assert Element("textarea").input_type == "textarea"
        assert Element("input", {"type": " HIDDEN "}).input_type == "hidden"

    def test_value_falls_back_to_attribute(self) -> None:
        el = Element("input", {"value": "ABC-1-DEF"})
        assert el.value == "ABC-1-DEF"
        el.value = "typed"
        assert el.value == "typed"
        assert el.get("value") == "ABC-1-DEF"

    def test_textarea_value_is_text_content(self) -> None:
        assert Element("textarea", text="hello").value == "hello"

    def test_disabled_from_attribute(self) -> None:
        assert Element("button", {"disabled": ""}).disabled is True
        assert Element("button").disabled is False

    def test_describe(self) -> None:
        assert Element("input", {"id": "code"}).describe() == "input#code"
        assert Element("input", {"name": "code"}).describe() == "input#code"
        assert Element("button").describe() == "button#(no id)"

    def test_siblings_and_parent(self) -> None:
        parent = Element("div")
        a = parent.append_child(Element("input", {"id": "a"}))
        b = parent.append_child(Element("input", {"id": "b"}))
        assert b.previous_element_sibling is a
        assert a.previous_element_sibling is None
        assert a.next_element_sibling is b
        assert b.parent_element is parent

    def test_insert_before_and_remove(self) -> None:
        parent = Element("div")
        b = parent.append_child(Element("span", {"id": "b"}))
        a = parent.insert_before(Element("span", {"id": "a"}), b)
        assert [c.id for c in parent.children] == ["a", "b"]
        a.remove()
        assert a.parent is None
        assert parent.children == [b]

    def test_append_moves_between_parents(self) -> None:
        first, second = Element("div"), Element("div")
        child = first.append_child(Element("span"))
        second.append_child(child)
        assert first.children == []
        assert child.parent is second

    def test_iter_descendants_preorder(self) -> None:
        root = Element("div", {"id": "r"})
        a = root.append_child(Element("div", {"id": "a"}))
        a.append_child(Element("span", {"id": "a1"}))
        root.append_child(Element("div", {"id": "b"}))
        assert [el.id for el in root.iter_descendants()] == ["a", "a1", "b"]
        assert [el.id for el in root.iter()] == ["r", "a", "a1", "b"]

    def test_deep_tree_walk_does_not_recurse(self) -> None:
        root = Element("div")
        node = root
        for _ in range(5000):
            node = node.append_child(Element("div"))
        assert sum(1 for _ in root.iter_descendants()) == 5000


class TestEvents:
    """Synchronous event dispatch."""

    def test_type_text_fires_input(self) -> None:
        el = Element("input")
        seen: list[str] = []
        el.add_event_listener("input", lambda e: seen.append(e.target.value))
        el.type_text("abc")
        assert seen == ["abc"]

    def test_commit_fires_change(self) -> None:
        el = Element("input")
        seen: list[str] = []
        el.add_event_listener("change", lambda e: seen.append(e.type))
        el.commit()
        assert seen == ["change"]

    def test_remove_listener_and_count(self) -> None:
        el = Element("input")

        def listener(event) -> None:
            pass

        el.add_event_listener("input", listener)
        el.add_event_listener("change", listener)
        assert el.listener_count() == 2
        assert el.listener_count("input") == 1
        el.remove_event_listener("input", listener)
        assert el.listener_count("input") == 0
        el.remove_event_listener("input", listener)  # no-op


# ===================================================================
# Document + builders
# ===================================================================


class TestDocument:
    def test_default_document_has_body(self) -> None:
        doc = Document()
        assert doc.body is not None
        assert doc.body.tag == "body"

    def test_lookup_helpers(self) -> None:
        doc = parse_html('<html><body><iframe id="a"></iframe><div><iframe id="b"></iframe></div></body></html>')
        assert doc.get_element_by_id("b").tag == "iframe"
        assert [f.id for f in doc.get_elements_by_tag_name("IFRAME")] == ["a", "b"]
        assert doc.get_element_by_id("missing") is None

    def test_document_positions_follow_page_order(self) -> None:
        doc = parse_html('<body><p id="x"></p><p id="y"></p></body>')
        positions = doc.document_positions()
        x, y = doc.get_element_by_id("x"), doc.get_element_by_id("y")
        assert positions[id(x)] < positions[id(y)]


class TestParseHtml:
    def test_comments_are_skipped(self) -> None:
        doc = parse_html('<body><input id="a"><!-- note --><iframe id="w"></iframe></body>')
        iframe = doc.get_element_by_id("w")
        assert iframe.previous_element_sibling.id == "a"

    def test_attributes_and_text(self) -> None:
        doc = parse_html('<body><textarea id="t" name="msg">hi</textarea></body>')
        textarea = doc.get_element_by_id("t")
        assert textarea.name == "msg"
        assert textarea.value == "hi"

    def test_parse_file_records_url(self, signup_page) -> None:
        doc = parse_html_file(signup_page)
        assert doc.url.startswith("file://")
        assert doc.get_element_by_id("widget") is not None


class TestSnapshot:
    def test_build_from_snapshot(self) -> None:
        payload = {
            "tag": "html",
            "attrs": {},
            "children": [
                {
                    "tag": "body",
                    "attrs": {},
                    "children": [
                        {"tag": "input", "attrs": {"id": "code"}, "value": "ABC-1-DEF", "children": []},
                        {"tag": "button", "attrs": {"id": "go"}, "disabled": True, "children": []},
                        {"tag": "iframe", "attrs": {"id": "w"}, "frame": 0, "children": []},
                    ],
                }
            ],
        }
        doc = build_from_snapshot(payload, url="https://host.example/")
        assert doc.url == "https://host.example/"
        assert doc.get_element_by_id("code").value == "ABC-1-DEF"
        assert doc.get_element_by_id("go").disabled is True
        assert doc.get_element_by_id("w").frame_ordinal == 0
        assert [c.tag for c in doc.body.children] == ["input", "button", "iframe"]
