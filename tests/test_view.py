import time

import pytest

from domviz.tree import build_tree
from domviz.view import CollapsibleState, DOMTreeProvider, TreeItem, format_tree


CONTENT = (
    '<div id="card" class="card shadow">'
    '<h1>Who am I</h1>'
    '<img id="avatar" src="me.png">'
    '</div>'
)


####
# Tree Item Tests
####

@pytest.mark.ci
def test_tree_item_label_and_description():
    card = TreeItem.from_node(build_tree(CONTENT)[0])
    assert card.label == '<div> #card'
    assert card.description == '.card'
    assert card.tooltip == '<div> #card-.card'
    assert card.collapsible_state == CollapsibleState.COLLAPSED

    heading, avatar = card.children
    assert heading.label == '<h1>'
    assert heading.description == 'h1'
    assert avatar.label == '<img> #avatar'
    assert avatar.collapsible_state == CollapsibleState.NONE


@pytest.mark.ci
def test_tree_item_helpers_use_only_the_node():
    card = build_tree(CONTENT)[0]
    assert TreeItem.label_for(card) == "<div> #card"
    assert TreeItem.description_for(card) == ".card"
    assert TreeItem.description_for(card.children[0]) == "h1"


@pytest.mark.ci
def test_tree_item_from_deeply_nested_node():
    depth = 3000
    item = TreeItem.from_node(build_tree("<div>" * depth)[0])
    levels = 1
    while item.children:
        assert len(item.children) == 1
        item = item.children[0]
        levels += 1
    assert levels == depth
    assert item.label == "<div>"
    assert item.collapsible_state == CollapsibleState.COLLAPSED


@pytest.mark.ci
def test_format_tree():
    assert format_tree(build_tree(CONTENT)) == (
        "<div> #card .card\n"
        "  <h1> h1\n"
        "  <img> #avatar img"
    )


####
# Provider Tests
####

@pytest.mark.ci
def test_provider_root_and_child_items():
    provider = DOMTreeProvider(source=lambda: CONTENT)
    roots = provider.get_children()
    assert [item.label for item in roots] == ['<div> #card']
    children = provider.get_children(roots[0])
    assert [item.label for item in children] == ['<h1>', '<img> #avatar']


@pytest.mark.ci
def test_provider_caches_until_refresh():
    texts = ['<p></p>', '<p></p><span></span>']
    calls = []

    def source() -> str:
        calls.append(1)
        return texts[len(calls) - 1]

    provider = DOMTreeProvider(source=source)
    assert len(provider.get_children()) == 1
    assert len(provider.get_children()) == 1
    assert len(calls) == 1

    provider.refresh()
    assert len(provider.get_children()) == 2
    assert len(calls) == 2


@pytest.mark.ci
def test_provider_refresh_notifies_listeners():
    provider = DOMTreeProvider(source=lambda: CONTENT)
    events: list[str] = []
    unsubscribe = provider.on_did_change(lambda: events.append("changed"))

    provider.refresh()
    assert events == ["changed"]

    unsubscribe()
    provider.refresh()
    assert events == ["changed"]
    unsubscribe()


@pytest.mark.ci
def test_provider_read_failure_gives_no_items():
    def source() -> str:
        raise FileNotFoundError("who_am_i.html")

    provider = DOMTreeProvider(source=source)
    assert provider.get_children() == []


@pytest.mark.ci
def test_provider_walks_unclosed_list_items():
    # Every unclosed <li> nests inside the one before it.
    count = 3000
    provider = DOMTreeProvider(source=lambda: "<ul>" + "<li>x" * count + "</ul>")
    roots = provider.get_children()
    assert [item.label for item in roots] == ['<ul>']

    item = roots[0]
    levels = 0
    while True:
        children = provider.get_children(item)
        if not children:
            break
        assert [child.label for child in children] == ['<li>']
        item = children[0]
        levels += 1
    assert levels == count


####
# Deep Documents
####

@pytest.mark.ci
def test_format_tree_deeply_nested():
    depth = 3000
    lines = format_tree(build_tree("<div>" * depth + "</div>" * depth)).splitlines()
    assert len(lines) == depth
    assert lines[0] == "<div> div"
    assert lines[-1] == " " * (2 * (depth - 1)) + "<div> div"


@pytest.mark.ci
def test_format_tree_of_many_unclosed_paragraphs_is_fast():
    started = time.perf_counter()
    text = format_tree(build_tree("<p>x" * 3000))
    assert time.perf_counter() - started < 5
    assert text.count("\n") == 2999
