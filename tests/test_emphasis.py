from mdforge.emphasis import BlockType, EmBlock, render_emphasis


def text(s):
    return EmBlock(text=s)


def marker(char, count):
    kind = BlockType.STAR if char == "*" else BlockType.UNDER
    return EmBlock(type=kind, count=count, char=char)


def test_single_emphasis():
    blocks = [text("a"), marker("*", 1), text("b"), marker("*", 1), text("c")]
    assert render_emphasis(blocks) == "a<em>b</em>c"


def test_double_emphasis():
    blocks = [marker("*", 2), text("b"), marker("*", 2)]
    assert render_emphasis(blocks) == "<strong>b</strong>"


def test_underscore_matches_like_star():
    stars = [text("x"), marker("*", 1), text("y"), marker("*", 1)]
    unders = [text("x"), marker("_", 1), text("y"), marker("_", 1)]
    assert render_emphasis(stars) == render_emphasis(unders)


def test_unmatched_marker_is_restored():
    blocks = [text("a"), marker("*", 1), text("b")]
    assert render_emphasis(blocks) == "a*b"


def test_mismatched_characters_do_not_pair():
    blocks = [marker("*", 1), text("b"), marker("_", 1)]
    assert render_emphasis(blocks) == "*b_"


def test_text_only_is_concatenated():
    blocks = [text("one "), text("two")]
    assert render_emphasis(blocks) == "one two"


def test_empty_list_gives_empty_string():
    assert render_emphasis([]) == ""


def test_input_blocks_are_not_modified():
    blocks = [marker("*", 1), text("b"), marker("*", 1)]
    render_emphasis(blocks)
    assert [b.count for b in blocks] == [1, 0, 1]
    assert [b.text for b in blocks] == ["", "b", ""]


def test_leftover_stars_are_kept_as_text():
    result = render_emphasis([marker("*", 2), text("b"), marker("*", 1)])
    assert result.count("*") == 1
    assert result.replace("<em>", "").replace("</em>", "").replace("*", "") == "b"