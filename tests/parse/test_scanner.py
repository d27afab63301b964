from mcconfig.parse.scanner import LogicalLine, count_indent, scan


def test_blank_and_comment_lines_are_dropped():
    lines = scan("# header\n\nkey: 1\n   \n  # indented comment\nother: 2\n")

    assert [line.content for line in lines] == ["key: 1", "other: 2"]
    assert [line.number for line in lines] == [3, 6]


def test_indent_counts_leading_spaces_literally():
    lines = scan("a:\n   b: 1\n       c: 2\n")

    assert [line.indent for line in lines] == [0, 3, 7]
    assert count_indent("    x") == 4


def test_dash_space_marks_a_list_item():
    lines = scan("list:\n  - first\n  -  padded \n")

    item, padded = lines[1], lines[2]
    assert item == LogicalLine(indent=2, content="first", is_list_item=True, number=2)
    assert padded.is_list_item
    assert padded.content == "padded"


def test_dash_without_space_is_part_of_the_key():
    (line,) = scan("-dashKey: {}")

    assert not line.is_list_item
    assert line.content == "-dashKey: {}"


def test_comments_attach_to_the_next_line():
    lines = scan("# first\n#second\nkey: 1\nother: 2\n")

    assert lines[0].comments == (" first", "second")
    assert lines[1].comments == ()


def test_windows_line_endings_and_bom():
    lines = scan("\ufeffa: 1\r\nb: 2\r\n")

    assert [line.content for line in lines] == ["a: 1", "b: 2"]
    assert lines[0].indent == 0


def test_only_newline_characters_split_lines():
    lines = scan("motd: a\u2028b\nform: c\x0cd\x85e\r\nold: mac\rend: 1")

    assert [line.content for line in lines] == ["motd: a\u2028b", "form: c\x0cd\x85e", "old: mac", "end: 1"]
    assert [line.number for line in lines] == [1, 2, 3, 4]
