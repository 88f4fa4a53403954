"""Tests for the action parser."""

from polaris.actions.parser import parse_actions


class TestParseActions:
    """Tests for parse_actions."""

    def test_end_to_end_example(self):
        """Test the single-file response from a typical chat."""
        text = 'Here you go:\n<create_file path="src/app.js">console.log(1)</create_file>\nDone.'

        actions = parse_actions(text)

        assert len(actions.creates) == 1
        assert actions.creates[0].path == "src/app.js"
        assert actions.creates[0].content == "console.log(1)"
        assert actions.updates == []

    def test_counts_and_order(self):
        """Test that every tag is found, each kind in source order."""
        text = """
        First I'll add a config.
        <create_file path="a.txt">A</create_file>
        Then update the readme:
        <update_file id="id-1">one</update_file>
        <create_file path="b/c.txt">C</create_file>
        <update_file id="id-2">two</update_file>
        <create_file path="d.txt">D</create_file>
        That's all.
        """

        actions = parse_actions(text)

        assert [a.path for a in actions.creates] == ["a.txt", "b/c.txt", "d.txt"]
        assert [a.content for a in actions.creates] == ["A", "C", "D"]
        assert [a.file_id for a in actions.updates] == ["id-1", "id-2"]
        assert [a.content for a in actions.updates] == ["one", "two"]
        assert len(actions) == 5

    def test_body_is_verbatim(self):
        """Test that multiline bodies keep their whitespace."""
        body = "\ndef main():\n    print('<hi>')\n\n"
        text = f'<create_file path="main.py">{body}</create_file>'

        actions = parse_actions(text)

        assert actions.creates[0].content == body

    def test_empty_body(self):
        """Test that an empty body produces an empty file action."""
        actions = parse_actions('<create_file path="empty.txt"></create_file>')

        assert len(actions.creates) == 1
        assert actions.creates[0].content == ""

    def test_first_closing_tag_ends_body(self):
        """Test non-greedy matching with two adjacent tags."""
        text = (
            '<create_file path="one.txt">1</create_file>'
            '<create_file path="two.txt">2</create_file>'
        )

        actions = parse_actions(text)

        assert [(a.path, a.content) for a in actions.creates] == [("one.txt", "1"), ("two.txt", "2")]

    def test_unterminated_tag_is_ignored(self):
        """Test that a tag without its closing marker yields nothing."""
        text = '<create_file path="x.txt">never closed\n<update_file id="abc">body'

        actions = parse_actions(text)

        assert actions.is_empty

    def test_malformed_attributes_are_ignored(self):
        """Test unquoted, empty and wrongly named attributes."""
        text = "\n".join([
            "<create_file path=x.txt>body</create_file>",
            '<create_file path="">body</create_file>',
            '<create_file name="x.txt">body</create_file>',
            '<create_filepath="x.txt">body</create_file>',
            '<update_file path="x.txt">body</update_file>',
        ])

        actions = parse_actions(text)

        assert actions.is_empty

    def test_whitespace_path_passed_through(self):
        """Test that a whitespace-only path is not judged by the parser."""
        actions = parse_actions('<create_file path="   ">x</create_file>')

        assert actions.creates[0].path == "   "

    def test_whitespace_between_tag_and_attribute(self):
        """Test that newlines and tabs may separate the tag name and attribute."""
        actions = parse_actions('<update_file\n\tid="abc">new</update_file>')

        assert actions.updates[0].file_id == "abc"

    def test_no_tags(self):
        """Test plain prose and empty input."""
        assert parse_actions("Just talking, no files.").is_empty
        assert parse_actions("").is_empty
        assert parse_actions(None).is_empty

    def test_create_folder_tag_is_not_an_action(self):
        """Test that the self-closing folder tag is not executed."""
        actions = parse_actions('<create_folder path="docs" />')

        assert actions.is_empty
