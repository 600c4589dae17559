import pytest

from bbapi.errorline import ErrorLineExtract, extract_error_line

SOURCE = "select 1\nfrom x\nwhere y"


def test_first_line():
    result = extract_error_line(SOURCE, 3)
    assert result == ErrorLineExtract(line_num=1, column_num=3, text="select 1")


def test_second_line_start():
    result = extract_error_line(SOURCE, len("select 1\n") + 1)
    assert result.line_num == 2
    assert result.column_num == 1
    assert result.text == "from x"


def test_last_character():
    result = extract_error_line(SOURCE, len(SOURCE))
    assert result.text == "where y"
    assert result.column_num == len("where y")


def test_newline_belongs_to_its_line():
    result = extract_error_line(SOURCE, len("select 1\n"))
    assert result.text == "select 1"
    assert result.column_num == len("select 1\n")


def test_position_beyond_source():
    with pytest.raises(ValueError, match="greater than source length"):
        extract_error_line("abc", 4)


def test_empty_source():
    result = extract_error_line("", 0)
    assert result == ErrorLineExtract(line_num=1, column_num=0, text="")


@pytest.mark.parametrize("position", range(1, len(SOURCE) + 1))
def test_text_has_no_newline_and_column_in_range(position):
    result = extract_error_line(SOURCE, position)
    assert "\n" not in result.text
    assert 1 <= result.column_num <= len(result.text) + 1
    assert result.text == SOURCE.split("\n")[result.line_num - 1]