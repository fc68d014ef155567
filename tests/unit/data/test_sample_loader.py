import pytest

from discrete_powerlaw.data.loader import load_sample, parse_csv_line, split_csv_line
from discrete_powerlaw.exceptions import DataSourceError, InsufficientDataError, SampleParseError


def test_parse_csv_line_strips_whitespace_and_newline() -> None:
    assert parse_csv_line("1, 2,3\n") == [1, 2, 3]
    assert parse_csv_line("4,5\r\n") == [4, 5]
    assert parse_csv_line("") == []


def test_parse_csv_line_accepts_integral_floats() -> None:
    assert parse_csv_line("2.0,3") == [2, 3]


@pytest.mark.parametrize("text", ["1,x,3", "1,2.5", "1,,2"])
def test_parse_csv_line_rejects_bad_tokens(text) -> None:
    with pytest.raises(SampleParseError):
        parse_csv_line(text)


def test_split_respects_nesting_when_asked() -> None:
    assert split_csv_line("(1,2),[3,4],5", ignore_nested=False) == ["(1,2)", "[3,4]", "5"]
    assert split_csv_line("(1,2),5") == ["(1", "2)", "5"]


def test_load_single_line_file(tmp_path) -> None:
    path = tmp_path / "sample.csv"
    path.write_text("1,1,2,3,5\n")
    assert load_sample(path).tolist() == [1, 1, 2, 3, 5]


def test_load_column_file_with_header(tmp_path) -> None:
    path = tmp_path / "counts.csv"
    path.write_text("degree\n3\n1\n\n4\n")
    assert load_sample(path).tolist() == [3, 1, 4]


def test_load_named_column(tmp_path) -> None:
    path = tmp_path / "table.csv"
    path.write_text("node,degree\na,3\nb,7\nc,\n")
    assert load_sample(path, column="degree").tolist() == [3, 7]
    with pytest.raises(DataSourceError):
        load_sample(path, column="weight")


def test_load_rejects_non_integers(tmp_path) -> None:
    path = tmp_path / "bad.csv"
    path.write_text("1\n2.5\n3\n")
    with pytest.raises(SampleParseError):
        load_sample(path)


def test_load_empty_and_missing(tmp_path) -> None:
    empty = tmp_path / "empty.csv"
    empty.write_text("")
    with pytest.raises(InsufficientDataError):
        load_sample(empty)
    with pytest.raises(DataSourceError):
        load_sample(tmp_path / "absent.csv")
