import numpy as np
import pytest
from minisom import MiniSom

from umatrix_dashboard.codebook import (
    CodebookHeader, codebook_from_minisom, format_codebook,
    parse_header, parse_vector_grid
)
from umatrix_dashboard.errors import MalformedHeaderError, MalformedInputError


def test_parse_header_som_pak_style():
    header = parse_header("3 hexa 12 8 gaussian")
    assert header == CodebookHeader(vector_dim=3, topology="hexa", x_dim=12, y_dim=8)


def test_parse_header_keeps_second_token_uninterpreted():
    assert parse_header("2 0 2 2").topology == "0"


@pytest.mark.parametrize("line", ["2 0 2", "", "a 0 2 2", "2 0 x 2", "2 0 2 2.5", "0 hexa 2 2", "2 hexa -1 2"])
def test_parse_header_rejects_bad_fields(line):
    with pytest.raises(MalformedHeaderError):
        parse_header(line)


def test_parse_vector_grid_row_major():
    lines = ["1 2", "3 4", "5 6", "7 8", "9 10", "11 12"]
    grid = parse_vector_grid(lines, vector_dim=2, x_dim=3, y_dim=2)
    assert grid.shape == (2, 3, 2)
    assert grid[0, 2].tolist() == [5.0, 6.0]
    assert grid[1, 0].tolist() == [7.0, 8.0]


def test_parse_vector_grid_drops_excess_tokens_and_lines():
    lines = ["0.5 1.5 labelA", "2.5 3.5 extra 9", "not read"]
    grid = parse_vector_grid(lines, vector_dim=2, x_dim=2, y_dim=1)
    assert grid[0, 0].tolist() == [0.5, 1.5]
    assert grid[0, 1].tolist() == [2.5, 3.5]


def test_parse_vector_grid_too_few_lines():
    with pytest.raises(MalformedInputError):
        parse_vector_grid(["1 2", "3 4", "5 6"], vector_dim=2, x_dim=2, y_dim=2)


def test_parse_vector_grid_non_numeric_token_reports_line():
    with pytest.raises(MalformedInputError, match="line 3"):
        parse_vector_grid(["1 2", "3 oops"], vector_dim=2, x_dim=2, y_dim=1)


def test_parse_vector_grid_short_line():
    with pytest.raises(MalformedInputError):
        parse_vector_grid(["1 2", "3"], vector_dim=2, x_dim=2, y_dim=1)


def test_format_codebook_layout():
    text = format_codebook(np.arange(8, dtype=float).reshape(2, 2, 2), topology="rect")
    lines = text.split("\r\n")
    assert lines[0] == "2 rect 2 2"
    assert lines[1] == "0.0 1.0"
    assert lines[4] == "6.0 7.0"
    assert lines[-1] == ""


def test_format_codebook_requires_3d():
    with pytest.raises(ValueError):
        format_codebook(np.zeros((2, 2)))


def test_codebook_from_minisom_maps_units_to_columns():
    som = MiniSom(3, 2, input_len=4, random_seed=1)
    weights = som.get_weights()

    lines = codebook_from_minisom(som).split("\r\n")
    header = parse_header(lines[0])
    assert (header.vector_dim, header.x_dim, header.y_dim) == (4, 3, 2)

    grid = parse_vector_grid(lines[1:], header.vector_dim, header.x_dim, header.y_dim)
    for i in range(3):
        for j in range(2):
            np.testing.assert_allclose(grid[j, i], weights[i, j])


@pytest.mark.parametrize("token", ["nan", "inf", "-inf", "Infinity", "1_000"])
def test_parse_vector_grid_rejects_non_finite_and_grouped_numbers(token):
    with pytest.raises(MalformedInputError, match="line 2"):
        parse_vector_grid([f"{token} 0.0", "1.0 0.0"], vector_dim=2, x_dim=2, y_dim=1)


def test_parse_vector_grid_rejects_nan_in_any_position():
    lines = ["0.0 0.0", "1.0 0.0", "0.0 1.0", "1.0 nan"]
    with pytest.raises(MalformedInputError, match="line 5"):
        parse_vector_grid(lines, vector_dim=2, x_dim=2, y_dim=2)


def test_parse_vector_grid_ignores_non_finite_trailing_tokens():
    grid = parse_vector_grid(["1.0 2.0 nan"], vector_dim=2, x_dim=1, y_dim=1)
    assert grid[0, 0].tolist() == [1.0, 2.0]
