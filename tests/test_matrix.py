import pytest

from robotnav.matrix import Matrix, format_matrix, reshape, sample_matrix


def test_sample_matrix_shape():
    mat = sample_matrix()
    assert (mat.rows, mat.cols) == (2, 3)


def test_sample_matrix_flatten():
    assert sample_matrix().flatten() == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]


def test_indexing_returns_row():
    assert sample_matrix()[1] == [4.0, 5.0, 6.0]


def test_flatten_then_reshape_round_trip():
    mat = sample_matrix()
    assert Matrix(reshape(mat.flatten(), mat.rows, mat.cols)) == mat


def test_reshape_other_shape_round_trip():
    data = [float(i) for i in range(12)]
    rows = reshape(data, 4, 3)
    assert len(rows) == 4
    assert all(len(row) == 3 for row in rows)
    assert Matrix(rows).flatten() == data


@pytest.mark.parametrize("size", [0, 5, 7])
def test_reshape_size_mismatch(size):
    with pytest.raises(ValueError, match="Size mismatch"):
        reshape([1.0] * size)


def test_format_matrix():
    assert format_matrix(sample_matrix()) == "1 2 3\n4 5 6"


def test_format_matrix_line_count():
    text = format_matrix(reshape([0.5] * 6))
    assert text.splitlines() == ["0.5 0.5 0.5", "0.5 0.5 0.5"]


def test_empty_matrix_has_no_columns():
    assert Matrix([]).cols == 0