import pytest

from iterblur.kernel import GAUSSIAN_3X3, clamp, neighbor_cols, neighbor_rows, stencil_at, validate_kernel


def test_gaussian_weights_sum_to_one():
    assert sum(sum(row) for row in GAUSSIAN_3X3) == 1.0
    assert GAUSSIAN_3X3[1][1] == 0.25
    assert GAUSSIAN_3X3[0][0] == 1.0 / 16.0
    assert GAUSSIAN_3X3[0][1] == 1.0 / 8.0


def test_validate_kernel_rejects_bad_shapes():
    with pytest.raises(ValueError):
        validate_kernel([[1.0, 0.0], [0.0, 1.0]])
    with pytest.raises(ValueError):
        validate_kernel([[0.0] * 3, [0.0] * 3, [0.0] * 2])
    assert validate_kernel([[0, 0, 0], [0, 1, 0], [0, 0, 0]])[1][1] == 1.0


def test_clamp():
    assert clamp(-1, 0, 4) == 0
    assert clamp(5, 0, 4) == 4
    assert clamp(2, 0, 4) == 2


def test_neighbor_indices_at_edges():
    assert neighbor_rows(0, 5) == (0, 0, 1)
    assert neighbor_rows(4, 5) == (3, 4, 4)
    assert neighbor_cols(2, 5) == (1, 2, 3)
    assert neighbor_cols(0, 1) == (0, 0, 0)


def test_stencil_matches_written_sum_order():
    src = [[0.1, 0.2, 0.3], [0.4, 0.5, 0.6], [0.7, 0.8, 0.9]]
    expected = (
        src[0][0] / 16 + src[0][1] / 8 + src[0][2] / 16
        + src[1][0] / 8 + src[1][1] / 4 + src[1][2] / 8
        + src[2][0] / 16 + src[2][1] / 8 + src[2][2] / 16
    )
    assert stencil_at(src, 1, 1) == expected


def test_stencil_replicates_corner():
    src = [[1.0, 0.0], [0.0, 0.0]]
    # corner (0, 0): clamped taps hit src[0][0] four times: 1/16 + 1/8 + 1/8 + 1/4
    assert stencil_at(src, 0, 0) == 0.5625


def test_stencil_with_identity_kernel():
    identity = ((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 0.0))
    src = [[0.3, 0.7], [0.2, 0.9]]
    assert stencil_at(src, 1, 0, identity) == 0.2
