"""Tests for the version / error correction level tables."""

import pytest

from qrenc.exceptions import InvalidArgumentError
from qrenc.qrcoder import get_num_data_bytes_and_num_ec_bytes_for_block_id
from qrenc.version import ErrorCorrectionLevel, Version


def test_dimensions():
    """Each version adds 4 modules per side."""
    assert Version.for_number(1).dimension == 21
    assert Version.for_number(7).dimension == 45
    assert Version.for_number(40).dimension == 177


def test_known_capacities():
    """Spot check codeword totals against the standard."""
    assert Version.for_number(1).total_codewords == 26
    assert Version.for_number(7).total_codewords == 196
    assert Version.for_number(40).total_codewords == 3706

    v1 = Version.for_number(1)
    assert [v1.num_data_codewords(level) for level in ErrorCorrectionLevel] == [19, 16, 13, 9]

    assert Version.for_number(7).num_data_codewords(ErrorCorrectionLevel.H) == 66
    assert Version.for_number(40).num_data_codewords(ErrorCorrectionLevel.L) == 2956
    assert Version.for_number(40).num_data_codewords(ErrorCorrectionLevel.H) == 1276


def test_block_groups():
    """Blocks come in one or two groups."""
    blocks = Version.for_number(5).ec_blocks_for_level(ErrorCorrectionLevel.Q)
    assert blocks.ec_codewords_per_block == 18
    assert blocks.groups == ((2, 15), (2, 16))
    assert blocks.num_blocks == 4
    assert blocks.total_ec_codewords == 72

    blocks = Version.for_number(7).ec_blocks_for_level(ErrorCorrectionLevel.H)
    assert blocks.groups == ((4, 13), (1, 14))
    assert blocks.ec_codewords_per_block == 26


@pytest.mark.parametrize("number", range(1, 41))
def test_codewords_add_up(number):
    """total = data + ec, summed over both block groups, for every level."""
    version = Version.for_number(number)

    for level in ErrorCorrectionLevel:
        blocks = version.ec_blocks_for_level(level)
        per_group = sum(count * (data + blocks.ec_codewords_per_block) for count, data in blocks.groups)
        assert per_group == version.total_codewords
        assert blocks.num_data_codewords == version.num_data_codewords(level)

        # the encoder's own block split agrees with the table
        num_data = version.num_data_codewords(level)
        sizes = [get_num_data_bytes_and_num_ec_bytes_for_block_id(
                    version.total_codewords, num_data, blocks.num_blocks, block_id)
                 for block_id in range(blocks.num_blocks)]
        assert sum(data for data, _ in sizes) == num_data
        assert all(ec == blocks.ec_codewords_per_block for _, ec in sizes)


def test_alignment_pattern_centers():
    """Alignment pattern center coordinates."""
    assert Version.for_number(1).alignment_pattern_centers == ()
    assert Version.for_number(2).alignment_pattern_centers == (6, 18)
    assert Version.for_number(7).alignment_pattern_centers == (6, 22, 38)
    assert Version.for_number(16).alignment_pattern_centers == (6, 26, 50, 74)
    assert Version.for_number(17).alignment_pattern_centers == (6, 30, 54, 78)
    assert Version.for_number(32).alignment_pattern_centers == (6, 34, 60, 86, 112, 138)
    assert Version.for_number(36).alignment_pattern_centers == (6, 24, 50, 76, 102, 128, 154)
    assert Version.for_number(40).alignment_pattern_centers == (6, 30, 58, 86, 114, 142, 170)


def test_version_range():
    """Only versions 1..40 exist."""
    with pytest.raises(InvalidArgumentError):
        Version.for_number(0)

    with pytest.raises(InvalidArgumentError):
        Version.for_number(41)

    assert Version.for_number(12) is Version.for_number(12)


def test_error_correction_level_parse():
    """Levels parse from names and carry the format information bits."""
    assert ErrorCorrectionLevel.parse("q") is ErrorCorrectionLevel.Q
    assert ErrorCorrectionLevel.parse(ErrorCorrectionLevel.H) is ErrorCorrectionLevel.H
    assert ErrorCorrectionLevel.L.bits == 1
    assert ErrorCorrectionLevel.M.bits == 0
    assert ErrorCorrectionLevel.for_bits(3) is ErrorCorrectionLevel.Q

    with pytest.raises(InvalidArgumentError):
        ErrorCorrectionLevel.parse("X")
