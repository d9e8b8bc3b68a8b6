import pytest

from input_parser import ParseError, parse_puzzle, parse_regions, parse_shapes
from regions import Region

SAMPLE = """0:
###
##.
##.

1:
###
##.
.##

2:
.##
###
##.

3:
##.
###
##.

4:
###
#..
###

5:
###
.#.
###

4x4: 0 0 0 0 2 0
12x5: 1 0 1 0 2 2
12x5: 1 0 1 0 3 2
"""


def test_parse_sample_shapes():
    shapes, _ = parse_puzzle(SAMPLE)
    assert sorted(shapes) == [0, 1, 2, 3, 4, 5]
    assert shapes[4].cells == (
        (True, True, True),
        (True, False, False),
        (True, True, True),
    )


def test_parse_sample_regions():
    _, regions = parse_puzzle(SAMPLE)
    assert regions[0] == Region(4, 4, {0: 0, 1: 0, 2: 0, 3: 0, 4: 2, 5: 0})
    assert regions[1].width == 12
    assert regions[1].height == 5
    assert regions[2].required_counts[4] == 3
    assert len(regions) == 3


def test_counts_follow_ascending_shape_ids():
    text = "7:\n#..\n...\n...\n\n3:\n##.\n...\n...\n\n2x2: 1 2\n"
    shapes, regions = parse_puzzle(text)
    assert sorted(shapes) == [3, 7]
    assert regions[0].required_counts == {3: 1, 7: 2}


def test_shorter_count_list_only_names_listed_shapes():
    _, regions = parse_puzzle(SAMPLE.replace("4x4: 0 0 0 0 2 0", "4x4: 1"))
    assert regions[0].required_counts == {0: 1}


def test_parse_shapes_ignores_regions():
    assert sorted(parse_shapes(SAMPLE)) == [0, 1, 2, 3, 4, 5]


def test_parse_regions_alone():
    regions = parse_regions("3x2: 1 0\nnoise\n5x5: 2 2\n")
    assert [r.label() for r in regions] == ["3x2: 1 0", "5x5: 2 2"]


def test_parse_regions_checks_shape_count():
    with pytest.raises(ParseError):
        parse_regions("3x2: 1 0 4\n", shape_ids=[0, 1])


def test_too_many_counts_is_an_error():
    with pytest.raises(ParseError) as excinfo:
        parse_puzzle("0:\n###\n###\n###\n\n3x3: 1 1\n")
    assert excinfo.value.line_no == 6


def test_wrong_block_size_is_an_error():
    with pytest.raises(ParseError) as excinfo:
        parse_puzzle("0:\n###\n###\n\n3x3: 1\n")
    assert excinfo.value.line_no == 1
    assert "expected 3x3" in str(excinfo.value)


def test_any_rectangle_when_size_check_disabled():
    shapes, _ = parse_puzzle("0:\n##\n\n1:\n#\n#\n#\n", size=0)
    assert shapes[0].width == 2
    assert shapes[1].height == 3


def test_ragged_rows_are_an_error():
    with pytest.raises(ParseError):
        parse_puzzle("0:\n##\n#\n", size=0)


def test_stray_characters_are_an_error():
    with pytest.raises(ParseError) as excinfo:
        parse_puzzle("0:\n#x#\n###\n###\n")
    assert excinfo.value.line_no == 2


def test_header_without_rows_is_an_error():
    with pytest.raises(ParseError):
        parse_puzzle("0:\n\n1:\n###\n###\n###\n")


def test_duplicate_shape_id_is_an_error():
    block = "0:\n###\n###\n###\n\n"
    with pytest.raises(ParseError):
        parse_puzzle(block + block)


def test_bad_counts_are_an_error():
    with pytest.raises(ParseError):
        parse_puzzle("0:\n###\n###\n###\n\n3x3: 1 two\n")


def test_parse_regions_matches_puzzle_for_sparse_ids():
    text = "7:\n#..\n...\n...\n\n3:\n##.\n...\n...\n\n2x2: 1 2\n"
    shapes, regions = parse_puzzle(text)
    assert parse_regions(text, shape_ids=shapes.keys()) == regions
    assert regions[0].required_counts == {3: 1, 7: 2}
