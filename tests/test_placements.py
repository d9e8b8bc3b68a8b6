from placements import cell_coords, cell_index, generate_placements
from shapes import generate_variants, shape_from_rows


def test_vertical_domino_in_one_by_two_column():
    domino = shape_from_rows(0, ["#", "#"])
    placements = generate_placements(generate_variants(domino), width=1, height=2)
    assert placements == [(0, 1)]


def test_domino_in_two_by_two_grid():
    domino = shape_from_rows(0, ["#", "#"])
    placements = generate_placements(generate_variants(domino), width=2, height=2)
    # two vertical + two horizontal
    assert sorted(placements) == [(0, 1), (0, 2), (1, 3), (2, 3)]


def test_placement_count_matches_anchor_range():
    shape = shape_from_rows(1, ["###", "#..", "###"])
    variants = generate_variants(shape)
    width, height = 5, 4
    placements = generate_placements(variants, width, height)
    expected = sum(
        max(0, height - v.height + 1) * max(0, width - v.width + 1) for v in variants
    )
    assert len(placements) == expected


def test_placements_stay_in_grid_and_keep_cell_count():
    shape = shape_from_rows(2, [".##", "##.", ".#."])
    width, height = 4, 3
    for cells in generate_placements(generate_variants(shape), width, height):
        assert len(cells) == 5
        assert len(set(cells)) == 5
        assert all(0 <= c < width * height for c in cells)
        assert list(cells) == sorted(cells)


def test_placements_do_not_wrap_rows():
    shape = shape_from_rows(3, ["##"])
    placements = generate_placements(generate_variants(shape), width=3, height=2)
    assert (2, 3) not in placements
    for cells in placements:
        rows = {cell_coords(c, 3)[1] for c in cells}
        cols = {cell_coords(c, 3)[0] for c in cells}
        assert len(rows) == 1 or len(cols) == 1
    assert len(placements) == 2 * 2 + 3 * 1


def test_shape_larger_than_grid_has_no_placements():
    shape = shape_from_rows(4, ["###", "###", "###"])
    assert generate_placements(generate_variants(shape), width=2, height=5) == []


def test_empty_shape_has_no_placements():
    shape = shape_from_rows(5, ["...", "...", "..."])
    assert generate_placements(generate_variants(shape), width=3, height=3) == []


def test_cell_index_round_trip():
    assert cell_index(2, 1, 4) == 6
    assert cell_coords(6, 4) == (2, 1)
