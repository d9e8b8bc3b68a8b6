from shapes import Shape, Variant, _rotate90, cell_count, generate_variants, shape_from_rows


def _keys(variants):
    return [v.key for v in variants]


def test_square_has_single_variant():
    shape = shape_from_rows(0, ["##.", "##.", "..."])
    variants = generate_variants(shape)
    assert _keys(variants) == ["##|##"]


def test_domino_has_two_variants_plain_first():
    shape = shape_from_rows(1, ["#", "#"])
    variants = generate_variants(shape)
    assert _keys(variants) == ["#|#", "##"]


def test_l_tromino_has_four_variants():
    shape = shape_from_rows(2, ["#.", "##"])
    assert len(generate_variants(shape)) == 4


def test_s_tetromino_reflection_adds_variants():
    shape = shape_from_rows(3, [".##", "##.", "..."])
    # 2 rotations, each mirrored
    assert len(generate_variants(shape)) == 4


def test_f_pentomino_has_all_eight_variants():
    shape = shape_from_rows(4, [".##", "##.", ".#."])
    variants = generate_variants(shape)
    assert len(variants) == 8
    assert len(set(_keys(variants))) == 8


def test_variants_are_trimmed_to_bounding_box():
    shape = shape_from_rows(5, ["...", ".#.", ".#."])
    for variant in generate_variants(shape):
        assert any(variant.rows[0])
        assert any(variant.rows[-1])
        assert any(row[0] for row in variant.rows)
        assert any(row[-1] for row in variant.rows)
    assert {(v.height, v.width) for v in generate_variants(shape)} == {(2, 1), (1, 2)}


def test_variants_never_exceed_eight_and_are_unique():
    templates = [
        ["###", "##.", "##."],
        ["###", "##.", ".##"],
        [".##", "###", "##."],
        ["##.", "###", "##."],
        ["###", "#..", "###"],
        ["###", ".#.", "###"],
        ["#..", "...", "..#"],
    ]
    for idx, rows in enumerate(templates):
        variants = generate_variants(shape_from_rows(idx, rows))
        assert 1 <= len(variants) <= 8
        assert len({v.rows for v in variants}) == len(variants)


def test_variants_keep_filled_cell_count():
    shape = shape_from_rows(6, ["###", "#..", "###"])
    for variant in generate_variants(shape):
        assert len(variant.offsets) == cell_count(shape) == 7


def test_rotation_is_clockwise():
    grid = ((True, False, False), (True, True, True))
    assert _rotate90(grid) == ((True, True), (True, False), (True, False))


def test_variant_order_tries_plain_then_mirror_per_rotation():
    shape = shape_from_rows(7, ["##", "#."])
    assert _keys(generate_variants(shape)) == ["##|#.", "##|.#", ".#|##", "#.|##"]


def test_empty_shape_yields_single_empty_variant():
    shape = shape_from_rows(8, ["...", "...", "..."])
    variants = generate_variants(shape)
    assert variants == [Variant(())]
    assert variants[0].height == 0
    assert variants[0].width == 0
    assert variants[0].offsets == ()
    assert cell_count(shape) == 0


def test_shape_dimensions():
    shape = Shape(9, ((True, False, True),))
    assert shape.height == 1
    assert shape.width == 3
    assert cell_count(shape) == 2
