from bidcompare.keys import KEY_DELIMITER, build_key, collation_key


def test_build_key_ignores_case_and_surrounding_whitespace():
    assert build_key("Packing", "Museum Crate") == build_key(" packing ", "  MUSEUM crate")


def test_build_key_normalizes_underscores_and_lists():
    assert build_key("white_glove", ["Crate", "soft_wrap"]) == build_key("White Glove", "crate • soft wrap")


def test_build_key_keeps_category_and_description_apart():
    assert build_key("a", "b c") != build_key("a b", "c")
    assert build_key("Packing", "Crate").split(KEY_DELIMITER) == ["packing", "crate"]


def test_build_key_does_not_merge_near_duplicates():
    assert build_key("Packing", "Museum crate") != build_key("Packing", "Museum crates")


def test_collation_key_orders_accents_with_base_letters():
    words = ["Zebra", "éclair", "apple", "Eagle"]
    assert sorted(words, key=collation_key) == ["apple", "Eagle", "éclair", "Zebra"]
