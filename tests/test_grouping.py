from bidcompare.grouping import project_rows
from bidcompare.models import ComparisonEntry, ComparisonRow


def _row(category, description, order):
    entry = ComparisonEntry(bid_id="a", present=True, amount=1.0)
    return ComparisonRow(
        key=f"{category}|{description}",
        category=category,
        description=description,
        order=order,
        entries=[entry],
    )


ROWS = [
    _row("Packing", "Crate", 1.0),
    _row("Packing", "Foam", 1.01),
    _row("Transport", "Truck", 2.0),
    _row("Packing", "Wrap", 3.0),
]


def test_flat_projection_tags_items_only():
    projected = project_rows(ROWS, group_by_category=False)
    assert [entry.kind for entry in projected] == ["item"] * 4
    assert [entry.row for entry in projected] == ROWS


def test_grouped_projection_inserts_markers_at_category_changes():
    projected = project_rows(ROWS, group_by_category=True)
    assert [(entry.kind, entry.category) for entry in projected] == [
        ("category", "Packing"),
        ("item", "Packing"),
        ("item", "Packing"),
        ("category", "Transport"),
        ("item", "Transport"),
        ("category", "Packing"),
        ("item", "Packing"),
    ]
    markers = [entry for entry in projected if entry.is_category]
    assert all(marker.row is None for marker in markers)
    assert markers[0].key == "category-Packing-1.0"


def test_grouping_preserves_item_count_and_order():
    projected = project_rows(ROWS, group_by_category=True)
    assert [entry.row for entry in projected if entry.kind == "item"] == ROWS


def test_projection_of_no_rows_is_empty():
    assert project_rows([], group_by_category=True) == []
