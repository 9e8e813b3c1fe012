import pytest
from pydantic import ValidationError

from app.core.exceptions import ShadeNotFoundError
from app.schemas.foundation import ShadeEntry, Undertone
from app.services.catalog_service import (
    SHADE_CATALOG,
    build_rgb_matrix,
    catalog_rgb_matrix,
    get_catalog,
    get_shade,
    list_shades,
    to_shade_out,
)

def test_catalog_integrity():
    catalog = get_catalog()
    assert catalog is SHADE_CATALOG
    assert len(catalog) == 34

    names = [shade.name for shade in catalog]
    assert len(names) == len(set(names)), "Duplicate shade names"

    for shade in catalog:
        assert all(0 <= channel <= 255 for channel in shade.rgb)

def test_catalog_family_sizes():
    assert len(list_shades(Undertone.NEUTRAL_COOL)) == 9
    assert len(list_shades(Undertone.NEUTRAL_WARM)) == 9
    assert len(list_shades(Undertone.COOL)) == 8
    assert len(list_shades(Undertone.WARM)) == 8
    assert list_shades() == list(SHADE_CATALOG)

def test_list_shades_keeps_catalog_order():
    warm = list_shades(Undertone.WARM)
    assert [shade.name for shade in warm] == ["W1", "W2", "W3", "W4", "W5", "W6", "W7", "W8"]

def test_get_shade_case_insensitive():
    assert get_shade("NC20").rgb == (220, 185, 155)
    assert get_shade("nc20") is get_shade("NC20")
    assert get_shade(" w1 ").undertone == Undertone.WARM

def test_get_shade_not_found():
    with pytest.raises(ShadeNotFoundError) as exc_info:
        get_shade("NC99")
    assert exc_info.value.status_code == 404
    assert "NC99" in exc_info.value.detail

def test_shade_entries_are_immutable():
    shade = SHADE_CATALOG[0]
    with pytest.raises(ValidationError):
        shade.name = "XX"

def test_shade_entry_rejects_out_of_range_channels():
    with pytest.raises(ValidationError):
        ShadeEntry(name="BAD", rgb=(256, 0, 0), undertone=Undertone.COOL)

def test_rgb_matrix_is_read_only():
    matrix = catalog_rgb_matrix()
    assert matrix.shape == (34, 3)
    assert catalog_rgb_matrix() is matrix
    assert tuple(matrix[0]) == SHADE_CATALOG[0].rgb

    with pytest.raises(ValueError):
        matrix[0, 0] = 1

def test_build_rgb_matrix_empty():
    assert build_rgb_matrix([]).shape == (0, 3)

def test_to_shade_out_adds_hex():
    out = to_shade_out(get_shade("NC15"))
    assert out.hex == "#EBC8AA"
    assert out.name == "NC15"
    assert out.undertone == Undertone.NEUTRAL_COOL
