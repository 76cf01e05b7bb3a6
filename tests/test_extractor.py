"""
Tests for extractor.py — raw record → CanonicalSpecMap.

Covers:
  - general seeds (name, brand, id, price, rating) and only when non-empty
  - dimensions / weight sub-objects
  - source precedence: groups → flat specs → bullets → attributes, first writer wins
  - nested spec groups prefix their name onto children
  - "Key: Value" bullets vs numbered feature entries
  - domain enrichment for smartphones / laptops / tvs, fill-only
  - empty categories pruned
  - flatten_specs() and top_specs()
"""
from __future__ import annotations

from extractor import extract_specs, flatten_specs, top_specs
from records.base import RawProductRecord


def make_record(**kwargs) -> RawProductRecord:
    """Create a RawProductRecord with sensible defaults — override via kwargs."""
    defaults = dict(id="P1", name="Test Product")
    defaults.update(kwargs)
    return RawProductRecord(**defaults)


# ── Seeds ─────────────────────────────────────────────────────────────────────

class TestSeeds:
    def test_general_seeds(self):
        record = make_record(brand="Acme", asin="B0001", price=999.99, rating=4.5, review_count=120)
        general = extract_specs(record, "Gadgets")["general"]
        assert general["Product Name"] == "Test Product"
        assert general["Brand"] == "Acme"
        assert general["ASIN"] == "B0001"
        assert general["Current Price"] == "999.99 USD"
        assert general["Rating"] == "4.5/5 (120 reviews)"

    def test_id_seeded_when_no_asin(self):
        general = extract_specs(make_record(), "Gadgets")["general"]
        assert general["ID"] == "P1"
        assert "ASIN" not in general

    def test_empty_values_not_seeded(self):
        general = extract_specs(make_record(brand=None, price=None), "Gadgets")["general"]
        assert "Brand" not in general
        assert "Current Price" not in general

    def test_rating_review_count_falls_back_to_reviews(self):
        record = make_record(rating=4.0, top_reviews=[{"rating": 4}, {"rating": 5}])
        assert extract_specs(record, "Gadgets")["general"]["Rating"] == "4/5 (2 reviews)"

    def test_dimensions_and_weight(self):
        record = make_record(
            dimensions={"width": "10 cm", "height": "5 cm"},
            weight={"value": 1.2, "unit": "lb"},
        )
        physical = extract_specs(record, "Gadgets")["physical"]
        assert physical["Dimensions"] == "width: 10 cm, height: 5 cm"
        assert physical["Weight"] == "1.2 lb (544 g)"


# ── Precedence ────────────────────────────────────────────────────────────────

class TestPrecedence:
    def test_group_beats_flat_spec(self):
        record = make_record(
            specifications=[{"name": "Storage", "value": "1TB"}],
            specs={"Storage": "512GB"},
        )
        assert extract_specs(record, "Gadgets")["storage"]["Storage"] == "1024 GB"

    def test_flat_spec_beats_bullet(self):
        record = make_record(specs={"Color": "Black"}, features=["Color: Red"])
        assert extract_specs(record, "Gadgets")["physical"]["Color"] == "Black"

    def test_bullet_beats_attribute(self):
        record = make_record(
            features=["Color: Red"],
            summarization_attributes=[{"name": "Color", "value": "Blue"}],
        )
        assert extract_specs(record, "Gadgets")["physical"]["Color"] == "Red"

    def test_nested_group_prefixes_children(self):
        record = make_record(specifications=[
            {"name": "Battery", "specifications": [
                {"name": "Capacity", "value": "5000 mAh"},
                {"name": "Battery Type", "value": "Li-ion"},
            ]},
        ])
        battery = extract_specs(record, "Gadgets")["battery"]
        assert battery["Battery Capacity"] == "5000 mAh"
        assert battery["Battery Type"] == "Li-ion"

    def test_malformed_group_skipped(self):
        record = make_record(specifications=[{"name": "Broken"}, {"value": "orphan"}])
        specs = extract_specs(record, "Gadgets")
        assert set(specs) == {"general"}


# ── Bullets ───────────────────────────────────────────────────────────────────

class TestBullets:
    def test_colon_bullet_becomes_spec(self):
        record = make_record(features=["Screen Size: 6.1 inches"])
        assert extract_specs(record, "Gadgets")["display"]["Screen Size"] == "6.1 inches"

    def test_plain_bullet_numbered_by_position(self):
        record = make_record(features=["RAM: 8", "Fast charging support"])
        features = extract_specs(record, "Gadgets")["features"]
        assert features == {"Feature 2": "Fast charging support"}

    def test_only_first_colon_splits(self):
        record = make_record(features=["Aspect Ratio: 16:9"])
        assert extract_specs(record, "Gadgets")["other"]["Aspect Ratio"] == "16:9"

    def test_values_normalized(self):
        record = make_record(features=["RAM: 16"])
        assert extract_specs(record, "Gadgets")["performance"]["RAM"] == "16 GB"


# ── Enrichment ────────────────────────────────────────────────────────────────

class TestEnrichment:
    def test_smartphone_camera_battery_5g(self):
        record = make_record(description="Triple camera: 50MP wide, 12MP ultra-wide. 4500 mAh battery. 5G ready.")
        specs = extract_specs(record, "Smartphones")
        assert specs["camera"]["Main Camera"] == "50 MP"
        assert specs["camera"]["Secondary Camera"] == "12 MP"
        assert specs["battery"]["Battery Capacity"] == "4500 mAh"
        assert specs["connectivity"]["5G Support"] == "Yes"

    def test_enrichment_never_overwrites(self):
        record = make_record(
            specifications=[{"name": "Battery Capacity", "value": "5000 mAh"}],
            description="Comes with a 4000 mAh battery.",
        )
        assert extract_specs(record, "Phones")["battery"]["Battery Capacity"] == "5000 mAh"

    def test_laptop_gpu_storage_touch(self):
        record = make_record(features=["NVIDIA GeForce RTX 4060 graphics", "1TB SSD", "Touchscreen display"])
        specs = extract_specs(record, "Laptops")
        assert specs["performance"]["Graphics"] == "NVIDIA GeForce RTX 4060"
        assert specs["storage"]["Storage Type"] == "SSD"
        assert specs["display"]["Touchscreen"] == "Yes"

    def test_tv_hdr_smart_refresh(self):
        record = make_record(description="A Smart TV with HDR10 and a 120Hz panel.")
        specs = extract_specs(record, "Televisions")
        assert specs["display"]["HDR Support"] == "HDR10"
        assert specs["display"]["Refresh Rate"] == "120 Hz"
        assert specs["features"]["Smart TV"] == "Yes"

    def test_other_domain_not_enriched(self):
        record = make_record(description="108MP camera and 5G")
        specs = extract_specs(record, "Blenders")
        assert "camera" not in specs
        assert "connectivity" not in specs


# ── Pruning ───────────────────────────────────────────────────────────────────

class TestPruning:
    def test_no_empty_categories(self):
        record = make_record(specs={"Blank": "   "}, features=[])
        specs = extract_specs(record, "Gadgets")
        assert all(entries for entries in specs.values())
        assert "other" not in specs


# ── Utilities ─────────────────────────────────────────────────────────────────

class TestUtilities:
    def test_flatten(self):
        flat = flatten_specs({"display": {"Resolution": "4K"}, "storage": {"Storage": "1024 GB"}})
        assert flat == {"Display: Resolution": "4K", "Storage: Storage": "1024 GB"}

    def test_top_specs_follow_domain_priority(self):
        spec_map = {
            "general": {"Product Name": "X"},
            "storage": {"Storage": "256 GB"},
            "display": {"Screen Size": "6.1 inches"},
            "performance": {"RAM": "8 GB"},
        }
        assert list(top_specs(spec_map, "smartphones", 2)) == ["Screen Size", "RAM"]

    def test_top_specs_skip_general_and_fill_from_rest(self):
        spec_map = {"general": {"Brand": "Acme"}, "other": {"Finish": "Matte"}}
        assert top_specs(spec_map, "blenders", 5) == {"Finish": "Matte"}
