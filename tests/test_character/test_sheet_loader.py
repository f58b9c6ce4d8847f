"""Tests for loading character sheets from files."""

import pytest
import yaml

from godsheet.character import load_sheet
from godsheet.errors import SheetLoadError
from godsheet.rules import AttributeKey


class TestLoadSheet:
    """Tests for load_sheet."""

    def test_plain_sheet(self, tmp_path, longsword):
        """A flat sheet loads directly."""
        path = tmp_path / "hero.yaml"
        path.write_text(
            yaml.safe_dump({"name": "Aurelia", "attributes": {"str": 14}, "items": [longsword]}),
            encoding="utf-8",
        )
        sheet = load_sheet(path)
        assert sheet.name == "Aurelia"
        assert sheet.attributes[AttributeKey.STR].value == 14
        assert sheet.get_item("sword1") is not None

    def test_host_export(self, tmp_path):
        """A host export nests fields under system beside name and items."""
        path = tmp_path / "export.json"
        path.write_text(
            '{"name": "Vess", "system": {"attributes": {"dex": {"value": 16}}, "useShield": true},'
            ' "items": [{"_id": "i1", "name": "Buckler", "type": "armour",'
            ' "system": {"baseArmour": 8}}]}',
            encoding="utf-8",
        )
        sheet = load_sheet(path)
        assert sheet.name == "Vess"
        assert sheet.use_shield is True
        assert sheet.attributes[AttributeKey.DEX].value == 16
        assert sheet.items[0].base_armour == 8

    def test_missing_file(self, tmp_path):
        """A missing file raises SheetLoadError."""
        with pytest.raises(SheetLoadError, match="File not found"):
            load_sheet(tmp_path / "ghost.yaml")

    def test_empty_file(self, tmp_path):
        """An empty file raises SheetLoadError."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(SheetLoadError, match="Empty"):
            load_sheet(path)

    def test_not_a_mapping(self, tmp_path):
        """A list is not a sheet."""
        path = tmp_path / "list.yaml"
        path.write_text("- one\n- two\n", encoding="utf-8")
        with pytest.raises(SheetLoadError, match="mapping"):
            load_sheet(path)

    def test_invalid_sheet(self, tmp_path):
        """Validation failures surface as SheetLoadError."""
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({"items": [{"name": "Nameless", "type": "weapon"}]}), encoding="utf-8")
        with pytest.raises(SheetLoadError, match="Invalid character sheet"):
            load_sheet(path)
