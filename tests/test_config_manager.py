"""
Tests for configuration loading
"""
import json

from sales_receipt.extraction.sale_fields.shared_utils.config_manager import ConfigManager


def test_packaged_config_loads():
    config_manager = ConfigManager()

    assert 'SUBTOTAL' in config_manager.get_section_markers()
    assert config_manager.get_limits()['max_quantity'] == 1000
    assert config_manager.get_llm_settings()['model'] == 'llama3.2'


def test_missing_file_falls_back_to_defaults(tmp_path):
    config_manager = ConfigManager(str(tmp_path / "missing.json"))

    assert config_manager.get_max_text_length() == 200000
    assert config_manager.get_field_caps()['customer_name'] == 100


def test_invalid_json_falls_back_to_defaults(tmp_path):
    config_file = tmp_path / "broken.json"
    config_file.write_text("{not json")

    assert ConfigManager(str(config_file)).get_max_item_line_length() == 300


def test_partial_file_keeps_other_defaults(tmp_path):
    config_file = tmp_path / "partial.json"
    config_file.write_text(json.dumps({'limits': {'max_quantity': 5}, 'max_text_length': 10}))

    config_manager = ConfigManager(str(config_file))

    assert config_manager.get_limits() == {'max_quantity': 5}
    assert config_manager.get_max_text_length() == 10
    assert 'total' in config_manager.get_item_exclusions()


def test_flat_exclusions_extend_item_exclusions():
    config_manager = ConfigManager()

    default = config_manager.get_item_exclusions()
    flat = config_manager.get_item_exclusions(flat=True)

    assert flat[:len(default)] == default
    assert r'\bcustomer\s*:' in flat


def test_config_path_from_environment(tmp_path, monkeypatch):
    config_file = tmp_path / "env.json"
    config_file.write_text(json.dumps({'max_item_line_length': 80}))
    monkeypatch.setenv('SALE_EXTRACTION_CONFIG', str(config_file))

    assert ConfigManager().get_max_item_line_length() == 80
