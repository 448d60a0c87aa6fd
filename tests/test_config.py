import pytest

from docmark.cli import load_config
from docmark.validation.config_validator import ConfigValidator


class TestConfigValidator:
    def setup_method(self):
        self.validator = ConfigValidator()

    def test_empty_config_is_valid(self):
        assert self.validator.validate({}).is_valid

    def test_known_settings(self):
        result = self.validator.validate({
            'csv_delimiter': ';',
            'numeric_threshold': 0.5,
            'numeric_sample_rows': 20,
            'bullet_marker': '*',
            'fix_punctuation': False,
        })
        assert result.is_valid
        assert result.errors == []

    def test_unknown_setting(self):
        result = self.validator.validate({'colour': 'blue'})
        assert not result.is_valid
        assert result.errors == ['Unknown setting: colour']

    def test_unknown_settings_can_be_allowed(self):
        assert ConfigValidator({'allow_unknown': True}).validate({'colour': 'blue'}).is_valid

    def test_wrong_types(self):
        result = self.validator.validate({'preview_length': 'long', 'numeric_sample_rows': True})
        assert not result.is_valid
        assert len(result.errors) == 2

    def test_ranges(self):
        for settings in ({'numeric_threshold': 1.5}, {'csv_delimiter': ';;'},
                         {'bullet_marker': '>'}, {'preview_length': 0},
                         {'frequency_threshold': -1}):
            assert not self.validator.validate(settings).is_valid, settings

    def test_not_a_mapping(self):
        result = self.validator.validate(['csv_delimiter'])
        assert not result.is_valid


class TestLoadConfig:
    def test_no_path(self):
        assert load_config(None) == {}

    def test_yaml_file(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text('csv_delimiter: ";"\nfrequency_threshold: 5\n', encoding='utf-8')
        assert load_config(path) == {'csv_delimiter': ';', 'frequency_threshold': 5}

    def test_empty_yaml_file(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text('', encoding='utf-8')
        assert load_config(path) == {}

    def test_invalid_yaml_settings(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text('numeric_threshold: 3\n', encoding='utf-8')
        with pytest.raises(ValueError):
            load_config(path)
