"""
Tests for batteries.core.config - load-or-create and the empty fallback.
"""
import tomllib

import pytest

from batteries.core.config import (
    DEFAULT_DOCUMENT,
    Config,
    MappingRule,
    SuppressRule,
    load_config,
    parse_config,
)


SAMPLE = '''
[[device_mapping]]
serial = "S1"
name = "Main"
device_type = "Battery-Pack"

[[device_mapping]]
serial = "S2"
name = "Spare"
device_type = "Battery"

[[device_suppress]]
vendor = "Acme"

[[device_suppress]]
serial = "X9"
device_type = 4
'''


class TestLoadConfig:

    def test_absent_file_is_created_with_empty_rules(self, config_file):
        cfg = load_config(config_file)
        assert cfg == Config.empty()
        assert config_file.read_text() == DEFAULT_DOCUMENT
        # the written default must itself load back cleanly
        assert load_config(config_file) == Config.empty()

    def test_default_document_is_valid_toml(self):
        assert tomllib.loads(DEFAULT_DOCUMENT) == {'device_mapping': [], 'device_suppress': []}

    def test_loads_rules_in_stored_order(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text(SAMPLE)
        cfg = load_config(config_file)
        assert cfg.device_mapping == (
            MappingRule('S1', 'Main', 'Battery-Pack'),
            MappingRule('S2', 'Spare', 'Battery'),
        )
        assert cfg.device_suppress == (
            SuppressRule(vendor='Acme'),
            SuppressRule(serial='X9', device_type=4),
        )

    def test_unparsable_file_degrades_to_empty(self, config_file, caplog):
        config_file.parent.mkdir(parents=True)
        config_file.write_text('device_mapping = [ this is not toml')
        assert load_config(config_file) == Config.empty()
        assert 'Ignoring invalid config' in caplog.text
        # the broken file is left alone
        assert config_file.read_text() == 'device_mapping = [ this is not toml'

    def test_wrong_shape_degrades_to_empty(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text('[[device_mapping]]\nserial = "S1"\n')
        assert load_config(config_file) == Config.empty()

    def test_unwritable_location_degrades_to_empty(self, tmp_path):
        blocker = tmp_path / 'not-a-dir'
        blocker.write_text('')
        assert load_config(blocker / 'configs.toml') == Config.empty()

    def test_unreadable_path_degrades_to_empty(self, tmp_path):
        # a directory where the file should be
        path = tmp_path / 'configs.toml'
        path.mkdir()
        assert load_config(path) == Config.empty()


class TestParseConfig:

    def test_missing_table_is_rejected(self):
        with pytest.raises(KeyError):
            parse_config({'device_mapping': []})

    def test_mapping_requires_all_fields(self):
        with pytest.raises(KeyError):
            parse_config({'device_mapping': [{'serial': 'S1', 'name': 'x'}], 'device_suppress': []})

    @pytest.mark.parametrize('entry', [
        {'serial': 5},
        {'device_type': 'Battery'},
        {'device_type': True},
        {'device_type': -1},
    ])
    def test_suppress_field_types(self, entry):
        with pytest.raises(TypeError):
            parse_config({'device_mapping': [], 'device_suppress': [entry]})

    def test_unknown_keys_are_ignored(self):
        cfg = parse_config({
            'device_mapping': [],
            'device_suppress': [{'vendor': 'Acme', 'comment': 'noisy'}],
            'extra': 1,
        })
        assert cfg.device_suppress == (SuppressRule(vendor='Acme'),)
