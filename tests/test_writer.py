# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for serialization and round trips."""

import logging

import pytest

from genro_qcfg import ConfigRegistry, ConfigTree, dumps, parse_qcfg, parse_qcfg_file


class TestDumps:
    """Tests for dumps()."""

    def test_single_block(self):
        """Test the text written for a single block."""
        cfg = ConfigTree('x')
        cfg.edit_entry('server', 'main', 'host', 'localhost')
        cfg.edit_entry('server', 'main', 'port', '8080')
        assert cfg.dumps() == '%block server\n{\n\tmain :: host=localhost; port=8080;\n}\n'

    def test_module_function_matches_method(self):
        """Test dumps() and Block.dumps() agree."""
        cfg = ConfigTree('x')
        cfg.edit_entry('a', 'r', 'c', 'v')
        assert dumps(cfg) == cfg.dumps()

    def test_empty_tree(self):
        """Test a tree without blocks dumps to nothing."""
        assert ConfigTree('x').dumps() == ''

    def test_root_rows_not_written(self):
        """Test rows of the root block are not written."""
        cfg = ConfigTree('x')
        cfg.add_row('top', {'a': '1'})
        cfg.edit_entry('b', 'r', 'c', 'v')
        text = cfg.dumps()
        assert 'top' not in text
        assert '%block b' in text

    def test_nested_blocks_indented(self):
        """Test nested blocks are written indented."""
        cfg = ConfigTree('x')
        outer = cfg.add_block('outer')
        outer.add_block('inner').add_row('r', {'a': '1'})
        assert cfg.dumps() == (
            '%block outer\n'
            '{\n'
            '\t%block inner\n'
            '\t{\n'
            '\t\tr :: a=1;\n'
            '\t}\n'
            '}\n'
        )

    def test_row_without_columns(self):
        """Test an empty row is written as 'name ::'."""
        cfg = ConfigTree('x')
        cfg.add_block('b').add_row('r')
        assert '\tr ::\n' in cfg.dumps()

    def test_blocks_separated_by_blank_line(self):
        """Test top-level blocks are separated by a blank line."""
        cfg = ConfigTree('x')
        cfg.edit_entry('a', 'r', 'c', '1')
        cfg.edit_entry('b', 'r', 'c', '2')
        assert '}\n\n%block b' in cfg.dumps()

    def test_unsafe_value_warns(self, caplog):
        """Test a value holding ';' is reported."""
        cfg = ConfigTree('x')
        cfg.edit_entry('b', 'r', 'c', 'one;two')
        with caplog.at_level(logging.WARNING, logger='genro_qcfg'):
            cfg.dumps()
        assert 'will not survive a round trip' in caplog.text

    def test_safe_values_do_not_warn(self, caplog):
        """Test ordinary values are written without warnings."""
        cfg = ConfigTree('x')
        cfg.edit_entry('b', 'r', 'url', 'http://host:80/a=b,c')
        with caplog.at_level(logging.WARNING, logger='genro_qcfg'):
            cfg.dumps()
        assert caplog.records == []

    @pytest.mark.parametrize('row_name', ['%include', '%block', '{x', '}x', '', '  ', ' r'])
    def test_row_name_read_as_syntax_warns(self, caplog, row_name):
        """Test row names the parser would read as a directive, a brace or nothing are reported."""
        cfg = ConfigTree('x')
        cfg.add_block('b').add_row(row_name, {'c': 'v'})
        with caplog.at_level(logging.WARNING, logger='genro_qcfg'):
            cfg.dumps()
        assert 'will not survive a round trip' in caplog.text

    def test_empty_column_name_warns(self, caplog):
        """Test an empty column key is reported."""
        cfg = ConfigTree('x')
        cfg.edit_entry('b', 'r', '', 'v')
        with caplog.at_level(logging.WARNING, logger='genro_qcfg'):
            cfg.dumps()
        assert "column name ''" in caplog.text

    def test_empty_block_name_warns(self, caplog):
        """Test an empty block name is reported."""
        cfg = ConfigTree('x')
        cfg.add_block('').add_row('r', {'c': 'v'})
        with caplog.at_level(logging.WARNING, logger='genro_qcfg'):
            cfg.dumps()
        assert "block name ''" in caplog.text

    def test_padded_value_warns(self, caplog):
        """Test a value with surrounding spaces is reported."""
        cfg = ConfigTree('x')
        cfg.edit_entry('b', 'r', 'c', ' v ')
        with caplog.at_level(logging.WARNING, logger='genro_qcfg'):
            cfg.dumps()
        assert 'will not survive a round trip' in caplog.text

    def test_empty_value_does_not_warn(self, caplog):
        """Test an empty value is written without warnings."""
        cfg = ConfigTree('x')
        cfg.edit_entry('b', 'r', 'c', '')
        with caplog.at_level(logging.WARNING, logger='genro_qcfg'):
            cfg.dumps()
        assert caplog.records == []


class TestWrite:
    """Tests for write() and round trips through files."""

    def test_round_trip_programmatic_tree(self, tmp_path):
        """Test a built tree survives write then load."""
        registry = ConfigRegistry()
        cfg = registry.new_empty('built')
        cfg.edit_entry('server', 'main', 'host', 'localhost')
        cfg.edit_entry('server', 'main', 'port', '8080')
        cfg.edit_entry('server', 'backup', 'host', 'spare')
        cfg.edit_entry('clients', 'web', 'timeout', '30')
        cfg.edit_entry('clients', 'web', 'empty', '')
        path = tmp_path / 'out.cfg'
        cfg.write(path)

        loaded = registry.load('reloaded', path)
        assert loaded.list_blocks() == cfg.list_blocks()
        for name in cfg.list_blocks():
            assert loaded.list_rows(name) == cfg.list_rows(name)
        assert loaded.as_dict() == cfg.as_dict()

    def test_round_trip_nested(self, tmp_path):
        """Test nested blocks survive write then parse."""
        cfg = parse_qcfg('%block a\n{\nr :: x=1;\n%block b\n{\ns :: y=2;\n}\n}\n')
        path = tmp_path / 'out.cfg'
        cfg.write(path)
        assert parse_qcfg_file(path).as_dict() == cfg.as_dict()

    def test_round_trip_sample(self, sample_cfg, tmp_path):
        """Test a loaded file keeps its content, includes flattened."""
        cfg = parse_qcfg_file(sample_cfg)
        path = tmp_path / 'copy.cfg'
        cfg.write(path)
        copy = parse_qcfg_file(path)
        assert copy.as_dict()['blocks'] == cfg.as_dict()['blocks']
        assert copy.get_str('block4', 'anotherrow', 'millis', 'BLANK') == '123456789'
        assert '%include' not in path.read_text()

    def test_write_after_edit(self, sample_cfg, tmp_path):
        """Test an edited tree writes its new values."""
        cfg = parse_qcfg_file(sample_cfg)
        cfg.edit_entry('thirdblock', 'anotherrow', 'end_time', '225000')
        path = tmp_path / 'edited.cfg'
        cfg.write(path)
        assert parse_qcfg_file(path).get_str('thirdblock', 'anotherrow', 'end_time', '') == '225000'

    def test_write_truncates(self, tmp_path):
        """Test write() replaces an existing file."""
        path = tmp_path / 'out.cfg'
        path.write_text('x' * 1000)
        cfg = ConfigTree('x')
        cfg.edit_entry('b', 'r', 'c', 'v')
        cfg.write(path)
        assert path.read_text() == cfg.dumps()

    def test_write_expands_home(self, tmp_path, monkeypatch):
        """Test write() expands '~/' in the path."""
        monkeypatch.setenv('HOME', str(tmp_path))
        cfg = ConfigTree('x')
        cfg.edit_entry('b', 'r', 'c', 'v')
        cfg.write('~/home.cfg')
        assert (tmp_path / 'home.cfg').read_text() == cfg.dumps()
