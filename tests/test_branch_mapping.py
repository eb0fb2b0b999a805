import pytest

from cxone_reader.utils.branch_mapping import load_branch_mapping
from cxone_reader.utils.exceptions import ConfigurationError


class TestLoadBranchMapping:
    def test_rows_are_grouped_by_project(self, tmp_path):
        mapping_file = tmp_path / "branches.csv"
        mapping_file.write_text("Projects,Branches\nwebapp,main\napi, develop\nwebapp,release\nlegacy,\n")

        mapping = load_branch_mapping(str(mapping_file))

        assert mapping == {"webapp": ["main", "release"], "api": ["develop"], "legacy": [""]}

    def test_header_required(self, tmp_path):
        mapping_file = tmp_path / "branches.csv"
        mapping_file.write_text("Project,Branch\nwebapp,main\n")
        with pytest.raises(ConfigurationError):
            load_branch_mapping(str(mapping_file))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_branch_mapping(str(tmp_path / "nope.csv"))

    def test_empty_file(self, tmp_path):
        mapping_file = tmp_path / "branches.csv"
        mapping_file.write_text("")
        with pytest.raises(ConfigurationError):
            load_branch_mapping(str(mapping_file))
