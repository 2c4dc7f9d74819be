"""Tests for loading the configuration document."""

import pytest

from tools.contributor_stats.config import ContributorConfig, load_config


class TestLoadConfig:
    """Test YAML configuration loading."""

    def test_no_path(self):
        """Test that no path gives the defaults."""
        assert load_config(None) == ContributorConfig()
        assert load_config("") == ContributorConfig()

    def test_missing_file(self, tmp_path):
        """Test that a missing file is fatal."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yml")

    def test_full_document(self, tmp_path):
        """Test reading every option."""
        path = tmp_path / "config.yml"
        path.write_text(
            "config:\n"
            "  exclusions: [dependabot, renovate]\n"
            "  keepExcludedUsers: true\n"
            "  extractEmailDomain: true\n"
            "  fieldsWhitelist:\n"
            "    - login\n"
            "    - email\n"
            "  excludeRepositories: [acme/legacy]\n"
        )

        config = load_config(path)

        assert config.exclusions == {"dependabot", "renovate"}
        assert config.keep_excluded_users is True
        assert config.extract_email_domain is True
        assert config.fields_whitelist == {"login", "email"}
        assert config.exclude_repositories == {"acme/legacy"}

    def test_partial_document(self, tmp_path):
        """Test that absent keys keep their defaults."""
        path = tmp_path / "config.yml"
        path.write_text("config:\n  exclusions: [bot]\n  unknownOption: 1\n")

        config = load_config(path)

        assert config.exclusions == {"bot"}
        assert config.keep_excluded_users is False
        assert config.fields_whitelist == set()

    def test_empty_file(self, tmp_path):
        """Test that an empty file gives the defaults."""
        path = tmp_path / "config.yml"
        path.write_text("")

        assert load_config(path) == ContributorConfig()

    def test_missing_section(self, tmp_path):
        """Test a document without a config section."""
        path = tmp_path / "config.yml"
        path.write_text("other: true\n")

        assert load_config(path) == ContributorConfig()

    def test_invalid_yaml(self, tmp_path):
        """Test that malformed YAML is reported."""
        path = tmp_path / "config.yml"
        path.write_text("config: [unclosed\n")

        with pytest.raises(ValueError):
            load_config(path)

    def test_section_not_mapping(self, tmp_path):
        """Test that a list section is rejected."""
        path = tmp_path / "config.yml"
        path.write_text("config:\n  - exclusions\n")

        with pytest.raises(ValueError):
            load_config(path)

    def test_single_string_list_rejected(self, tmp_path):
        """Test that a scalar where a list is expected is reported."""
        path = tmp_path / "config.yml"
        path.write_text("config:\n  exclusions: dependabot\n")

        with pytest.raises(ValueError, match="exclusions"):
            load_config(path)

    def test_list_of_non_strings_rejected(self, tmp_path):
        """Test that list entries must be names."""
        path = tmp_path / "config.yml"
        path.write_text("config:\n  fieldsWhitelist:\n    - login\n    - {name: true}\n")

        with pytest.raises(ValueError, match="fieldsWhitelist"):
            load_config(path)

    def test_quoted_flag_rejected(self, tmp_path):
        """Test that a quoted 'false' is not read as true."""
        path = tmp_path / "config.yml"
        path.write_text("config:\n  keepExcludedUsers: 'false'\n")

        with pytest.raises(ValueError, match="keepExcludedUsers"):
            load_config(path)

    def test_null_values_are_defaults(self, tmp_path):
        """Test that keys present without value keep the defaults."""
        path = tmp_path / "config.yml"
        path.write_text("config:\n  exclusions:\n  extractEmailDomain:\n")

        assert load_config(path) == ContributorConfig()
