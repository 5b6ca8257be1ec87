"""Tests for compose and group document loading."""

import pytest

from dcr.documents import load_compose_document, load_group_document
from dcr.errors import ComposeFileError, DcrError, GroupFileError


class TestLoadComposeDocument:
    """Test compose file decoding."""

    def test_returns_sorted_service_names(self, tmp_path):
        path = tmp_path / "compose.yaml"
        path.write_text(
            "services:\n  web:\n    image: nginx\n  api:\n    build: .\n  db:\n",
            encoding="utf-8",
        )

        assert load_compose_document(path) == ("api", "db", "web")

    def test_other_top_level_keys_are_ignored(self, tmp_path):
        path = tmp_path / "compose.yaml"
        path.write_text(
            "version: '3'\nvolumes:\n  data: {}\nservices:\n  web: {}\n",
            encoding="utf-8",
        )

        assert load_compose_document(path) == ("web",)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ComposeFileError, match="No such file"):
            load_compose_document(tmp_path / "missing.yml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "compose.yaml"
        path.write_text("services: [unclosed\n", encoding="utf-8")

        with pytest.raises(ComposeFileError, match="YAML error"):
            load_compose_document(path)

    def test_missing_services_key(self, tmp_path):
        path = tmp_path / "compose.yaml"
        path.write_text("volumes:\n  data: {}\n", encoding="utf-8")

        with pytest.raises(ComposeFileError, match="services"):
            load_compose_document(path)

    def test_services_not_a_mapping(self, tmp_path):
        path = tmp_path / "compose.yaml"
        path.write_text("services:\n  - web\n", encoding="utf-8")

        with pytest.raises(ComposeFileError):
            load_compose_document(path)

    def test_top_level_not_a_mapping(self, tmp_path):
        path = tmp_path / "compose.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")

        with pytest.raises(ComposeFileError, match="mapping"):
            load_compose_document(path)

    def test_error_is_app_error(self, tmp_path):
        with pytest.raises(DcrError):
            load_compose_document(tmp_path / "missing.yml")


class TestLoadGroupDocument:
    """Test group file decoding."""

    def test_returns_groups_in_declared_member_order(self, tmp_path):
        path = tmp_path / ".dcrgroups"
        path.write_text(
            "groups:\n  backend:\n    - worker\n    - api\n  data: [db]\n",
            encoding="utf-8",
        )

        assert load_group_document(path) == {
            "backend": ["worker", "api"],
            "data": ["db"],
        }

    def test_missing_file(self, tmp_path):
        with pytest.raises(GroupFileError):
            load_group_document(tmp_path / ".dcrgroups")

    def test_missing_groups_key(self, tmp_path):
        path = tmp_path / ".dcrgroups"
        path.write_text("services:\n  web: {}\n", encoding="utf-8")

        with pytest.raises(GroupFileError, match="groups"):
            load_group_document(path)

    def test_member_list_must_be_a_list(self, tmp_path):
        path = tmp_path / ".dcrgroups"
        path.write_text("groups:\n  backend: api\n", encoding="utf-8")

        with pytest.raises(GroupFileError):
            load_group_document(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / ".dcrgroups"
        path.write_text("", encoding="utf-8")

        with pytest.raises(GroupFileError, match="mapping"):
            load_group_document(path)
