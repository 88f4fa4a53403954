"""Tests for the list_files tool."""

import json

from polaris.core.exceptions import StoreError
from polaris.tools.files import list_files


class TestListFiles:
    """Tests for list_files."""

    def test_folders_first_then_by_name(self, file_store, project_id):
        src = file_store.create_folder(project_id, None, "src")
        file_store.create_file(project_id, None, "README.md", "")
        file_store.create_folder(project_id, None, "assets")
        file_store.create_file(project_id, src, "app.js", "")

        items = json.loads(list_files(project_id, store=file_store))

        assert [(i["name"], i["type"]) for i in items] == [
            ("assets", "folder"),
            ("src", "folder"),
            ("app.js", "file"),
            ("README.md", "file"),
        ]
        app = next(i for i in items if i["name"] == "app.js")
        assert app["parentId"] == src
        assert next(i for i in items if i["name"] == "src")["parentId"] is None

    def test_empty_project(self, file_store, project_id):
        assert json.loads(list_files(project_id, store=file_store)) == []

    def test_store_error(self, recording_store):
        def broken(project_id):
            raise StoreError("database is locked")

        recording_store.list_project_files = broken

        result = list_files("p1", store=recording_store)

        assert result == "Error listing files: database is locked"
