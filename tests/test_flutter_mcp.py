"""Tests for the MCP server tools, run against local documents."""
import asyncio
import json

import httpx
import pytest
from pydantic import ValidationError
from conftest import image_rect

from flutter_export.context import Context, ContextTarget
from flutter_export.proptype import ProjectProps
from flutter_mcp import (FlutterExportAllInput, FlutterExportInput, FlutterNodeInput, FlutterNodeSettingsInput,
                         ResponseFormat, _format_result, _handle_api_error, flutter_copy_node, flutter_export_all,
                         flutter_export_widget, flutter_get_node_settings)


@pytest.fixture
def home_path(tmp_path, home_doc):
    path = tmp_path / 'home.json'
    path.write_text(json.dumps(home_doc))
    return str(path)


@pytest.fixture(autouse=True)
def no_env_project(monkeypatch):
    monkeypatch.delenv('FLUTTER_PROJECT_PATH', raising=False)


class TestInputModels:

    def test_figma_url_is_reduced_to_key(self):
        params = FlutterNodeInput(file_key='https://figma.com/file/AbCdEf1234567/X', node_id='1:2')
        assert params.file_key == 'AbCdEf1234567'

    def test_node_id_dashes(self):
        assert FlutterNodeInput(document_path='a.json', node_id='12-34').node_id == '12:34'

    def test_exactly_one_source(self):
        with pytest.raises(ValidationError):
            FlutterNodeInput(node_id='1:2')
        with pytest.raises(ValidationError):
            FlutterNodeInput(file_key='AbCdEf1234567', document_path='a.json', node_id='1:2')

    def test_bad_url(self):
        with pytest.raises(ValidationError):
            FlutterExportAllInput(file_key='https://figma.com/proto/AbCdEf1234567')


class TestErrors:

    def test_http_status(self):
        request = httpx.Request('GET', 'https://api.figma.com/v1/files/x')
        error = httpx.HTTPStatusError('nope', request=request, response=httpx.Response(404, request=request))
        assert _handle_api_error(error) == "Error: File not found. Check the file key."

    def test_missing_document(self, tmp_path):
        params = FlutterNodeInput(document_path=str(tmp_path / 'nope.json'), node_id='1:2')
        assert asyncio.run(flutter_copy_node(params)).startswith("Error: Document not found: ")

    def test_missing_node(self, home_path):
        result = asyncio.run(flutter_copy_node(FlutterNodeInput(document_path=home_path, node_id='9:9')))
        assert result == "Error: Node '9:9' not found in document."


class TestCopyTool:

    def test_copy(self, home_path):
        result = asyncio.run(flutter_copy_node(FlutterNodeInput(document_path=home_path, node_id='1-2')))
        assert result.startswith("# Flutter code copied to clipboard\n\n```dart\nText(\n  title,\n")
        assert "## Diagnostics" not in result

    def test_alert(self, home_path):
        result = asyncio.run(flutter_copy_node(FlutterNodeInput(document_path=home_path, node_id='1:1')))
        assert result == "Error: The selected item cannot be copied."


class TestExportTools:

    def test_export_widget(self, tmp_path, home_path):
        params = FlutterExportInput(document_path=home_path, node_id='1:1', project_path=str(tmp_path))
        result = asyncio.run(flutter_export_widget(params))
        assert result.startswith("# Exported 'HomeScreen.dart' successfully")
        assert "- **Warning:** Could not find a pubspec.yaml file in the project root." in result
        assert (tmp_path / 'lib' / 'HomeScreen.dart').exists()

    def test_project_from_environment(self, tmp_path, home_path, monkeypatch):
        monkeypatch.setenv('FLUTTER_PROJECT_PATH', str(tmp_path))
        result = asyncio.run(flutter_export_all(FlutterExportAllInput(document_path=home_path)))
        assert result.startswith("# Exported 1 widget successfully")

    def test_no_project(self, home_path):
        result = asyncio.run(flutter_export_all(FlutterExportAllInput(document_path=home_path)))
        assert result == "Error: Set a Flutter project folder to export to."


class TestSettingsTool:

    def test_json(self, home_path):
        params = FlutterNodeSettingsInput(document_path=home_path, node_id='1:3', response_format=ResponseFormat.JSON)
        details = json.loads(asyncio.run(flutter_get_node_settings(params)))
        assert details['kind'] == 'shape'
        assert details['settings']['tapCallbackName'] == 'onPressed'
        assert details['decorators'] == ['OnTap']
        assert details['hasLayout'] is True
        assert details['parameters'] == {'tap': {'name': 'onPressed', 'type': 'VoidCallback?', 'value': None}}

    def test_markdown_for_widget(self, home_path):
        params = FlutterNodeSettingsInput(document_path=home_path, node_id='1:1')
        result = asyncio.run(flutter_get_node_settings(params))
        assert result.startswith("# Node: Home Screen\n**ID:** `1:1`\n**Type:** ARTBOARD (artboard)")
        assert "**Widget Name:** `HomeScreen`" in result
        assert "## Widget Parameters" in result
        assert "- **title:** {'type': 'String', 'value': \"'Hello'\"}" in result


class TestFormatResult:

    def test_lists_image_assets(self):
        ctx = Context(ContextTarget.FILES, ProjectProps(resolution_aware=True))
        ctx.result_message = "Exported 'Home.dart' successfully"
        ctx.add_image(image_rect('r', 'abcdef123456'))
        assert _format_result(ctx) == (
            "# Exported 'Home.dart' successfully\n\n"
            "## Image Assets\n\n"
            "- `assets/images/photo_abcdef.png`\n"
            "- `assets/images/2.0x/photo_abcdef.png`\n"
            "- `assets/images/3.0x/photo_abcdef.png`\n")
