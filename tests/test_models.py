"""Unit tests for the manifest and contents API models (wego.models)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from wego.errors import DecodeError
from wego.models import (
    EntryType,
    ManifestEntry,
    ProjectEntry,
    RemoteContent,
    RemoteDirEntry,
    RemoteManifest,
    TemplateKind,
)


class TestTemplateKind:
    @pytest.mark.unit
    def test_remote_segments(self):
        assert TemplateKind.PAGE.remote_segment == "pages"
        assert TemplateKind.COMPONENT.remote_segment == "components"
        assert TemplateKind.PROJECT.remote_segment == "projects"

    @pytest.mark.unit
    def test_from_value(self):
        assert TemplateKind("component") is TemplateKind.COMPONENT


class TestManifestEntry:
    @pytest.mark.unit
    def test_defaults(self):
        entry = ManifestEntry(name="Button")
        assert entry.description == ""
        assert entry.dependencies == []

    @pytest.mark.unit
    def test_null_dependencies_become_empty(self):
        entry = ManifestEntry.model_validate({"name": "A", "description": None, "dependencies": None})
        assert entry.dependencies == []
        assert entry.description == ""

    @pytest.mark.unit
    def test_frozen(self):
        entry = ManifestEntry(name="A", dependencies=["B"])
        with pytest.raises(ValidationError):
            entry.name = "C"

    @pytest.mark.unit
    def test_name_required(self):
        with pytest.raises(ValidationError):
            ManifestEntry.model_validate({"description": "no name"})


class TestRemoteManifest:
    @pytest.mark.unit
    def test_from_yaml(self, sample_manifest_text):
        manifest = RemoteManifest.from_yaml(sample_manifest_text)
        assert [c.name for c in manifest.components] == ["Button", "Icon", "Modal", "Portal"]
        assert [p.name for p in manifest.pages] == ["Login", "About"]
        assert manifest.projects == [ProjectEntry(name="Starter", description="Vite + React starter")]
        assert manifest.find(TemplateKind.PAGE, "About").dependencies == []

    @pytest.mark.unit
    def test_empty_document(self):
        manifest = RemoteManifest.from_yaml("")
        assert manifest.components == []
        assert manifest.pages == []
        assert manifest.projects == []

    @pytest.mark.unit
    def test_null_sections(self):
        manifest = RemoteManifest.from_yaml("components:\npages:\nprojects:\n")
        assert manifest.entries_for(TemplateKind.COMPONENT) == []

    @pytest.mark.unit
    def test_invalid_yaml_raises_decode_error(self):
        with pytest.raises(DecodeError):
            RemoteManifest.from_yaml("components: [unclosed")

    @pytest.mark.unit
    def test_non_mapping_raises_decode_error(self):
        with pytest.raises(DecodeError):
            RemoteManifest.from_yaml("- just\n- a list\n")

    @pytest.mark.unit
    def test_wrong_shape_raises_decode_error(self):
        with pytest.raises(DecodeError):
            RemoteManifest.from_yaml("components:\n  - description: missing name\n")

    @pytest.mark.unit
    def test_find_missing_returns_none(self, sample_manifest_text):
        manifest = RemoteManifest.from_yaml(sample_manifest_text)
        assert manifest.find(TemplateKind.COMPONENT, "Nope") is None
        assert manifest.find(TemplateKind.PROJECT, "Starter").name == "Starter"

    @pytest.mark.unit
    def test_describe_components(self, sample_manifest_text):
        manifest = RemoteManifest.from_yaml(sample_manifest_text)
        lines = manifest.describe(TemplateKind.COMPONENT)
        assert lines[0] == 'Button ----> A plain button ----> ["Icon"]'
        assert lines[1] == "Icon ----> SVG icon wrapper ----> []"

    @pytest.mark.unit
    def test_describe_projects_has_no_dependencies(self, sample_manifest_text):
        manifest = RemoteManifest.from_yaml(sample_manifest_text)
        assert manifest.describe(TemplateKind.PROJECT) == ["Starter ----> Vite + React starter"]


class TestContentsModels:
    @pytest.mark.unit
    def test_dir_entry_aliases(self):
        entry = RemoteDirEntry.model_validate(
            {
                "name": "src",
                "path": "templates/projects/Starter/src",
                "url": "https://api.github.com/repos/a/b/contents/templates/projects/Starter/src",
                "type": "dir",
                "sha": "abc",
                "size": 0,
                "html_url": "https://github.com/a/b/tree/main/src",
                "download_url": None,
                "_links": {"self": "s", "git": "g", "html": "h"},
            }
        )
        assert entry.file_type is EntryType.DIR
        assert entry.is_dir
        assert entry.links.self_url == "s"
        assert entry.download_url is None

    @pytest.mark.unit
    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            RemoteDirEntry.model_validate({"name": "x", "path": "x", "url": "u", "type": "weird"})

    @pytest.mark.unit
    def test_symlink_is_not_dir(self):
        entry = RemoteDirEntry.model_validate({"name": "x", "path": "x", "url": "u", "type": "symlink"})
        assert not entry.is_dir

    @pytest.mark.unit
    def test_content_defaults(self):
        content = RemoteContent.model_validate({"name": "a.txt", "path": "a.txt", "content": "aGk="})
        assert content.encoding == "base64"
        assert content.file_type is EntryType.FILE
