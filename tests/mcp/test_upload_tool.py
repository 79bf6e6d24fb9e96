"""Tests for the upload_3d_file tool."""

import base64
import json

import pytest

from storage3d.mcp.base import DecodeError
from storage3d.mcp.executor import ToolExecutor
from storage3d.mcp.registry import ToolRegistry
from storage3d.mcp.tools.upload import UploadModelTool, decode_file_data, guess_content_type
from storage3d.storage.keys import ID_ALPHABET, generate_id
from storage3d.storage.memory import InMemoryBlobStore


def _body(result):
    return json.loads(result.content[0].text)


@pytest.fixture
def upload_executor(memory_store, sequential_ids):
    registry = ToolRegistry()
    registry.register_tool(UploadModelTool(memory_store, id_generator=sequential_ids))
    return ToolExecutor(registry)


class TestDecodeFileData:
    @pytest.mark.parametrize(
        "encoded,expected_size",
        [("AAAA", 3), ("AAA=", 2), ("AA==", 1), ("Z2xURgIAAAA=", 8)],
    )
    def test_decoded_length(self, encoded, expected_size):
        """Decoded size is floor(len * 3 / 4) minus padding."""
        assert len(decode_file_data(encoded)) == expected_size

    def test_data_url_prefix_is_stripped(self):
        assert decode_file_data("data:model/gltf-binary;base64,Z2xURg==") == b"glTF"

    def test_embedded_whitespace_is_ignored(self):
        assert decode_file_data("Z2xU\nRg==\n") == b"glTF"

    @pytest.mark.parametrize("encoded", ["not base64!!!", "AAA", "@@@@"])
    def test_invalid_input_raises(self, encoded):
        with pytest.raises(DecodeError) as excinfo:
            decode_file_data(encoded)

        assert excinfo.value.field == "fileData"
        assert excinfo.value.code == "decode_error"

    @pytest.mark.parametrize("encoded", ["", "   ", "data:model/gltf-binary;base64,"])
    def test_empty_input_is_zero_bytes(self, encoded):
        assert decode_file_data(encoded) == b""

    def test_non_base64_data_url_raises(self):
        with pytest.raises(DecodeError):
            decode_file_data("data:text/plain,hello")


class TestGuessContentType:
    @pytest.mark.parametrize(
        "file_name,expected",
        [
            ("model.glb", "model/gltf-binary"),
            ("SCENE.GLTF", "model/gltf+json"),
            ("part.stl", "model/stl"),
            ("notes.txt", "application/octet-stream"),
            ("no_extension", "application/octet-stream"),
        ],
    )
    def test_extension_mapping(self, file_name, expected):
        assert guess_content_type(file_name) == expected


class TestUploadModelTool:
    @pytest.mark.asyncio
    async def test_stores_bytes_under_generated_key(self, upload_executor, memory_store):
        data = b"glTF\x02\x00\x00\x00binary-body"
        result = await upload_executor.execute(
            "upload_3d_file",
            {"fileName": "robot.glb", "fileData": base64.b64encode(data).decode("ascii")},
        )

        body = _body(result)
        assert result.is_error is False
        assert body["success"] is True
        assert body["key"] == "3d-models/id0000001-robot.glb"
        assert body["id"] == "id0000001"
        assert body["url"] == "https://cdn.test/3d-models/id0000001-robot.glb"
        assert body["downloadUrl"] == body["url"]
        assert body["size"] == len(data)
        assert body["contentType"] == "model/gltf-binary"
        assert body["metadata"] == {}
        assert memory_store.get(body["key"]) == data
        assert memory_store.content_type(body["key"]) == "model/gltf-binary"

    @pytest.mark.asyncio
    async def test_explicit_content_type_and_metadata(self, upload_executor, memory_store):
        result = await upload_executor.execute(
            "upload_3d_file",
            {
                "fileName": "scene.bin",
                "fileData": "AAAA",
                "contentType": "model/gltf+json",
                "metadata": {"title": "Scene", "tags": ["demo"]},
            },
        )

        body = _body(result)
        assert body["contentType"] == "model/gltf+json"
        assert body["metadata"] == {"title": "Scene", "tags": ["demo"]}
        assert memory_store.content_type(body["key"]) == "model/gltf+json"

    @pytest.mark.asyncio
    async def test_same_file_name_gets_distinct_keys(self, upload_executor, memory_store):
        arguments = {"fileName": "model.glb", "fileData": "AAAA"}

        first = _body(await upload_executor.execute("upload_3d_file", arguments))
        second = _body(await upload_executor.execute("upload_3d_file", arguments))

        assert first["key"] != second["key"]
        assert len(memory_store.keys()) == 2

    @pytest.mark.asyncio
    async def test_path_components_are_removed_from_key(self, upload_executor):
        body = _body(
            await upload_executor.execute(
                "upload_3d_file",
                {"fileName": "../../etc/model.glb", "fileData": "AAAA"},
            )
        )

        assert body["key"] == "3d-models/id0000001-model.glb"

    @pytest.mark.asyncio
    async def test_file_name_is_kept_verbatim_in_key(self, upload_executor, memory_store):
        body = _body(
            await upload_executor.execute(
                "upload_3d_file",
                {"fileName": "模型 final.glb", "fileData": "AAAA"},
            )
        )

        assert body["key"] == "3d-models/id0000001-模型 final.glb"
        assert memory_store.get("3d-models/id0000001-模型 final.glb") == b"\x00\x00\x00"

    @pytest.mark.asyncio
    async def test_empty_file_data_uploads_empty_object(self, upload_executor, memory_store):
        result = await upload_executor.execute("upload_3d_file", {"fileName": "empty.glb", "fileData": ""})

        body = _body(result)
        assert result.is_error is False
        assert body["success"] is True
        assert body["size"] == 0
        assert memory_store.get(body["key"]) == b""

    @pytest.mark.asyncio
    async def test_invalid_base64_is_tool_error(self, upload_executor, memory_store):
        result = await upload_executor.execute(
            "upload_3d_file",
            {"fileName": "model.glb", "fileData": "not base64!!!"},
        )

        body = _body(result)
        assert result.is_error is True
        assert body["success"] is False
        assert body["code"] == "decode_error"
        assert body["details"] == {"field": "fileData"}
        assert memory_store.keys() == []

    @pytest.mark.asyncio
    async def test_empty_file_name_is_rejected(self, upload_executor):
        result = await upload_executor.execute("upload_3d_file", {"fileName": "", "fileData": "AAAA"})

        assert result.is_error is True
        assert "fileName" in _body(result)["error"]

    @pytest.mark.asyncio
    async def test_default_generator_never_repeats(self):
        """Ten thousand uploads of the same file land under distinct keys."""
        store = InMemoryBlobStore()
        tool = UploadModelTool(store)
        payload = tool.input_model(file_name="model.glb", file_data="AAAA")

        keys = set()
        for _ in range(10_000):
            keys.add((await tool(payload))["key"])

        assert len(keys) == 10_000
        assert len(store.keys()) == 10_000


def test_generated_ids_use_url_safe_alphabet():
    ids = {generate_id() for _ in range(1000)}

    assert len(ids) == 1000
    for unique_id in ids:
        assert len(unique_id) == 10
        assert set(unique_id) <= set(ID_ALPHABET)
