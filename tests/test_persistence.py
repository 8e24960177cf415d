from pathlib import Path

from storehub.persistence.filesystem import FileStorage


def test_file_storage_creates_root(tmp_path: Path) -> None:
    root = tmp_path / "nested" / "data"
    storage = FileStorage(root=root)

    assert root.is_dir()
    assert storage.path == root / "system_data.json"
    assert not storage.exists()
    assert storage.read_json() is None


def test_file_storage_writes_json(tmp_path: Path) -> None:
    storage = FileStorage(root=tmp_path, file_name="snapshot.json")

    storage.write_json({"hello": "world"})

    assert storage.path.read_text(encoding="utf-8") == '{\n  "hello": "world"\n}'
    assert storage.read_json() == {"hello": "world"}
    assert not (tmp_path / "snapshot.json.tmp").exists()
