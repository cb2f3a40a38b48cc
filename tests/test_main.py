import os

from wiki_indexor.index_builder.meta_writer import read_meta
from wiki_indexor.main import main


def test_missing_argument_prints_usage(capsys):
    assert main([]) == 1
    assert capsys.readouterr().out.strip() == "usage: wiki-indexor <dump.xml.bz2>"


def test_builds_into_default_output_dir(make_dump, tmp_path, monkeypatch, capsys):
    dump = make_dump([("Cat", 1, 0, "cat cat dog")])
    monkeypatch.chdir(tmp_path)

    assert main([dump]) == 0
    assert "done: 1 docs" in capsys.readouterr().out
    assert read_meta(os.path.join("public", "index", "meta.json"))["docCount"] == 1
    assert os.path.exists(os.path.join("public", "docs", "shard_00001.bin"))


def test_unreadable_dump_is_fatal(tmp_path, monkeypatch, caplog):
    monkeypatch.chdir(tmp_path)

    assert main([str(tmp_path / "missing.xml.bz2")]) == 2
    assert "Index build failed" in caplog.text
    assert not os.path.exists(os.path.join("public", "index", "meta.json"))
