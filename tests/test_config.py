from pathlib import Path

import pytest

from dictionary_resources.config import DEFAULT_CONFIG, Config, load_config
from dictionary_resources.dirs import ProjectDirs
from dictionary_resources.errors import InitConfigError, LoadConfigError, ReadConfigError


def test_first_run_materializes_default_config(tmp_path):
    dirs = ProjectDirs.under(tmp_path)
    config = load_config(dirs)

    assert dirs.config_file.read_text(encoding="utf-8") == DEFAULT_CONFIG
    assert Path("/usr/share/hunspell") in config.dictionaries.directories
    fr = config.source_for("fr_FR")
    assert fr is not None
    assert fr.aff.endswith("fr.aff") and fr.dic.endswith("fr.dic")
    assert config.source_for("xx_XX") is None


def test_existing_config_is_not_overwritten(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        '[dictionaries]\ndirectories = ["/b", "/a", "~/dicts"]\n\n'
        '[dictionaries.sources.fr_FR]\naff = "https://example/fr.aff"\ndic = "https://example/fr.dic"\n',
        encoding="utf-8",
    )

    config = load_config(path=path)

    assert config.dictionaries.directories == (Path("/b"), Path("/a"), Path("~/dicts").expanduser())
    assert list(config.dictionaries.sources) == ["fr_FR"]
    assert config.source_for("fr_FR").dic == "https://example/fr.dic"
    assert "/b" in path.read_text(encoding="utf-8")


def test_invalid_toml_is_a_load_error(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[dictionaries\ndirectories = [", encoding="utf-8")
    with pytest.raises(LoadConfigError):
        load_config(path=path)


@pytest.mark.parametrize(
    "content",
    [
        "title = 'no dictionaries table'\n",
        '[dictionaries]\ndirectories = "/usr/share/hunspell"\n',
        '[dictionaries]\ndirectories = []\n[dictionaries.sources.fr_FR]\naff = "https://example/fr.aff"\n',
        '[dictionaries]\ndirectories = ["/usr/share/hunspell"]\n',
        '[dictionaries.sources.fr_FR]\naff = "https://example/fr.aff"\ndic = "https://example/fr.dic"\n',
    ],
)
def test_schema_violations_are_load_errors(tmp_path, content):
    path = tmp_path / "config.toml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(LoadConfigError):
        load_config(path=path)


def test_unreadable_config_is_a_read_error(tmp_path):
    path = tmp_path / "config.toml"
    path.mkdir()
    with pytest.raises(ReadConfigError):
        load_config(path=path)


def test_uncreatable_config_is_an_init_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    with pytest.raises(InitConfigError):
        load_config(path=blocker / "rspell" / "config.toml")


def test_error_kinds_are_distinct():
    kinds = (InitConfigError, ReadConfigError, LoadConfigError)
    for kind in kinds:
        assert [other for other in kinds if issubclass(kind, other)] == [kind]


def test_sources_are_read_only():
    config = Config.from_dict({"dictionaries": {"directories": [], "sources": {}}})
    with pytest.raises(TypeError):
        config.dictionaries.sources["fr_FR"] = None
