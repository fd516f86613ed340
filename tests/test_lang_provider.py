from pathlib import Path

import pytest

from dictionary_resources.config import Config
from dictionary_resources.dirs import ProjectDirs
from dictionary_resources.errors import FileCachingError, NoDictionarySourceError, RemoveDictionaryError
from dictionary_resources.providers import LangProvider

AFF_URL = "https://example/fr.aff"
DIC_URL = "https://example/fr.dic"


class MappingFetcher:
    """Serves fixed content per URL and records every request."""

    def __init__(self, contents, failing=()):
        self.contents = contents
        self.failing = set(failing)
        self.calls = []

    def fetch(self, url, destination):
        self.calls.append(url)
        if url in self.failing:
            raise FileCachingError(f"cannot download {url}")
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(self.contents[url])


def make_config(directories=(), sources=None):
    return Config.from_dict(
        {
            "dictionaries": {
                "directories": [str(d) for d in directories],
                "sources": sources if sources is not None else {"fr_FR": {"aff": AFF_URL, "dic": DIC_URL}},
            }
        }
    )


@pytest.fixture
def dirs(tmp_path):
    return ProjectDirs.under(tmp_path)


def test_final_paths_are_deterministic(dirs):
    provider = LangProvider("fr_FR", make_config(), dirs=dirs)
    assert provider.aff == dirs.data_dir / "dictionaries" / "fr_FR.aff"
    assert provider.dic == dirs.data_dir / "dictionaries" / "fr_FR.dic"


def test_on_disk_lists_matches_in_configured_order(tmp_path, dirs):
    directories = [tmp_path / name for name in ("a", "b", "c")]
    for directory in directories:
        directory.mkdir()
    (directories[2] / "fr_FR.aff").write_text("c")
    (directories[0] / "fr_FR.aff").write_text("a")
    provider = LangProvider("fr_FR", make_config(directories), dirs=dirs)

    assert provider.aff_on_disk() == [directories[0] / "fr_FR.aff", directories[2] / "fr_FR.aff"]
    assert provider.dic_on_disk() == []


def test_unknown_kind_is_rejected(dirs):
    provider = LangProvider("fr_FR", make_config(), dirs=dirs)
    with pytest.raises(ValueError):
        provider.on_disk("txt")


def test_language_tag():
    config = make_config()
    dirs = ProjectDirs.under("/nonexistent")
    assert LangProvider("fr_FR", config, dirs=dirs).language_tag == "fr-FR"
    assert LangProvider("??", config, dirs=dirs).language_tag is None


def test_ensure_data_fetches_both_files_end_to_end(dirs):
    fetcher = MappingFetcher(
        {
            AFF_URL: "SET ISO8859-1\nTRY àé\n".encode("latin-1"),
            DIC_URL: "2\nété\nçà\n".encode("utf-8"),
        }
    )
    provider = LangProvider("fr_FR", make_config(), dirs=dirs, fetcher=fetcher)

    provider.ensure_data()

    assert fetcher.calls == [AFF_URL, DIC_URL]
    assert provider.aff.read_text(encoding="utf-8") == "SET UTF-8\nTRY àé\n"
    assert provider.dic.read_text(encoding="utf-8") == "2\nété\nçà\n"
    assert list(dirs.cache_dir.iterdir()) == []

    provider.ensure_data()
    assert fetcher.calls == [AFF_URL, DIC_URL]


def test_ensure_data_stops_at_first_failure(dirs):
    fetcher = MappingFetcher({DIC_URL: b"1\nmot\n"}, failing={AFF_URL})
    provider = LangProvider("fr_FR", make_config(), dirs=dirs, fetcher=fetcher)

    with pytest.raises(FileCachingError):
        provider.ensure_data()

    assert fetcher.calls == [AFF_URL]
    assert not provider.dic.exists()


def test_ensure_data_without_source(dirs):
    fetcher = MappingFetcher({})
    provider = LangProvider("xx_XX", make_config(), dirs=dirs, fetcher=fetcher)

    with pytest.raises(NoDictionarySourceError):
        provider.ensure_data()

    assert fetcher.calls == []
    assert not dirs.cache_dir.exists()
    assert not provider.aff.exists()


def test_remove_data_is_idempotent(dirs):
    fetcher = MappingFetcher({AFF_URL: b"TRY a\n", DIC_URL: b"1\na\n"})
    provider = LangProvider("fr_FR", make_config(), dirs=dirs, fetcher=fetcher)

    provider.remove_data()
    provider.ensure_data()
    provider.remove_data()
    provider.remove_data()

    assert not provider.aff.exists()
    assert not provider.dic.exists()


def test_remove_data_reports_undeletable_file(dirs, monkeypatch):
    provider = LangProvider("fr_FR", make_config(), dirs=dirs)
    provider.aff.parent.mkdir(parents=True)
    provider.aff.write_text("TRY a\n")
    original_unlink = Path.unlink

    def unlink(self, *args, **kwargs):
        if self == provider.aff:
            raise PermissionError("busy")
        return original_unlink(self, *args, **kwargs)

    monkeypatch.setattr(Path, "unlink", unlink)

    with pytest.raises(RemoveDictionaryError):
        provider.remove_data()

