"""End-to-end tests for synthesize()."""

from pathlib import Path

import pytest

from wikihome.config import Settings
from wikihome.core.errors import HomeFileError, PreconditionError, RootDirectoryError
from wikihome.core.synthesizer import check_preconditions, synthesize


class TestPreconditions:
    def test_valid_root(self, wiki):
        assert check_preconditions(wiki, "Home.md") == wiki / "Home.md"

    def test_missing_root(self):
        with pytest.raises(RootDirectoryError, match="/does/not/exist"):
            check_preconditions(Path("/does/not/exist"), "Home.md")

    def test_root_is_a_file(self, tmp_path):
        target = tmp_path / "file.md"
        target.write_text("x")
        with pytest.raises(RootDirectoryError):
            check_preconditions(target, "Home.md")

    def test_missing_home_file(self, tmp_path):
        with pytest.raises(HomeFileError, match="Home.md"):
            check_preconditions(tmp_path, "Home.md")

    def test_unlistable_root(self, wiki, monkeypatch):
        def listdir(path):
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr("wikihome.core.synthesizer.os.listdir", listdir)
        with pytest.raises(RootDirectoryError) as excinfo:
            check_preconditions(wiki, "Home.md")
        assert isinstance(excinfo.value.__cause__, PermissionError)

    def test_home_file_is_a_directory(self, tmp_path):
        (tmp_path / "Home.md").mkdir()
        with pytest.raises(HomeFileError):
            check_preconditions(tmp_path, "Home.md")

    def test_errors_share_base(self):
        assert issubclass(RootDirectoryError, PreconditionError)
        assert issubclass(HomeFileError, PreconditionError)


class TestSynthesize:
    @pytest.mark.asyncio
    async def test_end_to_end(self, wiki, wiki_settings, write_file):
        write_file(wiki, "guide.md")
        write_file(wiki, "api.md", "# API\n")
        write_file(wiki, "api/intro.md")

        report = await synthesize(wiki, settings=wiki_settings)

        assert report.ok
        home = (wiki / "Home.md").read_text(encoding="utf-8")
        assert "[Guide](guide.md)" in home
        assert "# [Api](api)" in home
        assert "[Intro](api/intro)" in home
        assert "api.md" not in home
        assert (wiki / "api.md").read_text(encoding="utf-8") == "\n[Intro](api/intro)"

    @pytest.mark.asyncio
    async def test_accepts_string_path(self, wiki, wiki_settings, write_file):
        write_file(wiki, "guide.md")
        report = await synthesize(str(wiki), settings=wiki_settings)
        assert report.written == [wiki / "Home.md"]

    @pytest.mark.asyncio
    async def test_missing_root_writes_nothing(self, tmp_path, wiki_settings):
        with pytest.raises(RootDirectoryError, match="/does/not/exist"):
            await synthesize("/does/not/exist", settings=wiki_settings)
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_missing_home_file(self, tmp_path, wiki_settings, write_file):
        page = write_file(tmp_path, "guide.md", "untouched")
        with pytest.raises(HomeFileError):
            await synthesize(tmp_path, settings=wiki_settings)
        assert page.read_text() == "untouched"

    @pytest.mark.asyncio
    async def test_custom_home_file(self, tmp_path, write_file):
        write_file(tmp_path, "index.md", "old")
        write_file(tmp_path, "guide.md")
        settings = Settings(_env_file=None, home_file="index.md")

        report = await synthesize(tmp_path, settings=settings)

        assert report.ok
        assert (tmp_path / "index.md").read_text() == "\n[Guide](guide.md)"

    @pytest.mark.asyncio
    async def test_uploads_excluded_only_at_root(self, wiki, wiki_settings, write_file):
        write_file(wiki, "uploads/readme.md")
        write_file(wiki, "docs/index.md")
        write_file(wiki, "docs/uploads/readme.md")

        await synthesize(wiki, settings=wiki_settings)

        home = (wiki / "Home.md").read_text()
        assert "[Readme](docs/uploads/readme)" in home
        assert "(uploads" not in home

    @pytest.mark.asyncio
    async def test_idempotent(self, wiki, wiki_settings, write_file):
        write_file(wiki, "guide.md")
        write_file(wiki, "api.md")
        write_file(wiki, "api/intro.md")
        write_file(wiki, "api/v2/changes.md")
        write_file(wiki, "doc10.md")
        write_file(wiki, "doc2.md")

        await synthesize(wiki, settings=wiki_settings)
        first = (wiki / "Home.md").read_bytes(), (wiki / "api.md").read_bytes()
        await synthesize(wiki, settings=wiki_settings)
        second = (wiki / "Home.md").read_bytes(), (wiki / "api.md").read_bytes()

        assert first == second

    @pytest.mark.asyncio
    async def test_check_mode(self, wiki, wiki_settings, write_file):
        write_file(wiki, "guide.md")

        report = await synthesize(wiki, settings=wiki_settings, check=True)
        assert report.stale == [wiki / "Home.md"]
        assert not report.ok
        assert (wiki / "Home.md").read_text() == "old home content\n"

        await synthesize(wiki, settings=wiki_settings)
        report = await synthesize(wiki, settings=wiki_settings, check=True)
        assert report.ok

    @pytest.mark.asyncio
    async def test_symlinked_home_file(self, tmp_path, wiki_settings, write_file):
        root = tmp_path / "w"
        real = write_file(root, "real_home.md", "old")
        (root / "Home.md").symlink_to(real)
        write_file(root, "guide.md")

        report = await synthesize(root, settings=wiki_settings)

        assert report.ok
        assert (root / "Home.md").is_symlink()
        assert "[Guide](guide.md)" in real.read_text()
