"""
Test cases for the unified generator and the command line interface.
"""

import shutil
from pathlib import Path

import pytest

from cmstypes.cli import main
from cmstypes.emitter import MemorySink
from cmstypes.errors import CyclicSchemaError
from cmstypes.generator import UnifiedTypeGenerator
from cmstypes.walkers import SectionsWalker

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Project directory with both fixture catalogs as the working directory"""
    shutil.copy(FIXTURES / "content-types.json", tmp_path / "content-types.json")
    shutil.copy(FIXTURES / "sections.json", tmp_path / "sections.json")

    monkeypatch.chdir(tmp_path)
    for var in ["CMS_TYPES_SOURCE_DIR", "CMS_TYPES_OUTPUT_DIR", "ENVIRONMENT"]:
        monkeypatch.delenv(var, raising=False)

    return tmp_path


def package_dir(root, namespace):
    return root / "node_modules" / "@cms-types" / namespace


class ContentTypesReadOnlySink(MemorySink):
    """Memory sink that refuses writes into the content-types package"""

    def write_text(self, rel_path, content):
        if rel_path.startswith("@cms-types/content-types/"):
            raise PermissionError(f"Read-only: {rel_path}")
        super().write_text(rel_path, content)


class TestUnifiedTypeGenerator:
    """Test cases for UnifiedTypeGenerator with an in-memory sink"""

    def test_generate_all(self, workspace):
        sink = MemorySink()
        result = UnifiedTypeGenerator(workspace, sink).generate_all()

        assert result.content_types == 2
        assert result.sections == 3
        assert result.total == 5
        assert "@cms-types/content-types/PaginaSEOsiteMetadata.ts" in sink.files
        assert "@cms-types/sections/Section2.ts" in sink.files

    def test_directories_exist_before_generation(self, workspace):
        sink = MemorySink()
        UnifiedTypeGenerator(workspace, sink)
        assert sink.exists("@cms-types/content-types")
        assert sink.exists("@cms-types/sections")

    def test_malformed_sections_do_not_block_content_types(self, workspace):
        """Test that the two pipelines are independent"""
        (workspace / "sections.json").write_text("[{ broken", encoding="utf-8")
        sink = MemorySink()

        result = UnifiedTypeGenerator(workspace, sink).generate_all()

        assert result.content_types > 0
        assert result.sections == 0
        assert "@cms-types/content-types/index.ts" in sink.files
        assert "@cms-types/sections/index.ts" not in sink.files

    def test_missing_catalog_yields_zero(self, workspace):
        (workspace / "content-types.json").unlink()
        generator = UnifiedTypeGenerator(workspace, MemorySink())

        assert generator.generate_content_types_only() == 0
        assert generator.generate_sections_only() == 3

    def test_cyclic_schema_fails_only_its_catalog(self, workspace, monkeypatch):
        def walk_file(self, path):
            raise CyclicSchemaError("Cyclic schema detected at depth 3")

        monkeypatch.setattr(SectionsWalker, "walk_file", walk_file)
        result = UnifiedTypeGenerator(workspace, MemorySink()).generate_all()

        assert result.sections == 0
        assert result.content_types == 2

    def test_undecodable_content_types_do_not_block_sections(self, workspace):
        """Test that invalid UTF-8 in one catalog only fails that catalog"""
        (workspace / "content-types.json").write_bytes(b'[{"name": "\xff\xfe"}]')
        sink = MemorySink()

        result = UnifiedTypeGenerator(workspace, sink).generate_all()

        assert result.content_types == 0
        assert result.sections == 3
        assert "@cms-types/sections/index.ts" in sink.files

    def test_write_failure_fails_only_its_namespace(self, workspace):
        """Test that an error writing one package does not stop the other"""
        sink = ContentTypesReadOnlySink()

        result = UnifiedTypeGenerator(workspace, sink).generate_all()

        assert result.content_types == 0
        assert result.sections == 3
        assert "@cms-types/sections/package.json" in sink.files


class TestCli:
    """Test cases for the command line entry point"""

    def test_default_generates_both(self, workspace):
        assert main([]) == 0
        assert (package_dir(workspace, "content-types") / "PaginaSEOsiteMetadata.ts").exists()
        assert (package_dir(workspace, "sections") / "Carousel.ts").exists()
        assert (package_dir(workspace, "sections") / "package.json").exists()

    def test_all_flag(self, workspace):
        assert main(["-a"]) == 0
        assert (package_dir(workspace, "sections") / "index.d.ts").exists()

    def test_content_types_only(self, workspace):
        assert main(["--content-types"]) == 0
        assert (package_dir(workspace, "content-types") / "index.ts").exists()
        assert not (package_dir(workspace, "sections") / "index.ts").exists()

    def test_sections_only(self, workspace):
        assert main(["--sections"]) == 0
        assert (package_dir(workspace, "sections") / "index.ts").exists()
        assert not (package_dir(workspace, "content-types") / "index.ts").exists()

    def test_help_exits_zero_and_generates_nothing(self, workspace, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])

        assert exc_info.value.code == 0
        assert "--content-types" in capsys.readouterr().out
        assert not (workspace / "node_modules").exists()

    def test_short_help(self, workspace):
        with pytest.raises(SystemExit) as exc_info:
            main(["-h"])
        assert exc_info.value.code == 0

    def test_malformed_sections_fails_overall(self, workspace):
        """Test that a failed catalog is reflected in the exit status"""
        (workspace / "sections.json").write_text("not json", encoding="utf-8")

        assert main([]) == 1
        assert (package_dir(workspace, "content-types") / "index.ts").exists()
        assert not (package_dir(workspace, "sections") / "index.ts").exists()

    def test_requested_catalog_missing(self, workspace):
        (workspace / "sections.json").unlink()
        assert main(["--sections"]) == 1
        assert main(["--content-types"]) == 0

    def test_source_and_output_dirs(self, workspace, tmp_path_factory):
        out = tmp_path_factory.mktemp("out")
        source = tmp_path_factory.mktemp("src")
        shutil.copy(FIXTURES / "sections.json", source / "sections.json")

        assert main(["--sections", "--source-dir", str(source), "--output-dir", str(out)]) == 0
        assert (out / "@cms-types" / "sections" / "Carousel.ts").exists()

    def test_output_dir_from_environment(self, workspace, tmp_path_factory, monkeypatch):
        out = tmp_path_factory.mktemp("env_out")
        monkeypatch.setenv("CMS_TYPES_OUTPUT_DIR", str(out))

        assert main(["--content-types"]) == 0
        assert (out / "@cms-types" / "content-types" / "MenuMenuhotbaritems.ts").exists()

    def test_status_and_list(self, workspace):
        assert main(["--status"]) == 1
        assert main([]) == 0
        assert main(["--status"]) == 0
        assert main(["--list"]) == 0

    def test_regeneration_is_byte_identical(self, workspace):
        main([])
        first = {p: p.read_bytes() for p in (workspace / "node_modules").rglob("*") if p.is_file()}
        main([])
        second = {p: p.read_bytes() for p in (workspace / "node_modules").rglob("*") if p.is_file()}
        assert first == second
