"""
Tests for the Filament resource and page generators
"""

import tempfile
from pathlib import Path
from unittest import TestCase

from voyager_to_filament.domain import DataRow, DataType
from voyager_to_filament.exceptions import ResourceGenerationError
from voyager_to_filament.php_codegen.base import ArtifactWriter, php_value, render_declaration
from voyager_to_filament.php_codegen.code_generator import ResourceCodeGenerator
from voyager_to_filament.php_codegen.pages import generate_page_code, generate_pages_code
from voyager_to_filament.php_codegen.resources import (
    generate_resource_code,
    navigation_group,
    navigation_icon,
    page_routes,
)


RESOURCES_NAMESPACE = "App\\Filament\\Admin\\Resources"

POST = DataType(
    id=1,
    model_name="TCG\\Voyager\\Models\\Post",
    name="posts",
    slug="posts",
    display_name_singular="Post",
    display_name_plural="Posts",
    icon="voyager-news",
)


class TestPhpHelpers(TestCase):
    """Test cases for the PHP literal helpers"""

    def test_php_value(self):
        assert php_value(3) == "3"
        assert php_value("12") == "12"
        assert php_value(" 1.5 ") == "1.5"
        assert php_value(True) == "true"
        assert php_value("abc") == "'abc'"
        assert php_value("nan") == "'nan'"

    def test_render_declaration(self):
        assert render_declaration("Hidden", "token", [], 4) == "    Hidden::make('token'),"
        assert render_declaration("TextInput", "title", ["label('Title')", "required()"], 0) == (
            "TextInput::make('title')\n    ->label('Title')\n    ->required(),"
        )


class TestNavigation(TestCase):
    """Test cases for navigation icon and group lookups"""

    def test_icon_map(self):
        assert navigation_icon(POST) == "heroicon-o-newspaper"

    def test_missing_icon_uses_voyager_default(self):
        assert navigation_icon(DataType(id=9, model_name="App\\Models\\Tag")) == "heroicon-o-list-bullet"

    def test_unmapped_icon(self):
        assert navigation_icon(DataType(id=9, model_name="App\\Models\\Tag", icon="voyager-rocket")) == (
            "heroicon-o-rectangle-stack"
        )

    def test_group_map(self):
        assert navigation_group(POST) == "Content"
        assert navigation_group(DataType(id=2, model_name="TCG\\Voyager\\Models\\Role")) == "User Management"
        assert navigation_group(DataType(id=9, model_name="App\\Models\\Invoice")) == "General"


class TestGenerateResourceCode(TestCase):
    """Test cases for the rendered resource class"""

    def test_resource_class(self):
        code = generate_resource_code(POST, RESOURCES_NAMESPACE)

        assert "namespace App\\Filament\\Admin\\Resources;" in code
        assert "use App\\Models\\Post;" in code
        assert "use App\\Filament\\Admin\\Resources\\PostResource\\Schemas\\PostForm;" in code
        assert "use App\\Filament\\Admin\\Resources\\PostResource\\Tables\\PostsTable;" in code
        assert "class PostResource extends Resource" in code
        assert "protected static ?string $model = Post::class;" in code
        assert "$navigationIcon = 'heroicon-o-newspaper';" in code
        assert "$navigationGroup = 'Content';" in code
        assert "$recordTitleAttribute = 'name';" in code
        assert "$modelLabel = 'Post';" in code
        assert "$pluralModelLabel = 'Posts';" in code
        assert "return PostForm::configure($schema);" in code
        assert "return PostsTable::configure($table);" in code

    def test_pages_registered(self):
        code = generate_resource_code(POST, RESOURCES_NAMESPACE)
        assert (
            "            'index' => ListPost::route('/'),\n"
            "            'create' => CreatePost::route('/create'),\n"
            "            'view' => ViewPost::route('/{record}'),\n"
            "            'edit' => EditPost::route('/{record}/edit'),\n"
        ) in code

    def test_page_routes(self):
        assert page_routes("Post")[0] == ("index", "ListPost", "/")
        assert [page for _, page, _ in page_routes("Post")] == ["ListPost", "CreatePost", "ViewPost", "EditPost"]


class TestGeneratePageCode(TestCase):
    """Test cases for the rendered page classes"""

    def test_list_page(self):
        code = generate_page_code(POST, "List", RESOURCES_NAMESPACE)
        assert "namespace App\\Filament\\Admin\\Resources\\PostResource\\Pages;" in code
        assert "use App\\Filament\\Admin\\Resources\\PostResource;" in code
        assert "use Filament\\Resources\\Pages\\ListRecords;" in code
        assert "class ListPost extends ListRecords" in code
        assert "protected static string $resource = PostResource::class;" in code
        assert "Actions\\CreateAction::make()," in code

    def test_create_page_has_no_header_actions(self):
        code = generate_page_code(POST, "Create", RESOURCES_NAMESPACE)
        assert "class CreatePost extends CreateRecord" in code
        assert "getHeaderActions" not in code

    def test_edit_page_actions(self):
        code = generate_page_code(POST, "Edit", RESOURCES_NAMESPACE)
        assert "Actions\\ViewAction::make(),\n            Actions\\DeleteAction::make()," in code

    def test_all_pages(self):
        pages = generate_pages_code(POST, RESOURCES_NAMESPACE)
        assert list(pages) == ["ListPost", "CreatePost", "ViewPost", "EditPost"]
        assert "extends ViewRecord" in pages["ViewPost"]


class TestResourceCodeGenerator(TestCase):
    """Test cases for artifact layout and writing"""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.project_root = Path(self._tmp.name)
        self.generator = ResourceCodeGenerator(self.project_root)
        self.rows = [DataRow(field="title", type="text", display_name="Title", browse=True, add=True, edit=True)]

    def tearDown(self):
        self._tmp.cleanup()

    def test_artifact_paths(self):
        resources_dir = self.project_root / "app" / "Filament" / "Admin" / "Resources"
        artifacts = self.generator.build_artifacts(POST, self.rows)

        assert [a.path for a in artifacts] == [
            resources_dir / "PostResource.php",
            resources_dir / "PostResource" / "Schemas" / "PostForm.php",
            resources_dir / "PostResource" / "Tables" / "PostsTable.php",
            resources_dir / "PostResource" / "Pages" / "ListPost.php",
            resources_dir / "PostResource" / "Pages" / "CreatePost.php",
            resources_dir / "PostResource" / "Pages" / "ViewPost.php",
            resources_dir / "PostResource" / "Pages" / "EditPost.php",
        ]
        assert [a.component for a in artifacts] == ["resource", "form", "table"] + ["page"] * 4

    def test_panel_directory(self):
        generator = ResourceCodeGenerator(self.project_root, panel="back-office")
        assert generator.resources_dir == self.project_root / "app" / "Filament" / "BackOffice" / "Resources"
        assert generator.namespace == "App\\Filament\\BackOffice\\Resources"

    def test_generate_writes_and_skips(self):
        written = self.generator.generate(POST, self.rows, ArtifactWriter())
        assert len(written) == 7
        assert all(a.path.is_file() for a in written)

        writer = ArtifactWriter()
        assert self.generator.generate(POST, self.rows, writer) == []
        assert len(writer.skipped) == 7

    def test_force_overwrites(self):
        form_path = self.generator.form_path(POST)
        self.generator.generate(POST, self.rows, ArtifactWriter())
        form_path.write_text("customised", encoding="utf-8")

        written = self.generator.generate(POST, self.rows, ArtifactWriter(force=True))

        assert len(written) == 7
        assert "class PostForm" in form_path.read_text(encoding="utf-8")

    def test_render_failure_names_component(self):
        broken = DataRow(field="title", type="text", details=None, add=True)

        with self.assertRaises(ResourceGenerationError) as ctx:
            self.generator.build_artifacts(POST, [broken])

        assert ctx.exception.resource == "PostResource"
        assert ctx.exception.context["component"] == "form"
