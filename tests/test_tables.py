"""
Tests for the Filament Table Generator
"""

from unittest import TestCase

from voyager_to_filament.domain import DataRow, DataType
from voyager_to_filament.php_codegen.tables import (
    build_table_columns,
    build_table_filters,
    generate_table_code,
    should_include_in_table,
)


TABLE_NAMESPACE = "App\\Filament\\Admin\\Resources\\PostResource\\Tables"


def make_row(field, field_type, **kwargs):
    kwargs.setdefault("browse", True)
    return DataRow(field=field, type=field_type, **kwargs)


class TestTableColumns(TestCase):
    """Test cases for build_table_columns"""

    def test_only_browsable_rows(self):
        rows = [
            make_row("title", "text"),
            make_row("body", "rich_text_box", browse=False),
            make_row("token", "hidden"),
            make_row("status", "select_dropdown"),
        ]
        assert not should_include_in_table(rows[1])
        assert not should_include_in_table(rows[2])
        assert [c.name for c in build_table_columns(rows)] == ["title", "status"]

    def test_text_column_is_truncated_with_tooltip(self):
        column = build_table_columns([make_row("title", "text", display_name="Title")])[0]
        assert column.column == "TextColumn"
        assert column.modifiers == [
            "label('Title')",
            "limit(50)",
            "tooltip(fn (Model $record): ?string => $record->{'title'})",
            "searchable()",
            "sortable()",
        ]

    def test_column_options_by_type(self):
        rows = [
            make_row("featured", "checkbox"),
            make_row("published_on", "date"),
            make_row("created_at", "timestamp"),
            make_row("image", "image"),
            make_row("body", "rich_text_box"),
            make_row("status", "select_dropdown"),
        ]
        columns = {c.name: c for c in build_table_columns(rows)}

        assert columns["featured"].column == "IconColumn"
        assert columns["featured"].modifiers[1:] == [
            "boolean()",
            "trueIcon('heroicon-o-check-badge')",
            "falseIcon('heroicon-o-x-circle')",
        ]
        assert columns["published_on"].modifiers[1:] == ["date()", "sortable()"]
        assert columns["created_at"].modifiers[1:] == ["dateTime()", "sortable()"]
        assert columns["image"].column == "ImageColumn"
        assert columns["image"].modifiers[1:] == ["circular()", "height(50)"]
        assert columns["body"].modifiers[1:] == ["html()", "limit(100)"]
        assert columns["status"].modifiers[1:] == ["searchable()", "sortable()"]

    def test_color_column(self):
        column = build_table_columns([make_row("brand_color", "color")])[0]
        assert column.column == "ColorColumn"


class TestTableFilters(TestCase):
    """Test cases for build_table_filters"""

    def test_filters_for_select_checkbox_and_dates(self):
        rows = [
            make_row("title", "text"),
            make_row("status", "select_dropdown", details={"options": {"DRAFT": "draft"}}),
            make_row("featured", "checkbox"),
            make_row("published_on", "date"),
            make_row("archived", "checkbox", browse=False),
            make_row("created_at", "datetime"),
        ]
        filters = build_table_filters(rows)

        assert [(f.filter, f.name) for f in filters] == [
            ("SelectFilter", "status"),
            ("TernaryFilter", "featured"),
            ("Filter", "published_on"),
        ]
        assert filters[0].modifiers == ["options(['DRAFT' => 'draft'])"]
        assert filters[1].modifiers == []

    def test_select_filter_with_list_options(self):
        filters = build_table_filters([make_row("status", "select_dropdown", details={"options": ["draft", "published"]})])
        assert filters[0].filter == "SelectFilter"
        assert filters[0].modifiers == ["options(['0' => 'draft', '1' => 'published'])"]


class TestGenerateTableCode(TestCase):
    """Test cases for the rendered table class"""

    def test_table_class(self):
        data_type = DataType(
            id=1,
            model_name="TCG\\Voyager\\Models\\Post",
            display_name_singular="Post",
            display_name_plural="Blog Posts",
        )
        rows = [
            make_row("title", "text", display_name="Title"),
            make_row("featured", "checkbox", display_name="Featured"),
        ]
        code = generate_table_code(data_type, rows, TABLE_NAMESPACE)

        assert "namespace App\\Filament\\Admin\\Resources\\PostResource\\Tables;" in code
        assert "class BlogPostsTable\n{" in code
        assert "public static function configure(Table $table): Table" in code
        assert (
            "                IconColumn::make('featured')\n"
            "                    ->label('Featured')\n"
            "                    ->boolean()\n"
        ) in code
        assert "                TernaryFilter::make('featured'),\n" in code
        assert "                ViewAction::make(),\n                EditAction::make(),\n                DeleteAction::make(),\n" in code
        assert "DeleteBulkAction::make()," in code
        assert "->defaultSort('created_at', 'desc');" in code
