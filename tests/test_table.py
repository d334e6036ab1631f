import pytest

from plan_luckperms.extension import Color, Icon, Table


class TestTableFactory:
    def test_two_columns(self):
        table = (
            Table.builder()
            .column_one("Track", Icon.called("ellipsis-h"))
            .column_two("Size", Icon.called("list"))
            .color(Color.ORANGE)
            .add_row("staff", 3)
            .add_row("donor", None)
            .build()
        )
        assert table.column_names == ["Track", "Size"]
        assert table.rows == (("staff", "3"), ("donor", None))
        assert table.color == Color.ORANGE
        assert table.columns[0].icon == Icon(name="ellipsis-h")

    def test_single_column(self):
        table = (
            Table.builder()
            .column_one("Permission", Icon.called("object-group"))
            .add_row("essentials.fly")
            .build()
        )
        assert table.column_names == ["Permission"]
        assert table.rows == (("essentials.fly",),)

    def test_too_many_values(self):
        factory = Table.builder().column_one("Permission", Icon.called("object-group"))
        with pytest.raises(ValueError):
            factory.add_row("a", "b")

    def test_first_column_required(self):
        with pytest.raises(ValueError):
            Table.builder().build()

    def test_empty_table(self):
        table = Table.builder().column_one("Meta", Icon.called("info-circle")).build()
        assert table.is_empty()
        assert table.rows == ()
