from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Self

from .icon import Color, Icon

Row = tuple[str | None, ...]


class TableColumn(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    icon: Icon


class Table(BaseModel):
    """
    表格数据

    仅用于展示的值对象：最多两列、若干行文本。每次调用时构建并返回，不会被保存。
    """

    model_config = ConfigDict(frozen=True)

    columns: tuple[TableColumn, ...]
    rows: tuple[Row, ...] = ()
    color: Color = Color.NONE

    @staticmethod
    def builder() -> "TableFactory":
        return TableFactory()

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]

    def is_empty(self) -> bool:
        return not self.rows


class TableFactory:
    """
    表格构建器

    用法:
        table = (
            Table.builder()
            .column_one("Track", Icon.called("ellipsis-h"))
            .column_two("Group", Icon.called("users-cog"))
        )
        table.add_row("staff", "admin")
        table.build()
    """

    def __init__(self):
        self._columns: list[TableColumn | None] = [None, None]
        self._rows: list[Row] = []
        self._color: Color = Color.NONE

    def column_one(self, name: str, icon: Icon) -> Self:
        self._columns[0] = TableColumn(name=name, icon=icon)
        return self

    def column_two(self, name: str, icon: Icon) -> Self:
        self._columns[1] = TableColumn(name=name, icon=icon)
        return self

    def color(self, color: Color) -> Self:
        self._color = color
        return self

    @property
    def column_count(self) -> int:
        return sum(1 for column in self._columns if column is not None)

    def add_row(self, *values: Any) -> Self:
        """
        添加一行

        所有值都会被转换为文本，None保持为None。

        Args:
            *values (Any): 行内各列的值

        Raises:
            ValueError: 当值的数量超过已声明的列数时
        """
        if len(values) > self.column_count:
            raise ValueError(
                f"Row has {len(values)} values but the table has {self.column_count} columns"
            )
        self._rows.append(tuple(None if v is None else str(v) for v in values))
        return self

    def build(self) -> Table:
        if self._columns[0] is None:
            raise ValueError("Table needs at least the first column")
        return Table(
            columns=tuple(column for column in self._columns if column is not None),
            rows=tuple(self._rows),
            color=self._color,
        )
