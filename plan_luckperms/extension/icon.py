from enum import Enum

from pydantic import BaseModel, ConfigDict
from typing_extensions import Self


class Color(str, Enum):
    RED = "red"
    PINK = "pink"
    PURPLE = "purple"
    DEEP_PURPLE = "deep-purple"
    INDIGO = "indigo"
    BLUE = "blue"
    LIGHT_BLUE = "light-blue"
    CYAN = "cyan"
    TEAL = "teal"
    GREEN = "green"
    LIGHT_GREEN = "light-green"
    LIME = "lime"
    YELLOW = "yellow"
    AMBER = "amber"
    ORANGE = "orange"
    DEEP_ORANGE = "deep-orange"
    BROWN = "brown"
    GREY = "grey"
    BLUE_GREY = "blue-grey"
    BLACK = "black"
    NONE = "none"


class Family(str, Enum):
    """Font Awesome图标族"""

    SOLID = "fas"
    REGULAR = "far"
    BRAND = "fab"


class Icon(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    family: Family = Family.SOLID
    color: Color = Color.NONE

    @classmethod
    def called(
        cls, name: str, family: Family = Family.SOLID, color: Color = Color.NONE
    ) -> Self:
        return cls(name=name, family=family, color=color)
