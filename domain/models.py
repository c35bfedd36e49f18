from typing import Any

from pydantic import BaseModel, ConfigDict, Field


WeekNumber = int | str


class MenuError(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str


class Day(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: str
    dishes: tuple[str, ...] = ()

    def with_dish(self, dish: str) -> "Day":
        return self.model_copy(update={"dishes": (*self.dishes, dish)})


class Menu(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    week_number: WeekNumber | None = Field(default=None, alias="weekNumber")
    days: tuple[Day, ...] = ()
    error: MenuError | None = None

    @classmethod
    def failed(cls, week_number: WeekNumber | None, message: str) -> "Menu":
        return cls(week_number=week_number, error=MenuError(message=message))

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        if self.error is not None:
            # Error bodies always carry the requested week, even when unknown.
            data.setdefault("weekNumber", None)
        return data

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)

    @classmethod
    def from_json(cls, data: str | bytes) -> "Menu":
        return cls.model_validate_json(data)
